"""JSON logging for the planner.

Every entry is one JSON object:
  {timestamp, level, logger, service, event, ...bound fields}

Records are handed to a queue and written by a listener thread, so pipeline
calls never block on stdout. ``planning_context`` binds the task being
planned so every event inside a session carries its ``task_id``.
"""

from __future__ import annotations

import logging
import queue
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from logging.handlers import QueueHandler, QueueListener
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from taskorg.config import PlannerSettings

_QUEUE_SIZE = 10_000

_listener: QueueListener | None = None


def setup_logging(settings: PlannerSettings | None = None, *, stream: TextIO | None = None) -> None:
    """Route stdlib and structlog output through a queue to *stream* as JSON.

    Service name and level come from *settings* (``TASKORG_LOG_SERVICE`` and
    ``TASKORG_LOG_LEVEL`` by default). Calling it again stops the previous
    listener first.
    """
    if settings is None:
        from taskorg.config import PlannerSettings

        settings = PlannerSettings()
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)

    stop_logging()
    records: queue.Queue[logging.LogRecord] = queue.Queue(maxsize=_QUEUE_SIZE)
    output = logging.StreamHandler(stream or sys.stdout)
    output.setLevel(level)
    _start_listener(records, output)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(QueueHandler(records))
    root.setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _stamp_service(settings.log_service),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def stop_logging() -> None:
    """Drain the queue and stop the listener. No-op when logging is not running."""
    global _listener
    if _listener is None:
        return
    _listener.stop()
    _listener = None


@contextmanager
def planning_context(task_id: str, organization_id: str | None = None) -> Iterator[None]:
    """Bind *task_id* (and the organization, when known) to every event in the block."""
    fields: dict[str, str] = {"task_id": task_id}
    if organization_id is not None:
        fields["organization_id"] = organization_id
    with structlog.contextvars.bound_contextvars(**fields):
        yield


def _start_listener(records: queue.Queue[logging.LogRecord], handler: logging.Handler) -> None:
    global _listener
    _listener = QueueListener(records, handler, respect_handler_level=True)
    _listener.start()


def _stamp_service(service: str) -> structlog.types.Processor:
    def processor(
        _logger: structlog.types.WrappedLogger,
        _method_name: str,
        event_dict: structlog.types.EventDict,
    ) -> structlog.types.EventDict:
        event_dict.setdefault("service", service)
        return event_dict

    return processor
