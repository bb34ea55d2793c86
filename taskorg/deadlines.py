"""Deadline arithmetic for subtasks and free-text deadline answers."""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta

import structlog

from taskorg.clock import Clock, resolve_clock
from taskorg.constants import DEADLINE_SPACING_DAYS, DEFAULT_DEADLINE_DAYS
from taskorg.errors import ValidationError

logger = structlog.get_logger()

_MONTH_DAY = re.compile(r"(\d{1,2})[/-](\d{1,2})")


def as_date(value: date | str | None) -> date | None:
    """Coerce a ``YYYY-MM-DD`` string, an ISO timestamp or a date into a date.

    The whole string must parse; trailing text is rejected rather than cut off.
    """
    if isinstance(value, datetime):
        return value.date()
    if value is None or isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError as exc:
            raise ValidationError("Deadline must be a YYYY-MM-DD date") from exc
    raise ValidationError("Deadline must be a YYYY-MM-DD date")


def calculate_deadline(index: int, parent_deadline: date | str | None) -> date | None:
    """Return the due date of subtask *index* given the parent's deadline.

    Subtask ``i`` is due ``(i + 1) * 3`` days before the parent, so earlier
    subtasks sit further back. Returns ``None`` when the parent has no deadline.
    """
    parent = as_date(parent_deadline)
    if parent is None:
        return None
    return parent - timedelta(days=(index + 1) * DEADLINE_SPACING_DAYS)


def parse_deadline(text: str, clock: Clock | None = None) -> date:
    """Interpret a free-text deadline answer relative to today.

    Recognizes "tomorrow", "next week", "end of month" and ``MM/DD`` or
    ``MM-DD`` (current year). Anything else, including a month/day pair that
    is not a real date, resolves to two weeks from today.
    """
    today = resolve_clock(clock).now().date()
    lowered = text.lower()

    if "tomorrow" in lowered:
        return today + timedelta(days=1)
    if "next week" in lowered:
        return today + timedelta(days=7)
    if "end of month" in lowered:
        last_day = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=last_day)

    match = _MONTH_DAY.search(lowered)
    if match:
        month, day = int(match.group(1)), int(match.group(2))
        try:
            return date(today.year, month, day)
        except ValueError:
            logger.debug("ignoring impossible month/day in deadline answer", month=month, day=day)

    return today + timedelta(days=DEFAULT_DEADLINE_DAYS)
