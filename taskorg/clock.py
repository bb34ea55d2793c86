"""Clock and ID providers.

Every pipeline stage takes an optional ``clock`` so tests can pin "now" and
get predictable task IDs.
"""

from __future__ import annotations

import itertools
import secrets
import string
from datetime import UTC, datetime
from typing import Protocol

_ID_ALPHABET = string.ascii_lowercase + string.digits


class Clock(Protocol):
    """Source of the current time and of fresh task identifiers."""

    def now(self) -> datetime: ...

    def new_id(self) -> str: ...


class SystemClock:
    """Wall clock in UTC with ``task_{millis}_{random}`` identifiers."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def new_id(self) -> str:
        millis = int(self.now().timestamp() * 1000)
        suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
        return f"task_{millis}_{suffix}"


class FixedClock:
    """Clock frozen at a given instant with sequential identifiers.

    IDs are ``{prefix}_{n}`` with ``n`` counting up from 1.
    """

    def __init__(self, at: datetime, prefix: str = "task") -> None:
        self._at = at
        self._prefix = prefix
        self._counter = itertools.count(1)

    def now(self) -> datetime:
        return self._at

    def new_id(self) -> str:
        return f"{self._prefix}_{next(self._counter)}"

    def advance_to(self, at: datetime) -> None:
        """Move the frozen instant."""
        self._at = at


def resolve_clock(clock: Clock | None) -> Clock:
    """Return *clock* or the shared system clock."""
    return clock if clock is not None else _SYSTEM_CLOCK


_SYSTEM_CLOCK = SystemClock()
