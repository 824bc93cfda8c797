"""Clock sources for the reminder schedulers."""

from __future__ import annotations

import zoneinfo
from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Supplies the current wall-clock time."""

    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...


class SystemClock:
    """Reads the system clock in a fixed zone.

    Args:
        timezone: IANA timezone string. Empty or None uses the process-local
            zone, matching how due instants are interpreted.
    """

    def __init__(self, timezone: str | None = None) -> None:
        self._tz = zoneinfo.ZoneInfo(timezone) if timezone else None

    @property
    def timezone(self) -> zoneinfo.ZoneInfo | None:
        return self._tz

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now().astimezone()
        return datetime.now(self._tz)
