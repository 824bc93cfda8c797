"""Date/time helpers for due instants and reminder windows."""

from __future__ import annotations

import math
from datetime import date, datetime, time, tzinfo


def parse_date(value: str | date) -> date:
    """Parse a ``YYYY-MM-DD`` string (dates pass through unchanged)."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        msg = f"Invalid date '{value}' (expected YYYY-MM-DD)"
        raise ValueError(msg) from None


def parse_time(value: str | time | None) -> time | None:
    """Parse an ``HH:mm`` (or ``HH:mm:ss``) string. Empty values mean no time."""
    if value is None or isinstance(value, time):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return time.fromisoformat(text)
    except ValueError:
        msg = f"Invalid time '{value}' (expected HH:mm)"
        raise ValueError(msg) from None


def format_time(value: time | None) -> str:
    """Render a time as ``HH:mm``; ``None`` renders as an empty string."""
    if value is None:
        return ""
    return value.strftime("%H:%M")


def due_instant(due_date: date, due_time: time, tz: tzinfo | None) -> datetime:
    """Combine a date and a time-of-day into one instant in *tz*."""
    return datetime.combine(due_date, due_time.replace(tzinfo=None), tzinfo=tz)


def minutes_until(due: datetime, now: datetime) -> float:
    """Minutes from *now* to *due*; negative once *due* has passed."""
    return (due - now).total_seconds() / 60


def truncate_to_minute(moment: datetime) -> datetime:
    return moment.replace(second=0, microsecond=0)


def round_minutes(minutes: float) -> int:
    """Round half-up (2.5 -> 3), unlike Python's banker's ``round``."""
    return math.floor(minutes + 0.5)
