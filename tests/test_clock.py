"""Tests for clock sources."""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from reminder_engine.clock import Clock, SystemClock


def test_system_clock_is_a_clock() -> None:
    assert isinstance(SystemClock(), Clock)


def test_local_clock_is_aware() -> None:
    now = SystemClock().now()
    assert now.tzinfo is not None
    assert abs(now - datetime.now().astimezone()) < timedelta(seconds=5)


def test_zoned_clock_uses_zone() -> None:
    clock = SystemClock("Asia/Tokyo")
    now = clock.now()
    assert clock.timezone == ZoneInfo("Asia/Tokyo")
    assert now.tzinfo == ZoneInfo("Asia/Tokyo")


def test_empty_timezone_means_local() -> None:
    assert SystemClock("").timezone is None
