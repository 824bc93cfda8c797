"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime

import pytest
from fakes import TZ, FakeClock, FakeGateway


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 3, 12, 9, 0, tzinfo=TZ)


@pytest.fixture
def clock(now: datetime) -> FakeClock:
    return FakeClock(now)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()
