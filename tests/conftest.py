"""
Pytest configuration and fixtures
"""
import pytest
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.reports.models import Location
from src.reports.repository import ReportInput, ReportRepository
from src.storage.base import StoreError
from src.storage.memory import InMemoryStore


class StepClock:
    """Clock that advances one minute per call."""

    def __init__(self, start: Optional[datetime] = None):
        self.current = start or datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(minutes=1)
        return value


class FlakyStore(InMemoryStore):
    """In-memory store whose operations can be made to fail."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_list = False
        self.fail_get = False
        self.fail_set = False
        self.refuse_set = False
        self.set_calls: List[str] = []

    async def list(self, prefix: str = "") -> List[str]:
        if self.fail_list:
            raise StoreError("list unavailable")
        return await super().list(prefix)

    async def get(self, key: str) -> Optional[str]:
        if self.fail_get:
            raise StoreError("get unavailable")
        return await super().get(key)

    async def set(self, key: str, value: str) -> bool:
        self.set_calls.append(key)
        if self.fail_set:
            raise StoreError("set unavailable")
        if self.refuse_set:
            return False
        return await super().set(key, value)


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def store():
    return FlakyStore()


@pytest.fixture
def repository(store, clock):
    return ReportRepository(store, clock=clock)


@pytest.fixture
def hyderabad():
    return Location(lat=17.385, lng=78.4867)


@pytest.fixture
def report_input(hyderabad):
    """A well-formed submission."""
    return ReportInput(
        user_name="Lakshmi",
        description="Garbage bin overflow near the bus stand",
        location=hyderabad,
        image="data:image/png;base64,iVBORw0KGgo=",
    )


@pytest.fixture
def stored_record():
    """A persisted record as written by a browser client."""
    return {
        "id": "report_1709283600000",
        "userName": "Ravi",
        "description": "Drain blocked outside the school",
        "image": None,
        "location": {"lat": 16.5062, "lng": 80.648},
        "severity": "high",
        "color": "#ef4444",
        "date": "2026-03-01T08:00:00.000Z",
        "status": "in-progress",
    }
