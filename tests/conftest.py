import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest
from fastapi.testclient import TestClient

from clinic_api.app.core.errors import StoreWriteError
from clinic_api.app.core.store import JsonFileStore, MemoryStore
from clinic_api.app.main import create_app


class FailingWriteStore(MemoryStore):
    def write(self, name, records):
        raise StoreWriteError(name, "disk full")


class StepClock:
    """Deterministic clock advancing by ``step`` on every call."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.now = start or datetime(2025, 1, 1, 9, 0, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def file_store(tmp_path):
    return JsonFileStore(tmp_path / "data")


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def client(file_store):
    return TestClient(create_app(store=file_store))


@pytest.fixture
def appointment_payload():
    return {
        "name": "  Jane Doe ",
        "email": "Jane@Example.COM",
        "phone": " 123-4567 ",
        "doctor": "Dr. X",
        "date": "2025-01-01",
        "time": "10:00",
    }


@pytest.fixture
def contact_payload():
    return {"name": "Jo", "email": "jo@x.co", "message": "Hello there"}


@pytest.fixture
def step_clock():
    return StepClock()


@pytest.fixture
def failing_store():
    return FailingWriteStore()
