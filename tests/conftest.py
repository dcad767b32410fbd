"""Pytest configuration and shared fixtures."""

import pytest

from app.application.ports.counter_repo import CounterRepository
from app.config import Settings
from app.domain.entities.counter import COUNTER_ID, Counter
from app.domain.errors import ConsistencyViolation


class FakeCounterRepo(CounterRepository):
    """In-memory counter. Each mutation completes without yielding to the loop."""

    def __init__(self, value: int = 0, present: bool = True, error: Exception | None = None):
        self.value = value
        self.present = present
        self.error = error
        self.calls: list[tuple] = []

    def _check(self, op: str) -> None:
        if self.error is not None:
            raise self.error
        if not self.present:
            raise ConsistencyViolation(f"{op}: counter row missing")

    async def ensure_initialized(self):
        self.calls.append(("ensure_initialized",))
        if self.error is not None:
            raise self.error
        if not self.present:
            self.present = True
            self.value = 0

    async def get(self):
        self.calls.append(("get",))
        self._check("get")
        return Counter(id=COUNTER_ID, value=self.value)

    async def get_value(self):
        self.calls.append(("get_value",))
        self._check("get_value")
        return self.value

    async def increment_by(self, delta):
        self.calls.append(("increment_by", delta))
        self._check("increment_by")
        self.value += delta
        return self.value

    async def reset(self):
        self.calls.append(("reset",))
        self._check("reset")
        self.value = 0
        return 0


@pytest.fixture
def fake_repo():
    return FakeCounterRepo()


@pytest.fixture
def test_settings():
    return Settings(max_increment=1000, cors_origins="http://localhost:3000")
