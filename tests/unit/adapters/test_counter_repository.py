"""Tests for SqlCounterRepository — statement shape and error translation (no database)."""

from __future__ import annotations

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import DataError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from app.adapters.persistence.repositories import (
    SqlCounterRepository,
    _increment_stmt,
    _insert_singleton_stmt,
    _reset_stmt,
    _select_value_stmt,
    _store_errors,
)
from app.domain.errors import ConsistencyViolation, StoreError, StoreUnavailable


def _compile(stmt):
    return stmt.compile(dialect=postgresql.dialect())


# ─── Statement shape ─────────────────────────────────────────────────


def test_increment_is_single_update_returning():
    compiled = _compile(_increment_stmt(-3))
    sql = str(compiled)
    assert sql.startswith("UPDATE counter SET")
    assert "counter.count +" in sql
    assert "updated_at=now()" in sql
    assert "RETURNING counter.count" in sql


def test_increment_delta_is_bound_parameter():
    compiled = _compile(_increment_stmt(-3))
    assert "-3" not in str(compiled)
    assert -3 in compiled.params.values()
    assert 1 in compiled.params.values()


def test_reset_sets_zero_and_returns():
    sql = str(_compile(_reset_stmt()))
    assert sql.startswith("UPDATE counter SET")
    assert "updated_at=now()" in sql
    assert "RETURNING counter.count" in sql


def test_insert_singleton_tolerates_conflict():
    compiled = _compile(_insert_singleton_stmt())
    sql = str(compiled)
    assert sql.startswith("INSERT INTO counter")
    assert "ON CONFLICT (id) DO NOTHING" in sql
    assert compiled.params == {"id": 1, "count": 0}


def test_select_value_targets_singleton():
    compiled = _compile(_select_value_stmt())
    assert str(compiled).startswith("SELECT counter.count")
    assert list(compiled.params.values()) == [1]


# ─── Error translation ───────────────────────────────────────────────


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        OperationalError("SELECT 1", {}, Exception("connection refused")),
        PoolTimeoutError("QueuePool limit reached"),
        ConnectionRefusedError("refused"),
        TimeoutError("timed out"),
    ],
)
async def test_connection_failures_become_store_unavailable(error):
    with pytest.raises(StoreUnavailable) as exc_info:
        async with _store_errors("get count"):
            raise error
    assert exc_info.value.__cause__ is error


@pytest.mark.asyncio
async def test_other_driver_errors_become_store_error():
    with pytest.raises(StoreError) as exc_info:
        async with _store_errors("increment count"):
            raise DataError("UPDATE counter", {}, Exception("integer out of range"))
    assert not isinstance(exc_info.value, StoreUnavailable)


# ─── Repository against a fake session ───────────────────────────────


class FakeResult:
    def __init__(self, value):
        self._value = value
        self.rowcount = 0 if value is None else 1

    def scalar_one_or_none(self):
        return self._value


class FakeSession:
    def __init__(self, value=None, error: Exception | None = None):
        self._value = value
        self._error = error
        self.executed = []
        self.commits = 0
        self.rollbacks = 0

    async def execute(self, stmt):
        if self._error is not None:
            raise self._error
        self.executed.append(stmt)
        return FakeResult(self._value)

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1


@pytest.mark.asyncio
async def test_increment_uses_one_statement_and_commits():
    session = FakeSession(value=7)
    repo = SqlCounterRepository(session)
    assert await repo.increment_by(2) == 7
    assert len(session.executed) == 1
    assert session.commits == 1


@pytest.mark.asyncio
async def test_increment_missing_row_raises_consistency_violation():
    session = FakeSession(value=None)
    repo = SqlCounterRepository(session)
    with pytest.raises(ConsistencyViolation):
        await repo.increment_by(1)
    assert session.commits == 0
    assert session.rollbacks == 1
    # Only the UPDATE ran; no insert to recreate the row
    assert len(session.executed) == 1


@pytest.mark.asyncio
async def test_reset_returns_zero():
    session = FakeSession(value=0)
    assert await SqlCounterRepository(session).reset() == 0
    assert session.commits == 1


@pytest.mark.asyncio
async def test_get_value_missing_row():
    with pytest.raises(ConsistencyViolation):
        await SqlCounterRepository(FakeSession(value=None)).get_value()


@pytest.mark.asyncio
async def test_get_value_unreachable_store():
    session = FakeSession(error=OperationalError("SELECT", {}, Exception("no route to host")))
    with pytest.raises(StoreUnavailable):
        await SqlCounterRepository(session).get_value()
