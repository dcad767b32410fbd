"""SQLAlchemy repository implementations."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import Select, Update, func, select, update
from sqlalchemy.dialects.postgresql import Insert, insert
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import Base
from app.adapters.persistence.models import CounterModel
from app.application.ports.counter_repo import CounterRepository
from app.domain.entities.counter import COUNTER_ID, Counter
from app.domain.errors import ConsistencyViolation, StoreError, StoreUnavailable

logger = logging.getLogger(__name__)

# Key for pg_advisory_xact_lock while creating the table and singleton row
INIT_LOCK_KEY = 7_301_001

_UNAVAILABLE = (OperationalError, InterfaceError, PoolTimeoutError, OSError, asyncio.TimeoutError)


# ─── Statements ──────────────────────────────────────────────────────


def _insert_singleton_stmt() -> Insert:
    return (
        insert(CounterModel)
        .values(id=COUNTER_ID, count=0)
        .on_conflict_do_nothing(index_elements=[CounterModel.id])
    )


def _select_value_stmt() -> Select:
    return select(CounterModel.count).where(CounterModel.id == COUNTER_ID)


def _increment_stmt(delta: int) -> Update:
    return (
        update(CounterModel)
        .where(CounterModel.id == COUNTER_ID)
        .values(count=CounterModel.count + delta, updated_at=func.now())
        .returning(CounterModel.count)
        .execution_options(synchronize_session=False)
    )


def _reset_stmt() -> Update:
    return (
        update(CounterModel)
        .where(CounterModel.id == COUNTER_ID)
        .values(count=0, updated_at=func.now())
        .returning(CounterModel.count)
        .execution_options(synchronize_session=False)
    )


@asynccontextmanager
async def _store_errors(operation: str) -> AsyncIterator[None]:
    """Translate driver and pool failures into domain store errors."""
    try:
        yield
    except _UNAVAILABLE as e:
        raise StoreUnavailable(f"{operation}: store unavailable ({e})") from e
    except DBAPIError as e:
        raise StoreError(f"{operation}: {e}") from e


def _missing_row(operation: str) -> ConsistencyViolation:
    logger.critical("Counter row id=%d is missing during %s", COUNTER_ID, operation)
    return ConsistencyViolation(f"{operation}: counter row id={COUNTER_ID} not found")


# ─── Repositories ────────────────────────────────────────────────────


class SqlCounterRepository(CounterRepository):
    """Every mutation is one UPDATE ... RETURNING statement committed on its own."""

    def __init__(self, session: AsyncSession):
        self._s = session

    async def ensure_initialized(self) -> None:
        async with _store_errors("initialize counter"):
            # Serializes concurrent startups; released when the transaction ends
            await self._s.execute(select(func.pg_advisory_xact_lock(INIT_LOCK_KEY)))
            conn = await self._s.connection()
            await conn.run_sync(Base.metadata.create_all, tables=[CounterModel.__table__])
            result = await self._s.execute(_insert_singleton_stmt())
            await self._s.commit()

        if result.rowcount:
            logger.info("Counter table initialized with starting value 0")
        else:
            logger.info("Counter row already present, leaving value unchanged")

    async def get(self) -> Counter:
        async with _store_errors("get counter"):
            result = await self._s.execute(
                select(CounterModel)
                .where(CounterModel.id == COUNTER_ID)
                .execution_options(populate_existing=True)
            )
            m = result.scalar_one_or_none()
        if m is None:
            raise _missing_row("get counter")
        return Counter(
            id=m.id, value=m.count, created_at=m.created_at, updated_at=m.updated_at
        )

    async def get_value(self) -> int:
        async with _store_errors("get count"):
            result = await self._s.execute(_select_value_stmt())
            value = result.scalar_one_or_none()
        if value is None:
            raise _missing_row("get count")
        return value

    async def increment_by(self, delta: int) -> int:
        async with _store_errors("increment count"):
            result = await self._s.execute(_increment_stmt(delta))
            value = result.scalar_one_or_none()
            if value is None:
                await self._s.rollback()
                raise _missing_row("increment count")
            await self._s.commit()
        return value

    async def reset(self) -> int:
        async with _store_errors("reset count"):
            result = await self._s.execute(_reset_stmt())
            value = result.scalar_one_or_none()
            if value is None:
                await self._s.rollback()
                raise _missing_row("reset count")
            await self._s.commit()
        return value
