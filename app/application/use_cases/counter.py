"""Counter use cases — one store call per operation."""

from __future__ import annotations

import logging

from app.application.ports.counter_repo import CounterRepository
from app.domain.entities.counter import Counter
from app.domain.policies.increment_amount import parse_amount

logger = logging.getLogger(__name__)


class GetCountUseCase:
    def __init__(self, counter_repo: CounterRepository):
        self._repo = counter_repo

    async def execute(self) -> int:
        count = await self._repo.get_value()
        logger.debug("Current count retrieved: %d", count)
        return count

    async def details(self) -> Counter:
        return await self._repo.get()


class IncrementCountUseCase:
    """Applies an increment, validating raw client amounts before the store sees them."""

    def __init__(self, counter_repo: CounterRepository, max_amount: int):
        self._repo = counter_repo
        self._max_amount = max_amount

    async def execute(self, delta: int = 1) -> int:
        count = await self._repo.increment_by(delta)
        logger.debug("Count incremented by %d to %d", delta, count)
        return count

    async def execute_raw(self, raw_amount: str) -> tuple[int, int]:
        """Parse *raw_amount* and apply it.

        Returns:
            (amount, new_count)

        Raises:
            InvalidAmount: before any store call if *raw_amount* is rejected.
        """
        amount = parse_amount(raw_amount, self._max_amount)
        return amount, await self.execute(amount)


class ResetCountUseCase:
    def __init__(self, counter_repo: CounterRepository):
        self._repo = counter_repo

    async def execute(self) -> int:
        count = await self._repo.reset()
        logger.info("Count reset to %d", count)
        return count
