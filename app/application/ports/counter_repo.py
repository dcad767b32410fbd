"""Port interface for counter persistence."""

from abc import ABC, abstractmethod

from app.domain.entities.counter import Counter


class CounterRepository(ABC):
    @abstractmethod
    async def ensure_initialized(self) -> None:
        """Create the backing table and the singleton row if they are absent.

        Must be idempotent and safe when several instances start concurrently.
        """
        ...

    @abstractmethod
    async def get(self) -> Counter:
        ...

    @abstractmethod
    async def get_value(self) -> int:
        ...

    @abstractmethod
    async def increment_by(self, delta: int) -> int:
        """Atomically add *delta* and return the new value.

        Must be a single statement executed by the store (no read-then-write).
        """
        ...

    @abstractmethod
    async def reset(self) -> int:
        """Atomically set the value to 0 and return it."""
        ...
