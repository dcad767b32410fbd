"""Create the counter table and singleton row.

Usage:
    python -m app.tools.init_db
    python -m app.tools.init_db --reset  # also set the counter back to 0
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from app.adapters.persistence.database import build_engine, build_session_factory
from app.adapters.persistence.repositories import SqlCounterRepository
from app.config import Settings, settings
from app.domain.errors import StoreError

logging.basicConfig(level=settings.log_level, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def init_db(settings: Settings, reset: bool = False) -> int:
    """Initialize the store and return the current counter value."""
    engine = build_engine(settings)
    session_factory = build_session_factory(engine)
    try:
        async with session_factory() as session:
            repo = SqlCounterRepository(session)
            await repo.ensure_initialized()
            if reset:
                return await repo.reset()
            return await repo.get_value()
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the counter database")
    parser.add_argument("--reset", action="store_true", help="Reset the counter to 0")
    args = parser.parse_args(argv)

    try:
        value = asyncio.run(init_db(settings, reset=args.reset))
    except StoreError as e:
        logger.error("Database initialization failed: %s", e)
        return 1

    logger.info("Counter ready, current value: %d", value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
