"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_session
from app.adapters.persistence.repositories import SqlCounterRepository
from app.application.ports.counter_repo import CounterRepository
from app.application.use_cases.counter import (
    GetCountUseCase,
    IncrementCountUseCase,
    ResetCountUseCase,
)
from app.config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_counter_repo(session: AsyncSession = Depends(get_session)) -> CounterRepository:
    return SqlCounterRepository(session)


def get_count_uc(repo: CounterRepository = Depends(get_counter_repo)) -> GetCountUseCase:
    return GetCountUseCase(counter_repo=repo)


def get_increment_uc(
    repo: CounterRepository = Depends(get_counter_repo),
    settings: Settings = Depends(get_settings),
) -> IncrementCountUseCase:
    return IncrementCountUseCase(counter_repo=repo, max_amount=settings.max_increment)


def get_reset_uc(repo: CounterRepository = Depends(get_counter_repo)) -> ResetCountUseCase:
    return ResetCountUseCase(counter_repo=repo)
