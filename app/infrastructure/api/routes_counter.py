"""Counter endpoints — read, increment and reset the singleton counter."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.application.use_cases.counter import (
    GetCountUseCase,
    IncrementCountUseCase,
    ResetCountUseCase,
)
from app.domain.errors import InvalidAmount, StoreError
from app.infrastructure.api.dependencies import get_count_uc, get_increment_uc, get_reset_uc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["counter"])


def _store_failure(error: str, exc: StoreError) -> HTTPException:
    # Detail stays in the server log; clients only see the generic message
    logger.error("%s: %s", error, exc)
    return HTTPException(status_code=500, detail=error)


@router.get("/count")
async def get_count(uc: GetCountUseCase = Depends(get_count_uc)):
    try:
        count = await uc.execute()
    except StoreError as e:
        raise _store_failure("Failed to fetch count", e) from e
    return {"count": count}


@router.get("/counter")
async def get_counter(uc: GetCountUseCase = Depends(get_count_uc)):
    """Full counter record including timestamps."""
    try:
        counter = await uc.details()
    except StoreError as e:
        raise _store_failure("Failed to fetch counter", e) from e
    return {
        "id": counter.id,
        "count": counter.value,
        "created_at": counter.created_at.isoformat() if counter.created_at else None,
        "updated_at": counter.updated_at.isoformat() if counter.updated_at else None,
    }


@router.post("/increment")
async def increment(uc: IncrementCountUseCase = Depends(get_increment_uc)):
    try:
        count = await uc.execute()
    except StoreError as e:
        raise _store_failure("Failed to increment count", e) from e
    return {"count": count}


@router.post("/increment/{amount}")
async def increment_by(amount: str, uc: IncrementCountUseCase = Depends(get_increment_uc)):
    """Increment by a signed integer amount taken from the path."""
    try:
        delta, count = await uc.execute_raw(amount)
    except InvalidAmount as e:
        logger.info("Rejected increment amount %r: %s", amount, e.reason)
        raise HTTPException(
            status_code=400,
            detail={"error": "Invalid increment amount", "message": f"amount {e.reason}"},
        ) from e
    except StoreError as e:
        raise _store_failure("Failed to increment count", e) from e
    return {"count": count, "message": f"Count incremented by {delta}"}


@router.post("/reset")
async def reset(uc: ResetCountUseCase = Depends(get_reset_uc)):
    try:
        count = await uc.execute()
    except StoreError as e:
        raise _store_failure("Failed to reset count", e) from e
    return {"count": count, "message": "Counter reset successfully"}
