# src/social_timer/api/endpoints/counter.py
"""Server operations reading and resetting the shared timer."""

import logging

from fastapi import APIRouter, HTTPException, status

from social_timer.api.dependencies import CounterStoreDep, RequestContextDep
from social_timer.schemas.counter import EpochResponse, GetCountRequest, ResetCountRequest
from social_timer.services.counter_store import CounterStoreError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["counter"])


def _store_unavailable(exc: CounterStoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Counter storage unavailable: {exc}",
    )


@router.post("/get_count", response_model=EpochResponse)
async def get_count(
    payload: GetCountRequest,
    store: CounterStoreDep,
    ctx: RequestContextDep,
) -> EpochResponse:
    """Return the persisted reset epoch, initializing it when absent.

    Args:
        payload: Fallback epoch persisted if nothing valid is stored
        store: Counter store
        ctx: Request context

    Returns:
        The persisted reset epoch

    Raises:
        HTTPException: 503 if initialization was needed and the write failed
    """
    logger.debug("get_count request %s fallback=%d", ctx.request_id, payload.ep)
    try:
        epoch = store.get_or_initialize(payload.ep)
    except CounterStoreError as exc:
        raise _store_unavailable(exc) from exc
    return EpochResponse(epoch=epoch)


@router.post("/reset_count", response_model=EpochResponse)
async def reset_count(
    payload: ResetCountRequest,
    store: CounterStoreDep,
    ctx: RequestContextDep,
) -> EpochResponse:
    """Persist a new reset epoch and return it.

    Args:
        payload: The new reset epoch
        store: Counter store
        ctx: Request context

    Returns:
        The persisted reset epoch

    Raises:
        HTTPException: 503 if the store write failed
    """
    logger.info(
        "reset_count request %s from %s epoch=%d",
        ctx.request_id,
        ctx.client_host,
        payload.counter,
    )
    try:
        epoch = store.set(payload.counter)
    except CounterStoreError as exc:
        raise _store_unavailable(exc) from exc
    return EpochResponse(epoch=epoch)
