"""Shared API dependencies for storage access and per-request context."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from social_timer.core.settings import settings
from social_timer.db.session import get_db
from social_timer.services.counter_store import CounterStore
from social_timer.services.kv_store import build_kv_store

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


@dataclass
class RequestContext:
    """Per-request state passed explicitly through the handling path.

    Handlers that need to influence the response (for example the not-found
    view setting a 404) do so through ``status_code`` and ``headers`` rather
    than through any ambient lookup.
    """

    request_id: str
    path: str
    client_host: str | None = None
    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)

    def set_status(self, status_code: int) -> None:
        self.status_code = status_code


def get_request_context(request: Request) -> RequestContext:
    """Build the context object for the current request."""
    return RequestContext(
        request_id=request.headers.get("X-Request-Id") or uuid.uuid4().hex,
        path=request.url.path,
        client_host=request.client.host if request.client else None,
    )


def get_counter_store(db: SessionDep) -> CounterStore:
    """Return the counter store bound to the configured key-value backend.

    Args:
        db: Database session, used by the ``sql`` backend

    Returns:
        CounterStore for the shared reset epoch
    """
    return CounterStore(build_kv_store(db, settings.kv_backend))


RequestContextDep = Annotated[RequestContext, Depends(get_request_context)]
CounterStoreDep = Annotated[CounterStore, Depends(get_counter_store)]
