# src/social_timer/main.py
"""Main entry point for the Social Timer application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from social_timer.api import counter_router, pages_router
from social_timer.core.logging import configure_logging
from social_timer.core.settings import settings
from social_timer.db.session import create_tables

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


# Server operations live under the API prefix; pages go last because the
# not-found view is a catch-all route.
app.include_router(counter_router, prefix=settings.api_prefix)
app.include_router(pages_router)


@app.on_event("startup")
async def on_startup() -> None:
    if settings.kv_backend == "sql":
        create_tables()
    logger.info(
        "%s %s started with %s storage", settings.app_name, settings.app_version, settings.kv_backend
    )


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    configure_logging()
    uvicorn.run("social_timer.main:app", host="0.0.0.0", port=8000, reload=settings.debug)


if __name__ == "__main__":
    run()
