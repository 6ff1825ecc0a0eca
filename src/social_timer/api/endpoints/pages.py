# src/social_timer/api/endpoints/pages.py
"""Server-rendered HTML views: the timer page and the not-found view."""

from __future__ import annotations

import logging
from html import escape

from fastapi import APIRouter, status
from fastapi.responses import HTMLResponse, RedirectResponse

from social_timer.api.dependencies import CounterStoreDep, RequestContext, RequestContextDep
from social_timer.core.settings import settings
from social_timer.services.breakdown import format_duration
from social_timer.services.counter_store import CounterStoreError
from social_timer.utils.time import current_epoch

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

PAGE_HEADING = "Sekunden ohne LinkedIn Vorschlag"
RESET_LABEL = "Ich habe einen Vorschlag!"
NOT_FOUND_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def render_page(title: str, body: str, *, refresh_seconds: int | None = None) -> str:
    """Wrap ``body`` in the common HTML document shell."""
    refresh = (
        f'<meta http-equiv="refresh" content="{refresh_seconds}" />'
        if refresh_seconds
        else ""
    )
    return (
        "<!DOCTYPE html>"
        '<html lang="en"><head>'
        '<meta charset="utf-8" />'
        '<meta name="viewport" content="width=device-width, initial-scale=1" />'
        f'<meta name="description" content="{escape(settings.app_description)}" />'
        f"{refresh}"
        f"<title>{escape(title)}</title>"
        "</head><body><main>"
        f"{body}"
        "</main></body></html>"
    )


def _html(ctx: RequestContext, content: str) -> HTMLResponse:
    return HTMLResponse(content=content, status_code=ctx.status_code, headers=ctx.headers)


@router.get("/", response_class=HTMLResponse)
async def home_page(store: CounterStoreDep, ctx: RequestContextDep) -> HTMLResponse:
    """Render the elapsed time since the last reset and the reset control."""
    now = current_epoch()
    try:
        epoch = store.get_or_initialize(now)
    except CounterStoreError as exc:
        logger.error("Unable to load counter for %s: %s", ctx.request_id, exc)
        ctx.set_status(status.HTTP_503_SERVICE_UNAVAILABLE)
        body = '<h1 class="title">Counter unavailable</h1>'
        return _html(ctx, render_page(settings.app_name, body))

    sentence = format_duration(max(0, now - epoch), settings.locale, html=True)
    body = (
        f'<h1 class="title">{PAGE_HEADING}</h1>'
        f'<h1 class="seconds">{sentence}</h1>'
        '<form method="post" action="/reset">'
        f'<button type="submit">{RESET_LABEL}</button>'
        "</form>"
    )
    # The elapsed time is stale as soon as it is rendered.
    ctx.headers["Cache-Control"] = "no-store"
    refresh = max(1, round(settings.tick_interval_seconds))
    return _html(ctx, render_page(settings.app_name, body, refresh_seconds=refresh))


@router.post("/reset", response_model=None)
async def reset_page(
    store: CounterStoreDep, ctx: RequestContextDep
) -> RedirectResponse | HTMLResponse:
    """Reset the timer from the HTML form and redirect back to the page."""
    now = current_epoch()
    try:
        store.set(now)
    except CounterStoreError as exc:
        logger.error("Reset failed for %s: %s", ctx.request_id, exc)
        ctx.set_status(status.HTTP_503_SERVICE_UNAVAILABLE)
        body = '<h1 class="title">Reset failed</h1><a href="/">Back</a>'
        return _html(ctx, render_page(settings.app_name, body))

    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


@router.api_route(
    "/{path:path}",
    methods=NOT_FOUND_METHODS,
    response_class=HTMLResponse,
    include_in_schema=False,
)
async def not_found(ctx: RequestContextDep) -> HTMLResponse:
    """404 - Not Found."""
    logger.debug("No route for %s", ctx.path)
    ctx.set_status(status.HTTP_404_NOT_FOUND)
    return _html(ctx, render_page(settings.app_name, "<h1>Not Found</h1>"))
