# src/social_timer/api/endpoints/__init__.py
"""API endpoint modules."""

from .counter import router as counter_router
from .pages import router as pages_router

__all__ = ["counter_router", "pages_router"]
