# src/social_timer/api/__init__.py
"""HTTP surface of the Social Timer service."""

from .endpoints import counter_router, pages_router

__all__ = ["counter_router", "pages_router"]
