# src/social_timer/models/__init__.py
"""SQLAlchemy models for the Social Timer application."""

from .key_value import KeyValueEntry

__all__ = ["KeyValueEntry"]
