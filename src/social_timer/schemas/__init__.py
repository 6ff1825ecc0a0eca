# src/social_timer/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .counter import EpochResponse, GetCountRequest, ResetCountRequest

__all__ = ["EpochResponse", "GetCountRequest", "ResetCountRequest"]
