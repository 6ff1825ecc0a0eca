"""Schemas for the counter get/reset operations."""
from __future__ import annotations

from pydantic import BaseModel, Field


class GetCountRequest(BaseModel):
    """Request payload for reading the reset epoch."""

    ep: int = Field(..., ge=0, description="Fallback epoch persisted when none is stored.")


class ResetCountRequest(BaseModel):
    """Request payload for resetting the timer."""

    counter: int = Field(..., ge=0, description="New reset epoch in Unix seconds.")


class EpochResponse(BaseModel):
    """API response carrying the persisted reset epoch."""

    epoch: int
