"""Small request/response models shared by several endpoints."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class GuideEntryRead(BaseModel):
    type: str
    instructions: str


class FeedbackCreate(BaseModel):
    feedback: Optional[str] = None
    username: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    environment: str


__all__ = ["FeedbackCreate", "GuideEntryRead", "HealthResponse", "MessageResponse"]
