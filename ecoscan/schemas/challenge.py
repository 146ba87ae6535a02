"""Pydantic schemas for the shared daily challenges."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChallengeRead(BaseModel):
    id: int
    description: str
    points: int
    completed: bool
    username: Optional[str] = None


class ChallengeCompleteRequest(BaseModel):
    """Claim request; accepts ``challengeId`` as sent by the web client."""

    model_config = ConfigDict(populate_by_name=True)

    challenge_id: Optional[int] = Field(default=None, alias="challengeId")
    username: Optional[str] = None


class ChallengeCompleteResponse(BaseModel):
    points: int


__all__ = ["ChallengeCompleteRequest", "ChallengeCompleteResponse", "ChallengeRead"]
