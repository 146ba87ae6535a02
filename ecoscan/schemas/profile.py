"""Pydantic schemas for achievements, the daily counter and the profile."""
from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class AchievementProgressRead(BaseModel):
    name: str
    description: str
    current: int
    target: int
    unlocked: bool


class AchievementsResponse(BaseModel):
    """Unlocked achievement names plus progress toward every rule."""

    username: str
    unlocked: list[str] = Field(default_factory=list)
    progress: list[AchievementProgressRead] = Field(default_factory=list)


class DailyRead(BaseModel):
    username: str
    day: date
    count: int
    target: int
    completed: bool
    bonus: int


class NextLevelRead(BaseModel):
    name: str
    min_points: int
    points_needed: int


class ProfileRead(BaseModel):
    """Everything the client shows on the profile screen."""

    username: str
    points: int
    level: str
    next_level: Optional[NextLevelRead] = None
    rank: Optional[int] = None
    achievements: list[str] = Field(default_factory=list)
    daily: DailyRead


__all__ = [
    "AchievementProgressRead",
    "AchievementsResponse",
    "DailyRead",
    "NextLevelRead",
    "ProfileRead",
]
