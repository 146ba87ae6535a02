"""Pydantic schemas for classification and history endpoints."""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class DailyStateRead(BaseModel):
    """The user's daily counter after the classification was recorded."""

    day: Optional[date] = None
    count: int = 0
    completed: bool = False


class ClassifyResponse(BaseModel):
    """Outcome of a single classification."""

    type: str
    action: str
    disposal: str
    points: int
    timestamp: datetime
    total_points: int
    level: str
    achievements_unlocked: list[str] = Field(default_factory=list)
    daily_bonus: int = 0
    daily: DailyStateRead


class HistoryItem(BaseModel):
    type: str
    action: str
    disposal: str
    points: int
    timestamp: datetime


__all__ = ["ClassifyResponse", "DailyStateRead", "HistoryItem"]
