"""Pydantic schemas for user totals and the leaderboard."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class PointsUpdate(BaseModel):
    """Body of ``POST /user`` and ``POST /leaderboard``.

    Fields are optional so that missing values reach the service and produce the
    same ``{"error": ...}`` body as every other validation failure.
    """

    username: Optional[str] = None
    points: Optional[int] = None


class LeaderboardEntryRead(BaseModel):
    rank: int
    username: str
    points: int


class RankResponse(BaseModel):
    username: str
    rank: Optional[int] = None
    points: int


__all__ = ["LeaderboardEntryRead", "PointsUpdate", "RankResponse"]
