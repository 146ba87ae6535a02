"""Achievements, daily counter and profile endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ecoscan.api import deps
from ecoscan.schemas import (
    AchievementProgressRead,
    AchievementsResponse,
    DailyRead,
    NextLevelRead,
    ProfileRead,
)
from ecoscan.services.profile import DailySummary, ProfileService
from ecoscan.utils.exceptions import require_username

router = APIRouter(tags=["progress"])


def _daily_read(username: str, summary: DailySummary) -> DailyRead:
    return DailyRead(
        username=username,
        day=summary.state.day,
        count=summary.state.count,
        target=summary.target,
        completed=summary.state.completed,
        bonus=summary.bonus,
    )


@router.get("/achievements", response_model=AchievementsResponse)
def read_achievements(
    username: Optional[str] = Query(None),
    service: ProfileService = Depends(deps.get_profile_service),
) -> AchievementsResponse:
    """Return unlocked achievements and progress toward every rule."""

    username = require_username(username)
    summary = service.achievements(username)
    return AchievementsResponse(
        username=username,
        unlocked=summary.unlocked,
        progress=[
            AchievementProgressRead(
                name=item.name,
                description=item.description,
                current=item.current,
                target=item.target,
                unlocked=item.unlocked,
            )
            for item in summary.progress
        ],
    )


@router.get("/daily", response_model=DailyRead)
def read_daily(
    username: Optional[str] = Query(None),
    service: ProfileService = Depends(deps.get_profile_service),
) -> DailyRead:
    username = require_username(username)
    return _daily_read(username, service.daily(username))


@router.get("/profile", response_model=ProfileRead)
def read_profile(
    username: Optional[str] = Query(None),
    service: ProfileService = Depends(deps.get_profile_service),
) -> ProfileRead:
    """Points, level, rank, achievements and today's counter in one call."""

    username = require_username(username)
    profile = service.profile(username)
    upcoming = profile.next_level
    return ProfileRead(
        username=profile.username,
        points=profile.points,
        level=profile.level,
        next_level=(
            NextLevelRead(
                name=upcoming.name,
                min_points=upcoming.min_points,
                points_needed=upcoming.points_needed,
            )
            if upcoming
            else None
        ),
        rank=profile.rank,
        achievements=profile.achievements,
        daily=_daily_read(profile.username, profile.daily),
    )
