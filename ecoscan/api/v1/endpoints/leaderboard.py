"""Leaderboard endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ecoscan.api import deps
from ecoscan.schemas import LeaderboardEntryRead, MessageResponse, PointsUpdate, RankResponse
from ecoscan.services.leaderboard import LeaderboardService
from ecoscan.services.ledger import ScoreLedger
from ecoscan.utils.exceptions import require, require_username

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=list[LeaderboardEntryRead])
def read_leaderboard(
    limit: Optional[int] = Query(None, ge=1, le=100),
    service: LeaderboardService = Depends(deps.get_leaderboard_service),
) -> list[LeaderboardEntryRead]:
    """Return the top users by points."""

    return [
        LeaderboardEntryRead(rank=entry.rank, username=entry.username, points=entry.points)
        for entry in service.top(limit)
    ]


@router.get("/rank", response_model=RankResponse)
def read_rank(
    username: Optional[str] = Query(None),
    service: LeaderboardService = Depends(deps.get_leaderboard_service),
    ledger: ScoreLedger = Depends(deps.get_ledger),
) -> RankResponse:
    """Return the caller's position over all users; ``rank`` is null when unranked."""

    username = require_username(username)
    return RankResponse(
        username=username,
        rank=service.rank_of(username),
        points=ledger.get_points(username),
    )


@router.post("", response_model=MessageResponse)
def submit_score(
    payload: PointsUpdate,
    ledger: ScoreLedger = Depends(deps.get_ledger),
) -> MessageResponse:
    """Overwrite the user's total with a client-reported value."""

    ledger.set_points(require_username(payload.username), require(payload.points, "Points"))
    return MessageResponse(message="Leaderboard updated.")
