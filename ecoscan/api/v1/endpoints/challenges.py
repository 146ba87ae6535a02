"""Shared daily challenge endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ecoscan.api import deps
from ecoscan.schemas import (
    ChallengeCompleteRequest,
    ChallengeCompleteResponse,
    ChallengeRead,
)
from ecoscan.services.challenges import ChallengeService
from ecoscan.utils.exceptions import ValidationError

router = APIRouter(prefix="/challenges", tags=["challenges"])


@router.get("", response_model=list[ChallengeRead])
def list_challenges(
    username: Optional[str] = Query(None),
    service: ChallengeService = Depends(deps.get_challenge_service),
) -> list[ChallengeRead]:
    """Return today's challenges, creating them on the first request of the day."""

    return [
        ChallengeRead(
            id=view.id,
            description=view.description,
            points=view.points,
            completed=view.completed,
            username=view.username,
        )
        for view in service.challenges_for(username)
    ]


@router.post("", response_model=ChallengeCompleteResponse)
def complete_challenge(
    payload: ChallengeCompleteRequest,
    service: ChallengeService = Depends(deps.get_challenge_service),
) -> ChallengeCompleteResponse:
    """Claim a challenge. Only the first claim succeeds."""

    if payload.challenge_id is None or not (payload.username or "").strip():
        raise ValidationError("Challenge ID and username required.")
    points = service.complete(payload.challenge_id, payload.username)
    return ChallengeCompleteResponse(points=points)
