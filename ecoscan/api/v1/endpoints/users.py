"""User total endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ecoscan.api import deps
from ecoscan.schemas import MessageResponse, PointsUpdate
from ecoscan.services.ledger import ScoreLedger
from ecoscan.utils.exceptions import require, require_username

router = APIRouter(tags=["users"])


@router.post("/user", response_model=MessageResponse)
def update_user(
    payload: PointsUpdate,
    ledger: ScoreLedger = Depends(deps.get_ledger),
) -> MessageResponse:
    """Create the user or overwrite their total."""

    ledger.set_points(require_username(payload.username), require(payload.points, "Points"))
    return MessageResponse(message="User updated.")
