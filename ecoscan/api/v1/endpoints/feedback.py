"""Feedback endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ecoscan.api import deps
from ecoscan.schemas import FeedbackCreate, MessageResponse
from ecoscan.services.feedback import FeedbackService

router = APIRouter(tags=["feedback"])


@router.post("/feedback", response_model=MessageResponse)
def submit_feedback(
    payload: FeedbackCreate,
    service: FeedbackService = Depends(deps.get_feedback_service),
) -> MessageResponse:
    service.submit(payload.feedback, payload.username)
    return MessageResponse(message="Feedback saved.")
