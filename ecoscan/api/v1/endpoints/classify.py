"""Waste classification endpoint."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ecoscan.api import deps
from ecoscan.schemas import ClassifyResponse, DailyStateRead
from ecoscan.services.classification import ClassificationService

router = APIRouter(tags=["classification"])


@router.post("/classify", response_model=ClassifyResponse)
def classify_image(
    *,
    username: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: ClassificationService = Depends(deps.get_classification_service),
) -> ClassifyResponse:
    """Classify an uploaded image and credit the user."""

    data = image.file.read() if image is not None else None
    outcome = service.classify(username, data)
    record = outcome.record
    return ClassifyResponse(
        type=record.waste_type,
        action=record.action,
        disposal=record.disposal,
        points=record.points,
        timestamp=record.timestamp,
        total_points=outcome.total_points,
        level=outcome.level,
        achievements_unlocked=outcome.new_achievements,
        daily_bonus=outcome.daily_bonus,
        daily=DailyStateRead(
            day=outcome.daily.day,
            count=outcome.daily.count,
            completed=outcome.daily.completed,
        ),
    )
