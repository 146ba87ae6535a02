"""Classification history endpoint."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ecoscan.api import deps
from ecoscan.schemas import HistoryItem
from ecoscan.services.classification import ClassificationService

router = APIRouter(tags=["history"])


@router.get("/history", response_model=list[HistoryItem])
def read_history(
    username: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    service: ClassificationService = Depends(deps.get_classification_service),
) -> list[HistoryItem]:
    """Return the user's classifications, newest first."""

    return [
        HistoryItem(
            type=record.waste_type,
            action=record.action,
            disposal=record.disposal,
            points=record.points,
            timestamp=record.timestamp,
        )
        for record in service.history(username, limit)
    ]
