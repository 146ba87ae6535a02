"""Waste disposal guide endpoint."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from ecoscan.core import guide
from ecoscan.schemas import GuideEntryRead

router = APIRouter(tags=["guide"])


@router.get("/guide", response_model=list[GuideEntryRead])
def read_guide(search: Optional[str] = Query(None)) -> list[GuideEntryRead]:
    return [
        GuideEntryRead(type=entry.type, instructions=entry.instructions)
        for entry in guide.search(search)
    ]
