"""API router for version 1."""
from fastapi import APIRouter

from ecoscan.api.v1.endpoints import (
    challenges,
    classify,
    feedback,
    guide,
    history,
    leaderboard,
    progress,
    users,
)


api_router = APIRouter()
api_router.include_router(classify.router)
api_router.include_router(users.router)
api_router.include_router(leaderboard.router)
api_router.include_router(guide.router)
api_router.include_router(challenges.router)
api_router.include_router(history.router)
api_router.include_router(progress.router)
api_router.include_router(feedback.router)

__all__ = ["api_router"]
