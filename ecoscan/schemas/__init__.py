"""Pydantic schemas package."""

from ecoscan.schemas.challenge import (
    ChallengeCompleteRequest,
    ChallengeCompleteResponse,
    ChallengeRead,
)
from ecoscan.schemas.classification import ClassifyResponse, DailyStateRead, HistoryItem
from ecoscan.schemas.common import (
    FeedbackCreate,
    GuideEntryRead,
    HealthResponse,
    MessageResponse,
)
from ecoscan.schemas.leaderboard import LeaderboardEntryRead, PointsUpdate, RankResponse
from ecoscan.schemas.profile import (
    AchievementProgressRead,
    AchievementsResponse,
    DailyRead,
    NextLevelRead,
    ProfileRead,
)

__all__ = [
    "AchievementProgressRead",
    "AchievementsResponse",
    "ChallengeCompleteRequest",
    "ChallengeCompleteResponse",
    "ChallengeRead",
    "ClassifyResponse",
    "DailyRead",
    "DailyStateRead",
    "FeedbackCreate",
    "GuideEntryRead",
    "HealthResponse",
    "HistoryItem",
    "LeaderboardEntryRead",
    "MessageResponse",
    "NextLevelRead",
    "PointsUpdate",
    "ProfileRead",
    "RankResponse",
]
