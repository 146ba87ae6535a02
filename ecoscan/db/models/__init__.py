"""Database models package."""
from ecoscan.db.models.user import User
from ecoscan.db.models.classification import ClassificationEvent
from ecoscan.db.models.achievement import UserAchievement
from ecoscan.db.models.challenge import Challenge, DailyChallengeProgress
from ecoscan.db.models.feedback import Feedback

__all__ = [
    "User",
    "ClassificationEvent",
    "UserAchievement",
    "Challenge",
    "DailyChallengeProgress",
    "Feedback",
]
