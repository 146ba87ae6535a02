"""Service layer for the EcoScan backend."""

from ecoscan.services.challenges import ChallengeService
from ecoscan.services.classification import ClassificationService
from ecoscan.services.feedback import FeedbackService
from ecoscan.services.leaderboard import LeaderboardService
from ecoscan.services.ledger import ScoreLedger
from ecoscan.services.profile import ProfileService
from ecoscan.services.store import SqlBookkeepingStore

__all__ = [
    "ChallengeService",
    "ClassificationService",
    "FeedbackService",
    "LeaderboardService",
    "ProfileService",
    "ScoreLedger",
    "SqlBookkeepingStore",
]
