"""Bookkeeping core shared by the backend and the offline client."""

from ecoscan.core.achievements import AchievementRule, default_rules, evaluate
from ecoscan.core.classifier import CATALOGUE, Classifier, RandomClassifier
from ecoscan.core.daily import DailyAdvance, advance
from ecoscan.core.levels import DEFAULT_LEVELS, Level, level_for, next_level
from ecoscan.core.recorder import ClassificationRecorder, RecordOutcome
from ecoscan.core.store import (
    BookkeepingStore,
    Classification,
    ClassificationRecord,
    DailyChallengeState,
)

__all__ = [
    "AchievementRule",
    "BookkeepingStore",
    "CATALOGUE",
    "Classification",
    "ClassificationRecord",
    "ClassificationRecorder",
    "Classifier",
    "DEFAULT_LEVELS",
    "DailyAdvance",
    "DailyChallengeState",
    "Level",
    "RandomClassifier",
    "RecordOutcome",
    "advance",
    "default_rules",
    "evaluate",
    "level_for",
    "next_level",
]
