"""Shared API dependencies."""
from __future__ import annotations

from fastapi import Depends
from loguru import logger
from sqlalchemy.orm import Session

from ecoscan.core.classifier import Classifier, RandomClassifier
from ecoscan.db.session import SessionLocal
from ecoscan.services.challenges import ChallengeService
from ecoscan.services.classification import ClassificationService
from ecoscan.services.feedback import FeedbackService
from ecoscan.services.leaderboard import LeaderboardService
from ecoscan.services.ledger import ScoreLedger
from ecoscan.services.profile import ProfileService

_classifier_singleton: Classifier | None = None


def get_db() -> Session:
    """Yield a database session for request lifetime."""

    db = SessionLocal()
    try:
        yield db
    except Exception as exc:
        logger.error(f"Database session error: {exc}")
        db.rollback()
        raise
    finally:
        db.close()


def get_classifier() -> Classifier:
    """Return the process-wide classification oracle."""

    global _classifier_singleton
    if _classifier_singleton is None:
        _classifier_singleton = RandomClassifier()
    return _classifier_singleton


def get_classification_service(
    db: Session = Depends(get_db),
    classifier: Classifier = Depends(get_classifier),
) -> ClassificationService:
    return ClassificationService(db, classifier)


def get_ledger(db: Session = Depends(get_db)) -> ScoreLedger:
    return ScoreLedger(db)


def get_leaderboard_service(db: Session = Depends(get_db)) -> LeaderboardService:
    return LeaderboardService(db)


def get_challenge_service(db: Session = Depends(get_db)) -> ChallengeService:
    return ChallengeService(db)


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(db)


def get_feedback_service(db: Session = Depends(get_db)) -> FeedbackService:
    return FeedbackService(db)
