"""Classification service wiring the oracle, the recorder and the SQL store."""
from __future__ import annotations

from datetime import datetime

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ecoscan.config import settings
from ecoscan.core.achievements import default_rules
from ecoscan.core.classifier import Classifier
from ecoscan.core.recorder import ClassificationRecorder, RecordOutcome
from ecoscan.core.store import ClassificationRecord
from ecoscan.db.models.classification import ClassificationEvent
from ecoscan.db.session import commit_or_raise
from ecoscan.services.leaderboard import invalidate_leaderboard
from ecoscan.services.store import SqlBookkeepingStore, record_from_event
from ecoscan.utils.exceptions import StorageError, ValidationError, require_username


def build_recorder(db: Session) -> ClassificationRecorder:
    """Return a recorder over ``db`` configured from settings."""

    return ClassificationRecorder(
        SqlBookkeepingStore(db),
        rules=default_rules(settings.RECYCLE_MASTER_THRESHOLD, settings.COMPOST_KING_THRESHOLD),
        daily_target=settings.DAILY_CHALLENGE_TARGET,
        daily_bonus=settings.DAILY_CHALLENGE_BONUS,
    )


class ClassificationService:
    """Classify uploads and read back a user's history."""

    def __init__(self, db: Session, classifier: Classifier) -> None:
        self.db = db
        self.classifier = classifier

    def classify(
        self,
        username: str | None,
        image: bytes | None,
        *,
        now: datetime | None = None,
    ) -> RecordOutcome:
        username = require_username(username)
        if not image:
            raise ValidationError("No image uploaded.", {"field": "image"})

        result = self.classifier.classify(image)
        try:
            outcome = build_recorder(self.db).record(username, result, now=now)
        except SQLAlchemyError as exc:
            logger.error(f"Recording classification for {username} failed: {exc}")
            self.db.rollback()
            raise StorageError("Could not record classification.") from exc
        except Exception:
            self.db.rollback()
            raise

        commit_or_raise(self.db, "record classification")
        invalidate_leaderboard()
        logger.info(
            f"Classified {result.waste_type} for {username}: +{result.points} -> {outcome.total_points}"
        )
        return outcome

    def history(self, username: str | None, limit: int | None = None) -> list[ClassificationRecord]:
        """Return the user's classifications, newest first."""

        username = require_username(username)
        stmt = (
            select(ClassificationEvent)
            .where(ClassificationEvent.username == username)
            .order_by(ClassificationEvent.created_at.desc(), ClassificationEvent.id.desc())
        )
        if limit:
            stmt = stmt.limit(limit)
        return [record_from_event(event) for event in self.db.execute(stmt).scalars()]


__all__ = ["ClassificationService", "build_recorder"]
