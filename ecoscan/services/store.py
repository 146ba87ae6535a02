"""SQL adapter for the bookkeeping store."""
from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ecoscan.core.store import ClassificationRecord, DailyChallengeState
from ecoscan.db.models.achievement import UserAchievement
from ecoscan.db.models.challenge import DailyChallengeProgress
from ecoscan.db.models.classification import ClassificationEvent
from ecoscan.db.session import dialect_insert
from ecoscan.services.ledger import ScoreLedger


def record_from_event(event: ClassificationEvent) -> ClassificationRecord:
    return ClassificationRecord(
        username=event.username,
        waste_type=event.waste_type,
        action=event.action,
        disposal=event.disposal,
        points=event.points,
        timestamp=event.created_at,
    )


class SqlBookkeepingStore:
    """Bookkeeping store over the request's SQLAlchemy session.

    Nothing is committed here: the caller commits once the whole classification
    has been recorded, so a failure part way leaves no partial state behind.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.ledger = ScoreLedger(db, autocommit=False)

    def get_points(self, username: str) -> int:
        return self.ledger.get_points(username)

    def add_points(self, username: str, delta: int) -> int:
        return self.ledger.add_points(username, delta)

    def append_event(self, record: ClassificationRecord) -> None:
        self.db.add(
            ClassificationEvent(
                username=record.username,
                waste_type=record.waste_type,
                action=record.action,
                disposal=record.disposal,
                points=record.points,
                created_at=record.timestamp,
            )
        )
        self.db.flush()

    def history(self, username: str) -> Sequence[ClassificationRecord]:
        events = self.db.execute(
            select(ClassificationEvent)
            .where(ClassificationEvent.username == username)
            .order_by(ClassificationEvent.created_at.asc(), ClassificationEvent.id.asc())
        ).scalars()
        return [record_from_event(event) for event in events]

    def unlocked_achievements(self, username: str) -> list[str]:
        return list(
            self.db.execute(
                select(UserAchievement.name)
                .where(UserAchievement.username == username)
                .order_by(UserAchievement.id.asc())
            ).scalars()
        )

    def add_achievements(self, username: str, names: Sequence[str]) -> None:
        if not names:
            return
        stmt = dialect_insert(self.db, UserAchievement).values(
            [{"username": username, "name": name} for name in names]
        )
        self.db.execute(stmt.on_conflict_do_nothing(index_elements=["username", "name"]))

    def daily_state(self, username: str) -> DailyChallengeState:
        row = self.db.execute(
            select(
                DailyChallengeProgress.day,
                DailyChallengeProgress.count,
                DailyChallengeProgress.completed,
            ).where(DailyChallengeProgress.username == username)
        ).one_or_none()
        if row is None:
            return DailyChallengeState()
        return DailyChallengeState(day=row.day, count=row.count, completed=bool(row.completed))

    def save_daily_state(self, username: str, state: DailyChallengeState) -> None:
        values = {"day": state.day, "count": state.count, "completed": state.completed}
        stmt = dialect_insert(self.db, DailyChallengeProgress).values(username=username, **values)
        self.db.execute(
            stmt.on_conflict_do_update(index_elements=[DailyChallengeProgress.username], set_=values)
        )


__all__ = ["SqlBookkeepingStore", "record_from_event"]
