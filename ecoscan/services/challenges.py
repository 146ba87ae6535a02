"""Shared daily challenge pool."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from loguru import logger
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ecoscan.db.models.challenge import Challenge
from ecoscan.db.session import commit_or_raise
from ecoscan.services.leaderboard import invalidate_leaderboard
from ecoscan.services.ledger import ScoreLedger
from ecoscan.utils.exceptions import NotFoundOrAlreadyCompleted, StorageError, require_username


CHALLENGE_POOL: tuple[tuple[str, int], ...] = (
    ("Classify 3 waste items today", 20),
    ("Recycle a plastic bottle", 15),
    ("Compost food scraps", 15),
)


@dataclass(frozen=True, slots=True)
class ChallengeView:
    id: int
    description: str
    points: int
    completed: bool
    username: str | None


class ChallengeService:
    """Materialise, list and claim the day's challenges.

    A challenge can be completed once by anybody. The listing only reports
    ``completed`` to the user who completed it; everyone else still sees the
    challenge as open and gets ``NotFoundOrAlreadyCompleted`` when claiming it.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _rows_for(self, day: date) -> list[Challenge]:
        return list(
            self.db.execute(
                select(Challenge).where(Challenge.day == day).order_by(Challenge.slot)
            ).scalars()
        )

    def ensure_pool(self, day: date) -> list[Challenge]:
        """Create ``day``'s pool if missing and return its rows ordered by slot."""

        rows = self._rows_for(day)
        if rows:
            return rows

        for slot, (description, points) in enumerate(CHALLENGE_POOL):
            self.db.add(
                Challenge(description=description, points=points, day=day, slot=slot, completed=False)
            )
        try:
            self.db.commit()
            logger.info(f"Materialised challenge pool for {day.isoformat()}")
        except IntegrityError:
            # Another request created the pool first
            self.db.rollback()
            logger.debug(f"Challenge pool for {day.isoformat()} already exists")
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError(f"Could not create challenges for {day.isoformat()}.") from exc
        return self._rows_for(day)

    def challenges_for(self, username: str | None, today: date | None = None) -> list[ChallengeView]:
        day = today or date.today()
        return [
            ChallengeView(
                id=row.id,
                description=row.description,
                points=row.points,
                completed=bool(row.completed and username and row.username == username),
                username=row.username,
            )
            for row in self.ensure_pool(day)
        ]

    def complete(self, challenge_id: int, username: str) -> int:
        """Claim a challenge for ``username`` and return the points awarded.

        The claim is a single conditional update, so of any number of concurrent
        claims exactly one succeeds.
        """

        username = require_username(username)
        try:
            awarded = self.db.execute(
                update(Challenge)
                .where(Challenge.id == challenge_id, Challenge.completed.is_(False))
                .values(completed=True, username=username)
                .returning(Challenge.points)
                .execution_options(synchronize_session=False)
            ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError(f"Could not complete challenge {challenge_id}.") from exc

        if awarded is None:
            self.db.rollback()
            raise NotFoundOrAlreadyCompleted(challenge_id)

        if awarded > 0:
            ScoreLedger(self.db, autocommit=False).add_points(username, awarded)
        commit_or_raise(self.db, f"complete challenge {challenge_id}")
        invalidate_leaderboard()

        logger.info(f"Challenge {challenge_id} completed by {username}: +{awarded} points")
        return int(awarded)

    def prune_before(self, day: date) -> int:
        """Delete pools older than ``day`` and return the number of rows removed."""

        result = self.db.execute(
            delete(Challenge)
            .where(Challenge.day < day)
            .execution_options(synchronize_session=False)
        )
        commit_or_raise(self.db, "prune challenges")
        return result.rowcount or 0


__all__ = ["CHALLENGE_POOL", "ChallengeService", "ChallengeView"]
