"""Authoritative points totals."""
from __future__ import annotations

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ecoscan.db.models.user import User
from ecoscan.db.session import commit_or_raise, dialect_insert
from ecoscan.services.leaderboard import invalidate_leaderboard
from ecoscan.utils.exceptions import StorageError, ValidationError, require_username


def _check_amount(value: object, *, field: str, allow_zero: bool) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer.", {"field": field})
    if value < 0 or (value == 0 and not allow_zero):
        bound = "non-negative" if allow_zero else "positive"
        raise ValidationError(f"{field} must be {bound}.", {"field": field})
    return value


class ScoreLedger:
    """Read and write per-user totals with single-statement upserts.

    Each write is one ``INSERT ... ON CONFLICT DO UPDATE ... RETURNING`` so two
    requests for the same user never lose an update. With ``autocommit=False``
    the caller owns the transaction and must call :func:`invalidate_leaderboard`
    after committing.
    """

    def __init__(self, db: Session, *, autocommit: bool = True) -> None:
        self.db = db
        self.autocommit = autocommit

    def get_points(self, username: str) -> int:
        """Return the user's total, 0 when the user has never scored."""

        points = self.db.scalar(select(User.points).where(User.username == username))
        return int(points or 0)

    def add_points(self, username: str, delta: int) -> int:
        """Add ``delta`` to the user's total, creating the user at 0 first, and return the new total."""

        username = require_username(username)
        delta = _check_amount(delta, field="Points", allow_zero=False)

        stmt = dialect_insert(self.db, User).values(username=username, points=delta)
        stmt = stmt.on_conflict_do_update(
            index_elements=[User.username],
            set_={"points": User.points + stmt.excluded.points, "updated_at": func.now()},
        ).returning(User.points)
        total = self._write(stmt, f"add points for {username}")
        logger.debug(f"Ledger: {username} +{delta} -> {total}")
        return total

    def set_points(self, username: str, points: int) -> int:
        """Overwrite the user's total. Last write wins."""

        username = require_username(username)
        points = _check_amount(points, field="Points", allow_zero=True)

        stmt = dialect_insert(self.db, User).values(username=username, points=points)
        stmt = stmt.on_conflict_do_update(
            index_elements=[User.username],
            set_={"points": stmt.excluded.points, "updated_at": func.now()},
        ).returning(User.points)
        total = self._write(stmt, f"set points for {username}")
        logger.info(f"Ledger: {username} set to {total}")
        return total

    def _write(self, stmt, action: str) -> int:
        try:
            total = int(self.db.execute(stmt).scalar_one())
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError(f"Could not {action}.") from exc
        if self.autocommit:
            commit_or_raise(self.db, action)
            invalidate_leaderboard()
        return total


__all__ = ["ScoreLedger"]
