"""Ranked views over user totals."""
from __future__ import annotations

from dataclasses import asdict, dataclass

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from ecoscan.config import settings
from ecoscan.db.models.user import User
from ecoscan.utils.cache import cache_backend


CACHE_NAMESPACE = "leaderboard"


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    rank: int
    username: str
    points: int


def invalidate_leaderboard() -> None:
    """Forget every cached leaderboard snapshot. Called after each committed ledger write."""

    cache_backend.invalidate(CACHE_NAMESPACE)


class LeaderboardService:
    """Top-N listing and rank lookup.

    Ordering is points descending with ties broken by username ascending, so the
    same totals always produce the same ranking.
    """

    def __init__(self, db: Session, *, ttl_seconds: int | None = None) -> None:
        self.db = db
        self.ttl_seconds = (
            settings.LEADERBOARD_CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        )

    def top(self, n: int | None = None) -> list[LeaderboardEntry]:
        limit = settings.LEADERBOARD_SIZE if n is None else n
        if limit <= 0:
            return []

        cached = cache_backend.get(CACHE_NAMESPACE, f"top:{limit}")
        if cached is not None:
            return [LeaderboardEntry(**item) for item in cached]

        rows = self.db.execute(
            select(User.username, User.points)
            .order_by(User.points.desc(), User.username.asc())
            .limit(limit)
        ).all()
        entries = [
            LeaderboardEntry(rank=position, username=username, points=points)
            for position, (username, points) in enumerate(rows, start=1)
        ]
        cache_backend.set(
            CACHE_NAMESPACE,
            f"top:{limit}",
            [asdict(entry) for entry in entries],
            self.ttl_seconds,
        )
        return entries

    def rank_of(self, username: str) -> int | None:
        """Return the 1-based rank of ``username`` or ``None`` when the user has no total."""

        points = self.db.scalar(select(User.points).where(User.username == username))
        if points is None:
            return None

        ahead = self.db.scalar(
            select(func.count())
            .select_from(User)
            .where(
                or_(
                    User.points > points,
                    and_(User.points == points, User.username < username),
                )
            )
        )
        return int(ahead or 0) + 1


__all__ = ["CACHE_NAMESPACE", "LeaderboardEntry", "LeaderboardService", "invalidate_leaderboard"]
