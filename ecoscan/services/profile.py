"""Per-user progress: achievements, daily counter and profile."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from ecoscan.config import settings
from ecoscan.core import daily
from ecoscan.core.achievements import AchievementProgress, default_rules, evaluate, progress
from ecoscan.core.levels import NextLevel, level_for, next_level
from ecoscan.core.store import DailyChallengeState
from ecoscan.db.models.classification import ClassificationEvent
from ecoscan.db.session import commit_or_raise
from ecoscan.services.leaderboard import LeaderboardService
from ecoscan.services.store import SqlBookkeepingStore
from ecoscan.utils.exceptions import require_username


@dataclass(slots=True)
class AchievementSummary:
    unlocked: list[str]
    progress: list[AchievementProgress]


@dataclass(slots=True)
class DailySummary:
    state: DailyChallengeState
    target: int
    bonus: int


@dataclass(slots=True)
class Profile:
    username: str
    points: int
    level: str
    next_level: NextLevel | None
    rank: int | None
    achievements: list[str] = field(default_factory=list)
    daily: DailySummary | None = None


class ProfileService:
    """Assemble per-user views from the same store the recorder writes to."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.store = SqlBookkeepingStore(db)
        self.rules = default_rules(
            settings.RECYCLE_MASTER_THRESHOLD, settings.COMPOST_KING_THRESHOLD
        )

    def achievements(self, username: str | None) -> AchievementSummary:
        username = require_username(username)
        unlocked = self.store.unlocked_achievements(username)
        return AchievementSummary(
            unlocked=unlocked,
            progress=progress(self.store.history(username), unlocked, self.rules),
        )

    def daily(self, username: str | None, today: date | None = None) -> DailySummary:
        """Today's counter. A stale stored day is shown as reset but not written back."""

        username = require_username(username)
        state = daily.current(self.store.daily_state(username), today or date.today())
        return DailySummary(
            state=state,
            target=settings.DAILY_CHALLENGE_TARGET,
            bonus=settings.DAILY_CHALLENGE_BONUS,
        )

    def profile(self, username: str | None, today: date | None = None) -> Profile:
        username = require_username(username)
        points = self.store.get_points(username)
        return Profile(
            username=username,
            points=points,
            level=level_for(points),
            next_level=next_level(points),
            rank=LeaderboardService(self.db).rank_of(username),
            achievements=self.store.unlocked_achievements(username),
            daily=self.daily(username, today),
        )

    def recheck_achievements(self, username: str | None) -> list[str]:
        """Unlock anything the stored history already qualifies for, e.g. after a threshold change."""

        username = require_username(username)
        newly_unlocked = evaluate(
            self.store.history(username),
            self.store.unlocked_achievements(username),
            self.rules,
        )
        if newly_unlocked:
            self.store.add_achievements(username, newly_unlocked)
            commit_or_raise(self.db, f"unlock achievements for {username}")
            for name in newly_unlocked:
                logger.info(f"Achievement unlocked for {username}: {name}")
        return newly_unlocked

    def known_usernames(self) -> list[str]:
        """Every user with at least one recorded classification."""

        return list(
            self.db.execute(
                select(ClassificationEvent.username)
                .distinct()
                .order_by(ClassificationEvent.username)
            ).scalars()
        )


__all__ = ["AchievementSummary", "DailySummary", "Profile", "ProfileService"]
