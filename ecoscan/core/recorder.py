"""Record a classification and apply every bookkeeping rule that follows from it."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from loguru import logger

from ecoscan.core import daily
from ecoscan.core.achievements import AchievementRule, default_rules, evaluate
from ecoscan.core.levels import DEFAULT_LEVELS, Level, level_for
from ecoscan.core.store import (
    BookkeepingStore,
    Classification,
    ClassificationRecord,
    DailyChallengeState,
)


@dataclass(slots=True)
class RecordOutcome:
    """Everything a caller needs to report after a classification."""

    record: ClassificationRecord
    total_points: int
    level: str
    daily: DailyChallengeState
    daily_bonus: int = 0
    new_achievements: list[str] = field(default_factory=list)


class ClassificationRecorder:
    """Drive points, achievements and the daily counter from a classification.

    The recorder owns no state; everything is read from and written to the
    store, so the same rules run against the backend and the offline cache.
    Writes are ordered so points follow the event they reward.
    """

    def __init__(
        self,
        store: BookkeepingStore,
        *,
        rules: Sequence[AchievementRule] | None = None,
        levels: Sequence[Level] = DEFAULT_LEVELS,
        daily_target: int = daily.DEFAULT_TARGET,
        daily_bonus: int = daily.DEFAULT_BONUS,
    ) -> None:
        self.store = store
        self.rules = tuple(rules) if rules is not None else default_rules()
        self.levels = tuple(levels)
        self.daily_target = daily_target
        self.daily_bonus = daily_bonus

    def record(
        self,
        username: str,
        classification: Classification,
        *,
        now: datetime | None = None,
    ) -> RecordOutcome:
        now = now or datetime.now().astimezone()

        record = ClassificationRecord.from_classification(username, classification, now)
        self.store.append_event(record)

        if classification.points > 0:
            total = self.store.add_points(username, classification.points)
        else:
            total = self.store.get_points(username)

        new_achievements = evaluate(
            self.store.history(username),
            self.store.unlocked_achievements(username),
            self.rules,
        )
        if new_achievements:
            self.store.add_achievements(username, new_achievements)
            for name in new_achievements:
                logger.info(f"Achievement unlocked for {username}: {name}")

        step = daily.advance(
            self.store.daily_state(username),
            now.date(),
            1,
            target=self.daily_target,
            bonus=self.daily_bonus,
        )
        self.store.save_daily_state(username, step.state)
        if step.bonus_awarded:
            total = self.store.add_points(username, step.bonus_awarded)
            logger.info(f"Daily challenge completed by {username}: +{step.bonus_awarded} points")

        return RecordOutcome(
            record=record,
            total_points=total,
            level=level_for(total, self.levels),
            daily=step.state,
            daily_bonus=step.bonus_awarded,
            new_achievements=new_achievements,
        )


__all__ = ["ClassificationRecorder", "RecordOutcome"]
