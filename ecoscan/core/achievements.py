"""Achievement rules evaluated against a user's classification history."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Sequence

from ecoscan.core.store import ClassificationRecord


@dataclass(frozen=True, slots=True)
class AchievementRule:
    """Unlocks ``name`` once the history holds ``threshold`` entries with ``action``."""

    name: str
    action: str
    threshold: int
    description: str = ""


@dataclass(frozen=True, slots=True)
class AchievementProgress:
    name: str
    description: str
    current: int
    target: int
    unlocked: bool


def default_rules(recycle_threshold: int = 5, compost_threshold: int = 3) -> tuple[AchievementRule, ...]:
    """Return the standard rule set.

    Two thresholds are in use: 5/3 (default) and 10/5 for the extended variant.
    """

    return (
        AchievementRule(
            name="Recycle Master",
            action="Recycle",
            threshold=recycle_threshold,
            description=f"Recycle {recycle_threshold} items",
        ),
        AchievementRule(
            name="Compost King",
            action="Compost",
            threshold=compost_threshold,
            description=f"Compost {compost_threshold} items",
        ),
    )


def _action_counts(history: Iterable[ClassificationRecord]) -> Counter[str]:
    return Counter(record.action for record in history)


def evaluate(
    history: Iterable[ClassificationRecord],
    unlocked: Iterable[str],
    rules: Sequence[AchievementRule],
) -> list[str]:
    """Return the names newly unlocked by ``history``, in rule declaration order.

    Names already present in ``unlocked`` are never returned, so evaluating the
    same history twice unlocks nothing the second time.
    """

    counts = _action_counts(history)
    already = set(unlocked)
    newly_unlocked: list[str] = []
    for rule in rules:
        if rule.name in already:
            continue
        if counts[rule.action] >= rule.threshold:
            newly_unlocked.append(rule.name)
            already.add(rule.name)
    return newly_unlocked


def progress(
    history: Iterable[ClassificationRecord],
    unlocked: Iterable[str],
    rules: Sequence[AchievementRule],
) -> list[AchievementProgress]:
    """Return per-rule progress for display."""

    counts = _action_counts(history)
    already = set(unlocked)
    return [
        AchievementProgress(
            name=rule.name,
            description=rule.description,
            current=min(counts[rule.action], rule.threshold),
            target=rule.threshold,
            unlocked=rule.name in already,
        )
        for rule in rules
    ]


__all__ = [
    "AchievementProgress",
    "AchievementRule",
    "default_rules",
    "evaluate",
    "progress",
]
