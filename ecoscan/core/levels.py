"""Level thresholds derived from a points total."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True, slots=True)
class Level:
    name: str
    min_points: int


@dataclass(frozen=True, slots=True)
class NextLevel:
    name: str
    min_points: int
    points_needed: int


DEFAULT_LEVELS: tuple[Level, ...] = (
    Level("Eco Novice", 0),
    Level("Eco Warrior", 50),
    Level("Eco Hero", 100),
    Level("Eco Legend", 200),
)


def level_for(points: int, levels: Sequence[Level] = DEFAULT_LEVELS) -> str:
    """Return the name of the highest level whose threshold does not exceed ``points``.

    ``levels`` must be ordered by ascending ``min_points`` and start at 0.
    """

    current = levels[0]
    for level in levels:
        if points >= level.min_points:
            current = level
    return current.name


def next_level(points: int, levels: Sequence[Level] = DEFAULT_LEVELS) -> NextLevel | None:
    """Return the first level above ``points``, or ``None`` at the top."""

    for level in levels:
        if level.min_points > points:
            return NextLevel(level.name, level.min_points, level.min_points - points)
    return None


__all__ = ["DEFAULT_LEVELS", "Level", "NextLevel", "level_for", "next_level"]
