"""Tests for level thresholds."""
from __future__ import annotations

import pytest

from ecoscan.core.levels import DEFAULT_LEVELS, Level, level_for, next_level


@pytest.mark.parametrize(
    ("points", "expected"),
    [
        (0, "Eco Novice"),
        (49, "Eco Novice"),
        (50, "Eco Warrior"),
        (99, "Eco Warrior"),
        (100, "Eco Hero"),
        (200, "Eco Legend"),
        (10_000, "Eco Legend"),
    ],
)
def test_level_for_thresholds(points: int, expected: str) -> None:
    assert level_for(points) == expected


def test_level_for_is_monotonic() -> None:
    order = [level.name for level in DEFAULT_LEVELS]
    seen = [order.index(level_for(points)) for points in range(0, 300)]
    assert seen == sorted(seen)


def test_next_level_reports_points_needed() -> None:
    upcoming = next_level(30)
    assert upcoming is not None
    assert upcoming.name == "Eco Warrior"
    assert upcoming.points_needed == 20
    assert next_level(200) is None


def test_custom_levels() -> None:
    levels = (Level("Seed", 0), Level("Tree", 10))
    assert level_for(9, levels) == "Seed"
    assert level_for(10, levels) == "Tree"
