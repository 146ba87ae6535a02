"""Tests for the personal daily challenge counter."""
from __future__ import annotations

from datetime import date

import pytest

from ecoscan.core.daily import advance, current
from ecoscan.core.store import DailyChallengeState


def test_bonus_awarded_once_per_day_and_reset_next_day() -> None:
    jan1, jan2 = date(2024, 1, 1), date(2024, 1, 2)
    state = DailyChallengeState()
    bonuses = []

    for day in (jan1, jan1, jan1, jan1, jan2):
        step = advance(state, day, 1)
        state = step.state
        bonuses.append(step.bonus_awarded)

    assert bonuses == [0, 0, 50, 0, 0]
    assert state == DailyChallengeState(day=jan2, count=1, completed=False)


def test_zero_actions_resets_stale_day_without_bonus() -> None:
    stale = DailyChallengeState(day=date(2024, 1, 1), count=3, completed=True)
    step = advance(stale, date(2024, 1, 5))
    assert step.state == DailyChallengeState(day=date(2024, 1, 5), count=0, completed=False)
    assert step.bonus_awarded == 0


def test_batch_crossing_target_awards_once() -> None:
    step = advance(DailyChallengeState(), date(2024, 1, 1), 5, target=3, bonus=25)
    assert step.state.completed is True
    assert step.bonus_awarded == 25


def test_negative_actions_rejected() -> None:
    with pytest.raises(ValueError):
        advance(DailyChallengeState(), date(2024, 1, 1), -1)


def test_current_shows_reset_without_mutating() -> None:
    stored = DailyChallengeState(day=date(2024, 1, 1), count=2, completed=False)
    shown = current(stored, date(2024, 1, 2))
    assert shown.count == 0
    assert stored.count == 2
    assert current(stored, date(2024, 1, 1)) is stored
