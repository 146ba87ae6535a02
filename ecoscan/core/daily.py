"""Personal daily challenge: a per-day counter with a one-time bonus."""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date

from ecoscan.core.store import DailyChallengeState


DEFAULT_TARGET = 3
DEFAULT_BONUS = 50


@dataclass(frozen=True, slots=True)
class DailyAdvance:
    state: DailyChallengeState
    bonus_awarded: int = 0


def advance(
    state: DailyChallengeState,
    today: date,
    actions: int = 0,
    *,
    target: int = DEFAULT_TARGET,
    bonus: int = DEFAULT_BONUS,
) -> DailyAdvance:
    """Apply ``actions`` qualifying actions performed on ``today``.

    A stored state from another day is reset before counting. Completion is a
    latch: the bonus is reported only on the advance that first reaches
    ``target``.
    """

    if actions < 0:
        raise ValueError("actions must be non-negative")

    if state.day != today:
        state = DailyChallengeState(day=today, count=0, completed=False)

    state = replace(state, count=state.count + actions)

    if not state.completed and state.count >= target:
        return DailyAdvance(replace(state, completed=True), bonus_awarded=bonus)
    return DailyAdvance(state)


def current(state: DailyChallengeState, today: date) -> DailyChallengeState:
    """Return ``state`` as it should be displayed on ``today`` without recording anything."""

    if state.day != today:
        return DailyChallengeState(day=today)
    return state


__all__ = ["DEFAULT_BONUS", "DEFAULT_TARGET", "DailyAdvance", "advance", "current"]
