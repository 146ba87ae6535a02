"""Domain records shared by the bookkeeping core and its storage adapters."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol, Sequence


@dataclass(frozen=True, slots=True)
class Classification:
    """Result returned by the classification oracle."""

    waste_type: str
    action: str
    disposal: str
    points: int


@dataclass(frozen=True, slots=True)
class ClassificationRecord:
    """A classification attributed to a user at a point in time."""

    username: str
    waste_type: str
    action: str
    disposal: str
    points: int
    timestamp: datetime

    @classmethod
    def from_classification(
        cls, username: str, result: Classification, timestamp: datetime
    ) -> "ClassificationRecord":
        return cls(
            username=username,
            waste_type=result.waste_type,
            action=result.action,
            disposal=result.disposal,
            points=result.points,
            timestamp=timestamp,
        )


@dataclass(frozen=True, slots=True)
class DailyChallengeState:
    """Personal daily counter. ``day`` is ``None`` before the first classification."""

    day: date | None = None
    count: int = 0
    completed: bool = False


class BookkeepingStore(Protocol):
    """Read/write contract implemented by the backend and the local cache."""

    def get_points(self, username: str) -> int:  # pragma: no cover - interface definition
        """Return the user's total, 0 when unknown."""

    def add_points(self, username: str, delta: int) -> int:  # pragma: no cover - interface definition
        """Atomically add ``delta`` and return the new total."""

    def append_event(self, record: ClassificationRecord) -> None:  # pragma: no cover - interface definition
        """Append a classification to the user's history."""

    def history(self, username: str) -> Sequence[ClassificationRecord]:  # pragma: no cover - interface definition
        """Return the user's classifications, oldest first."""

    def unlocked_achievements(self, username: str) -> list[str]:  # pragma: no cover - interface definition
        """Return achievement names in unlock order."""

    def add_achievements(self, username: str, names: Sequence[str]) -> None:  # pragma: no cover - interface definition
        """Add names to the unlocked set."""

    def daily_state(self, username: str) -> DailyChallengeState:  # pragma: no cover - interface definition
        """Return the stored daily counter."""

    def save_daily_state(self, username: str, state: DailyChallengeState) -> None:  # pragma: no cover - interface definition
        """Persist the daily counter."""


__all__ = [
    "BookkeepingStore",
    "Classification",
    "ClassificationRecord",
    "DailyChallengeState",
]
