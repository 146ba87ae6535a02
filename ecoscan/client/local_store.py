"""JSON file cache used by the client as its local bookkeeping store."""
from __future__ import annotations

import json
import os
from datetime import date, datetime
from pathlib import Path
from typing import Any, Sequence

from loguru import logger

from ecoscan.core.store import ClassificationRecord, DailyChallengeState
from ecoscan.utils.exceptions import StorageError, ValidationError


def _empty_state() -> dict[str, Any]:
    return {
        "username": "",
        "points": 0,
        "history": [],
        "achievements": [],
        "daily_challenge": {"date": None, "count": 0, "completed": False},
        "pending_sync": False,
    }


def _record_to_json(record: ClassificationRecord) -> dict[str, Any]:
    return {
        "type": record.waste_type,
        "action": record.action,
        "disposal": record.disposal,
        "points": record.points,
        "timestamp": record.timestamp.isoformat(),
    }


def _record_from_json(username: str, item: dict[str, Any]) -> ClassificationRecord:
    return ClassificationRecord(
        username=username,
        waste_type=item["type"],
        action=item["action"],
        disposal=item["disposal"],
        points=int(item["points"]),
        timestamp=datetime.fromisoformat(item["timestamp"]),
    )


class LocalBookkeepingStore:
    """Single-profile bookkeeping store backed by one JSON file.

    The cache holds exactly one player's state, so the ``username`` argument of
    the store methods is not used to partition data. All changes stay in memory
    until :meth:`flush`. ``pending_sync`` marks points recorded offline that
    still have to be pushed to the backend.
    """

    def __init__(self, path: Path | str, state: dict[str, Any] | None = None) -> None:
        self.path = Path(path)
        self._state = state if state is not None else _empty_state()
        self.dirty = False

    @classmethod
    def load(cls, path: Path | str) -> "LocalBookkeepingStore":
        path = Path(path)
        if not path.exists():
            return cls(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(f"Could not read local cache {path}.", {"path": str(path)}) from exc
        state = _empty_state()
        state.update({key: raw[key] for key in state if key in raw})
        return cls(path, state)

    def flush(self) -> None:
        """Write the cache atomically if anything changed."""

        if not self.dirty:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            tmp_path.write_text(json.dumps(self._state, indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StorageError(f"Could not write local cache {self.path}.", {"path": str(self.path)}) from exc
        self.dirty = False
        logger.debug(f"Local cache written to {self.path}")

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------
    @property
    def username(self) -> str:
        return self._state["username"]

    @username.setter
    def username(self, value: str) -> None:
        self._state["username"] = value
        self.dirty = True

    @property
    def pending_sync(self) -> bool:
        """True while the total holds points the backend has not seen."""

        return bool(self._state["pending_sync"])

    @pending_sync.setter
    def pending_sync(self, value: bool) -> None:
        self._state["pending_sync"] = bool(value)
        self.dirty = True

    def set_points(self, username: str, points: int) -> int:
        """Overwrite the cached total with an authoritative value."""

        if points < 0:
            raise ValidationError("Points must be non-negative.", {"field": "Points"})
        self._state["points"] = int(points)
        self.dirty = True
        return self._state["points"]

    def replace_history(self, username: str, records: Sequence[ClassificationRecord]) -> None:
        """Replace the cached history; ``records`` must be oldest first."""

        self._state["history"] = [_record_to_json(record) for record in records]
        self.dirty = True

    # ------------------------------------------------------------------
    # Bookkeeping store
    # ------------------------------------------------------------------
    def get_points(self, username: str) -> int:
        return int(self._state["points"])

    def add_points(self, username: str, delta: int) -> int:
        if delta <= 0:
            raise ValidationError("Points must be positive.", {"field": "Points"})
        self._state["points"] = int(self._state["points"]) + delta
        self.dirty = True
        return self._state["points"]

    def append_event(self, record: ClassificationRecord) -> None:
        self._state["history"].append(_record_to_json(record))
        self.dirty = True

    def history(self, username: str) -> list[ClassificationRecord]:
        return [_record_from_json(username, item) for item in self._state["history"]]

    def unlocked_achievements(self, username: str) -> list[str]:
        return list(self._state["achievements"])

    def add_achievements(self, username: str, names: Sequence[str]) -> None:
        for name in names:
            if name not in self._state["achievements"]:
                self._state["achievements"].append(name)
                self.dirty = True

    def daily_state(self, username: str) -> DailyChallengeState:
        raw = self._state["daily_challenge"]
        day = date.fromisoformat(raw["date"]) if raw.get("date") else None
        return DailyChallengeState(day=day, count=int(raw.get("count", 0)), completed=bool(raw.get("completed")))

    def save_daily_state(self, username: str, state: DailyChallengeState) -> None:
        self._state["daily_challenge"] = {
            "date": state.day.isoformat() if state.day else None,
            "count": state.count,
            "completed": state.completed,
        }
        self.dirty = True


__all__ = ["LocalBookkeepingStore"]
