"""Client session: one player, one local cache, an optional backend."""
from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

import httpx
from loguru import logger

from ecoscan.client.api import EcoScanClient
from ecoscan.client.local_store import LocalBookkeepingStore
from ecoscan.config import settings
from ecoscan.core.achievements import default_rules
from ecoscan.core.classifier import Classifier, RandomClassifier
from ecoscan.core.levels import level_for
from ecoscan.core.recorder import ClassificationRecorder, RecordOutcome
from ecoscan.core.store import Classification, ClassificationRecord, DailyChallengeState
from ecoscan.utils.exceptions import ValidationError, require_username


class EcoScanSession:
    """Explicit replacement for process-wide client state.

    Classifications go to the backend when it is reachable and the outcome is
    mirrored into the local cache. When the backend cannot be reached the same
    recorder rules run against the cache and the total is marked pending. A
    pending total is pushed (last write wins) by :meth:`sync` or before the next
    online classification. After an online classification the backend's total,
    timestamp and daily counter replace the cached ones, so offline daily
    progress the backend never saw is not carried forward.
    """

    def __init__(
        self,
        store: LocalBookkeepingStore,
        *,
        api: Optional[EcoScanClient] = None,
        classifier: Optional[Classifier] = None,
    ) -> None:
        self.store = store
        self.api = api
        self.classifier = classifier or RandomClassifier()
        self.recorder = ClassificationRecorder(
            store,
            rules=default_rules(settings.RECYCLE_MASTER_THRESHOLD, settings.COMPOST_KING_THRESHOLD),
            daily_target=settings.DAILY_CHALLENGE_TARGET,
            daily_bonus=settings.DAILY_CHALLENGE_BONUS,
        )

    @classmethod
    def open(
        cls,
        path: Optional[Path | str] = None,
        api: Optional[EcoScanClient] = None,
        classifier: Optional[Classifier] = None,
    ) -> "EcoScanSession":
        store = LocalBookkeepingStore.load(path or settings.LOCAL_CACHE_PATH)
        return cls(store, api=api, classifier=classifier)

    def close(self) -> None:
        self.store.flush()
        if self.api is not None:
            self.api.close()

    def __enter__(self) -> "EcoScanSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    @property
    def username(self) -> str:
        return self.store.username

    @property
    def points(self) -> int:
        return self.store.get_points(self.username)

    @property
    def level(self) -> str:
        return level_for(self.points)

    def _require_username(self) -> str:
        if not self.username:
            raise ValidationError("Please save a username first.", {"field": "Username"})
        return self.username

    # ------------------------------------------------------------------
    def classify(self, image: bytes, *, now: Optional[datetime] = None) -> RecordOutcome:
        username = self._require_username()
        if not image:
            raise ValidationError("No image uploaded.", {"field": "image"})

        if self.api is not None:
            try:
                if self.store.pending_sync:
                    self._push_total(username)
                payload = self.api.classify(username, image)
            except httpx.TransportError as exc:
                logger.warning(f"Backend unreachable, classifying offline: {exc}")
            else:
                outcome = self._mirror(username, payload)
                self.store.flush()
                return outcome

        outcome = self.recorder.record(username, self.classifier.classify(image), now=now)
        self.store.pending_sync = True
        self.store.flush()
        return outcome

    def _mirror(self, username: str, payload: dict[str, Any]) -> RecordOutcome:
        """Copy a backend outcome into the cache; the backend state is authoritative."""

        record = ClassificationRecord.from_classification(
            username,
            Classification(
                waste_type=payload["type"],
                action=payload["action"],
                disposal=payload["disposal"],
                points=int(payload["points"]),
            ),
            datetime.fromisoformat(payload["timestamp"]),
        )
        self.store.append_event(record)
        total = self.store.set_points(username, int(payload["total_points"]))
        unlocked = list(payload.get("achievements_unlocked") or [])
        self.store.add_achievements(username, unlocked)

        raw = payload["daily"]
        state = DailyChallengeState(
            day=date.fromisoformat(raw["day"]) if raw.get("day") else None,
            count=int(raw["count"]),
            completed=bool(raw["completed"]),
        )
        self.store.save_daily_state(username, state)

        return RecordOutcome(
            record=record,
            total_points=total,
            level=payload.get("level") or level_for(total),
            daily=state,
            daily_bonus=int(payload.get("daily_bonus") or 0),
            new_achievements=unlocked,
        )

    def _push_total(self, username: str) -> None:
        self.api.submit_score(username, self.points)
        self.store.pending_sync = False
        logger.info(f"Synced {self.points} points for {username}")

    def save_username(self, name: str) -> str:
        """Adopt ``name`` and register the current total under it."""

        name = require_username(name)
        if self.api is not None:
            self.api.update_user(name, self.points)
            self.store.pending_sync = False
        self.store.username = name
        self.store.flush()
        logger.info(f"Username saved: {name}")
        return name

    def sync(self) -> None:
        """Push the local total to the leaderboard."""

        username = self._require_username()
        if self.api is None:
            raise ValidationError("No backend configured.")
        self._push_total(username)
        self.store.flush()

    def complete_challenge(self, challenge_id: int) -> int:
        username = self._require_username()
        if self.api is None:
            raise ValidationError("No backend configured.")
        awarded = int(self.api.complete_challenge(challenge_id, username)["points"])
        if awarded > 0:
            self.store.add_points(username, awarded)
        self.store.flush()
        return awarded

    def refresh_history(self) -> list[ClassificationRecord]:
        """Replace the cached history with the backend's copy."""

        username = self._require_username()
        if self.api is None:
            return list(reversed(self.store.history(username)))
        records = [
            ClassificationRecord(
                username=username,
                waste_type=item["type"],
                action=item["action"],
                disposal=item["disposal"],
                points=int(item["points"]),
                timestamp=datetime.fromisoformat(item["timestamp"]),
            )
            for item in self.api.history(username)
        ]
        # Backend returns newest first; the cache keeps oldest first
        self.store.replace_history(username, list(reversed(records)))
        self.store.flush()
        return records


__all__ = ["EcoScanSession"]
