"""Tests for the client session and its local cache."""
from __future__ import annotations

import json
from datetime import date, datetime, timedelta

import httpx
import pytest

from conftest import ScriptedClassifier
from ecoscan.client.api import EcoScanClient
from ecoscan.client.local_store import LocalBookkeepingStore
from ecoscan.client.session import EcoScanSession
from ecoscan.core.store import DailyChallengeState
from ecoscan.utils.exceptions import ValidationError


class UnreachableApi:
    """Stands in for a backend that cannot be reached."""

    def classify(self, username: str, image: bytes):
        raise httpx.ConnectError("connection refused")

    def close(self) -> None:
        pass


def test_offline_session_records_and_persists(tmp_path) -> None:
    path = tmp_path / "state.json"
    session = EcoScanSession.open(path, classifier=ScriptedClassifier("Organic"))
    session.store.username = "dana"
    start = datetime(2024, 5, 1, 8, 0).astimezone()

    outcomes = [session.classify(b"img", now=start + timedelta(minutes=i)) for i in range(3)]
    session.close()

    assert outcomes[-1].total_points == 86
    assert outcomes[-1].new_achievements == ["Compost King"]

    saved = json.loads(path.read_text())
    assert saved["username"] == "dana"
    assert saved["points"] == 86
    assert saved["achievements"] == ["Compost King"]
    assert saved["daily_challenge"] == {"date": "2024-05-01", "count": 3, "completed": True}
    assert [item["type"] for item in saved["history"]] == ["Organic"] * 3

    reopened = EcoScanSession.open(path)
    assert reopened.points == 86
    assert reopened.level == "Eco Warrior"


def test_classify_requires_username_and_image(tmp_path) -> None:
    session = EcoScanSession(LocalBookkeepingStore(tmp_path / "state.json"))
    with pytest.raises(ValidationError):
        session.classify(b"img")

    session.store.username = "dana"
    with pytest.raises(ValidationError):
        session.classify(b"")


def test_falls_back_to_offline_when_backend_unreachable(tmp_path) -> None:
    session = EcoScanSession(
        LocalBookkeepingStore(tmp_path / "state.json"),
        api=UnreachableApi(),
        classifier=ScriptedClassifier("Metal"),
    )
    session.store.username = "dana"

    outcome = session.classify(b"img")

    assert outcome.record.waste_type == "Metal"
    assert session.points == 10


def test_online_session_mirrors_backend(client, tmp_path) -> None:
    session = EcoScanSession(
        LocalBookkeepingStore(tmp_path / "state.json"),
        api=EcoScanClient(http=client),
    )
    session.save_username("erin")

    for _ in range(3):
        outcome = session.classify(b"img")

    assert outcome.daily_bonus == 50
    assert session.points == 80
    assert client.get("/api/v1/profile", params={"username": "erin"}).json()["points"] == 80
    assert session.store.daily_state("erin").completed is True

    history = session.refresh_history()
    assert len(history) == 3
    assert len(session.store.history("erin")) == 3


def test_sync_pushes_offline_total(client, tmp_path) -> None:
    store = LocalBookkeepingStore(tmp_path / "state.json")
    store.username = "fay"
    store.add_points("fay", 33)
    session = EcoScanSession(store, api=EcoScanClient(http=client))

    session.sync()

    board = client.get("/api/v1/leaderboard").json()
    assert board == [{"rank": 1, "username": "fay", "points": 33}]


def test_complete_challenge_adds_points_locally(client, tmp_path) -> None:
    session = EcoScanSession(
        LocalBookkeepingStore(tmp_path / "state.json"),
        api=EcoScanClient(http=client),
    )
    session.save_username("gus")
    challenge_id = client.get("/api/v1/challenges", params={"username": "gus"}).json()[1]["id"]

    assert session.complete_challenge(challenge_id) == 15
    assert session.points == 15


def test_corrupt_cache_raises_storage_error(tmp_path) -> None:
    from ecoscan.utils.exceptions import StorageError

    path = tmp_path / "state.json"
    path.write_text("{not json")

    with pytest.raises(StorageError):
        LocalBookkeepingStore.load(path)


def test_online_classification_adopts_backend_state(client, tmp_path) -> None:
    session = EcoScanSession(
        LocalBookkeepingStore(tmp_path / "state.json"),
        classifier=ScriptedClassifier("Plastic"),
    )
    session.store.username = "hal"
    session.classify(b"img")
    session.classify(b"img")
    assert session.store.pending_sync is True
    assert session.points == 20

    session.api = EcoScanClient(http=client)
    outcome = session.classify(b"img", now=datetime(2000, 1, 1, 12, 0).astimezone())

    # Offline points were pushed before the online classification was credited
    assert outcome.total_points == 30
    assert session.points == 30
    assert session.store.pending_sync is False
    assert client.get("/api/v1/profile", params={"username": "hal"}).json()["points"] == 30

    server_daily = client.get("/api/v1/daily", params={"username": "hal"}).json()
    assert (server_daily["count"], server_daily["completed"]) == (1, False)
    assert session.store.daily_state("hal") == DailyChallengeState(day=date.today(), count=1, completed=False)
    assert outcome.daily_bonus == 0

    mirrored = session.store.history("hal")[-1]
    assert mirrored.timestamp.date() == date.today()
    assert mirrored == outcome.record


def test_pending_total_survives_reopen(client, tmp_path) -> None:
    path = tmp_path / "state.json"
    offline = EcoScanSession.open(path, classifier=ScriptedClassifier("Paper"))
    offline.store.username = "ivy"
    offline.classify(b"img")
    offline.close()

    online = EcoScanSession.open(path, api=EcoScanClient(http=client))
    assert online.store.pending_sync is True
    online.sync()

    assert online.store.pending_sync is False
    assert json.loads(path.read_text())["pending_sync"] is False
    board = client.get("/api/v1/leaderboard").json()
    assert board == [{"rank": 1, "username": "ivy", "points": 8}]
