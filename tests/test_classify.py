"""Tests for classification, history and per-user progress endpoints."""
from __future__ import annotations

from datetime import date

from sqlalchemy.exc import OperationalError

from conftest import upload


def test_classify_returns_outcome(client) -> None:
    response = upload(client)

    assert response.status_code == 200
    body = response.json()
    assert body.pop("timestamp")
    assert body == {
        "type": "Plastic",
        "action": "Recycle",
        "disposal": "blue recycling bin",
        "points": 10,
        "total_points": 10,
        "level": "Eco Novice",
        "achievements_unlocked": [],
        "daily_bonus": 0,
        "daily": {"day": date.today().isoformat(), "count": 1, "completed": False},
    }


def test_classify_requires_image(client) -> None:
    response = upload(client, image=None)
    assert response.status_code == 400
    assert response.json() == {"error": "No image uploaded."}


def test_classify_requires_username(client) -> None:
    response = upload(client, username=None)
    assert response.status_code == 400
    assert response.json() == {"error": "Username is required."}

    blank = upload(client, username="   ")
    assert blank.status_code == 400


def test_third_classification_completes_daily_challenge(client) -> None:
    totals = [upload(client).json() for _ in range(4)]

    assert [item["daily_bonus"] for item in totals] == [0, 0, 50, 0]
    assert [item["total_points"] for item in totals] == [10, 20, 80, 90]
    assert totals[2]["level"] == "Eco Warrior"

    daily = client.get("/api/v1/daily", params={"username": "alice"}).json()
    assert daily == {
        "username": "alice",
        "day": date.today().isoformat(),
        "count": 4,
        "target": 3,
        "completed": True,
        "bonus": 50,
    }


def test_achievements_unlock_once(client, classifier) -> None:
    classifier.script("Organic", "Organic", "Organic", "Organic")

    unlocked = [upload(client).json()["achievements_unlocked"] for _ in range(4)]
    assert unlocked == [[], [], ["Compost King"], []]

    body = client.get("/api/v1/achievements", params={"username": "alice"}).json()
    assert body["unlocked"] == ["Compost King"]
    progress = {item["name"]: item for item in body["progress"]}
    assert progress["Compost King"]["unlocked"] is True
    assert progress["Recycle Master"] == {
        "name": "Recycle Master",
        "description": "Recycle 5 items",
        "current": 0,
        "target": 5,
        "unlocked": False,
    }


def test_history_is_newest_first(client, classifier) -> None:
    classifier.script("Plastic", "Organic", "Glass")
    for _ in range(3):
        upload(client)
    upload(client, username="bob")

    history = client.get("/api/v1/history", params={"username": "alice"}).json()

    assert [item["type"] for item in history] == ["Glass", "Organic", "Plastic"]
    assert set(history[0]) == {"type", "action", "disposal", "points", "timestamp"}


def test_history_requires_username(client) -> None:
    response = client.get("/api/v1/history")
    assert response.status_code == 400
    assert response.json() == {"error": "Username is required."}


def test_profile_combines_progress(client) -> None:
    upload(client)
    client.post("/api/v1/leaderboard", json={"username": "bob", "points": 100})

    profile = client.get("/api/v1/profile", params={"username": "alice"}).json()

    assert profile["points"] == 10
    assert profile["level"] == "Eco Novice"
    assert profile["next_level"] == {"name": "Eco Warrior", "min_points": 50, "points_needed": 40}
    assert profile["rank"] == 2
    assert profile["achievements"] == []
    assert profile["daily"]["count"] == 1


def test_profile_for_unknown_user(client) -> None:
    profile = client.get("/api/v1/profile", params={"username": "ghost"}).json()

    assert profile["points"] == 0
    assert profile["rank"] is None
    assert profile["daily"]["count"] == 0


def test_storage_failure_rolls_back(client, db_session, monkeypatch) -> None:
    def failing_commit() -> None:
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db_session, "commit", failing_commit)

    response = upload(client)
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error."}

    monkeypatch.undo()
    assert client.get("/api/v1/history", params={"username": "alice"}).json() == []
    assert client.get("/api/v1/leaderboard").json() == []


def test_classify_rejects_overlong_username(client) -> None:
    response = upload(client, username="y" * 65)

    assert response.status_code == 400
    assert response.json() == {"error": "Username must be at most 64 characters."}
    assert client.get("/api/v1/leaderboard").json() == []
