"""Tests for the shared daily challenge pool."""
from __future__ import annotations

from datetime import date, timedelta

from concurrent.futures import ThreadPoolExecutor

import pytest

from ecoscan.db.models.challenge import Challenge
from ecoscan.services.challenges import CHALLENGE_POOL, ChallengeService
from ecoscan.services.ledger import ScoreLedger
from ecoscan.utils.exceptions import NotFoundOrAlreadyCompleted


def test_pool_is_materialised_once(db_session) -> None:
    service = ChallengeService(db_session)
    today = date(2024, 3, 1)

    first = service.challenges_for("alice", today)
    second = service.challenges_for("bob", today)

    assert [(c.description, c.points) for c in first] == list(CHALLENGE_POOL)
    assert [c.id for c in first] == [c.id for c in second]
    assert db_session.query(Challenge).count() == 3


def test_exactly_one_completion_wins(db_session) -> None:
    service = ChallengeService(db_session)
    challenge = service.challenges_for("alice", date.today())[0]

    assert service.complete(challenge.id, "alice") == 20
    with pytest.raises(NotFoundOrAlreadyCompleted):
        service.complete(challenge.id, "bob")
    with pytest.raises(NotFoundOrAlreadyCompleted):
        service.complete(challenge.id, "alice")

    ledger = ScoreLedger(db_session)
    assert ledger.get_points("alice") == 20
    assert ledger.get_points("bob") == 0


def test_unknown_challenge_is_rejected(db_session) -> None:
    with pytest.raises(NotFoundOrAlreadyCompleted):
        ChallengeService(db_session).complete(9999, "alice")


def test_completion_visible_only_to_completer(db_session) -> None:
    service = ChallengeService(db_session)
    today = date.today()
    challenge = service.challenges_for("alice", today)[1]
    service.complete(challenge.id, "alice")

    mine = {c.id: c.completed for c in service.challenges_for("alice", today)}
    theirs = {c.id: c.completed for c in service.challenges_for("bob", today)}

    assert mine[challenge.id] is True
    assert theirs[challenge.id] is False


def test_prune_before(db_session) -> None:
    service = ChallengeService(db_session)
    today = date.today()
    service.ensure_pool(today - timedelta(days=40))
    service.ensure_pool(today)

    assert service.prune_before(today - timedelta(days=30)) == 3
    assert db_session.query(Challenge).count() == 3


def test_challenge_endpoints(client) -> None:
    listing = client.get("/api/v1/challenges", params={"username": "alice"})
    assert listing.status_code == 200
    challenges = listing.json()
    assert [c["description"] for c in challenges] == [description for description, _ in CHALLENGE_POOL]
    assert all(c["completed"] is False for c in challenges)

    target = challenges[0]["id"]
    won = client.post("/api/v1/challenges", json={"challengeId": target, "username": "alice"})
    assert won.status_code == 200
    assert won.json() == {"points": 20}

    lost = client.post("/api/v1/challenges", json={"challengeId": target, "username": "bob"})
    assert lost.status_code == 400
    assert lost.json() == {"error": "Challenge not found or already completed."}

    mine = client.get("/api/v1/challenges", params={"username": "alice"}).json()
    assert mine[0]["completed"] is True
    assert mine[0]["username"] == "alice"

    rank = client.get("/api/v1/leaderboard/rank", params={"username": "alice"}).json()
    assert rank == {"username": "alice", "rank": 1, "points": 20}


def test_challenge_claim_validation(client) -> None:
    missing_id = client.post("/api/v1/challenges", json={"username": "alice"})
    assert missing_id.status_code == 400
    assert missing_id.json() == {"error": "Challenge ID and username required."}

    missing_user = client.post("/api/v1/challenges", json={"challengeId": 1})
    assert missing_user.status_code == 400


def test_concurrent_claims_have_one_winner(file_session_factory) -> None:
    setup = file_session_factory()
    try:
        challenge = ChallengeService(setup).challenges_for("user0", date.today())[0]
    finally:
        setup.close()
    usernames = [f"user{index}" for index in range(16)]

    def claim(username: str) -> int | None:
        db = file_session_factory()
        try:
            return ChallengeService(db).complete(challenge.id, username)
        except NotFoundOrAlreadyCompleted:
            return None
        finally:
            db.close()

    with ThreadPoolExecutor(max_workers=len(usernames)) as pool:
        results = dict(zip(usernames, pool.map(claim, usernames)))

    winners = [name for name, awarded in results.items() if awarded is not None]
    assert len(winners) == 1
    assert results[winners[0]] == challenge.points

    db = file_session_factory()
    try:
        ledger = ScoreLedger(db)
        assert sum(ledger.get_points(name) for name in usernames) == challenge.points
        row = db.get(Challenge, challenge.id)
        assert row.completed is True
        assert row.username == winners[0]
    finally:
        db.close()
