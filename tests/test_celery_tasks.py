"""Tests for Celery background tasks."""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from sqlalchemy.orm import sessionmaker

from ecoscan.db.models.achievement import UserAchievement
from ecoscan.db.models.challenge import Challenge
from ecoscan.db.models.classification import ClassificationEvent
from ecoscan.tasks.achievements import check_all_achievements, check_user_achievements
from ecoscan.tasks.challenges import materialise_daily_challenges, prune_old_challenges


@pytest.fixture()
def task_session_factory(db_session):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=db_session.bind)
    sessions: list = []

    def create_session():
        session = factory()
        sessions.append(session)
        return session

    try:
        yield create_session
    finally:
        for session in sessions:
            session.close()


@pytest.fixture()
def compost_history(db_session):
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    db_session.add_all(
        ClassificationEvent(
            username="carol",
            waste_type="Organic",
            action="Compost",
            disposal="green compost bin",
            points=12,
            created_at=stamp + timedelta(minutes=i),
        )
        for i in range(3)
    )
    db_session.commit()


def test_materialise_daily_challenges_is_idempotent(db_session, task_session_factory):
    with patch("ecoscan.tasks.challenges.SessionLocal", side_effect=task_session_factory):
        first = materialise_daily_challenges.run("2024-02-01")
        second = materialise_daily_challenges.run("2024-02-01")

    assert first == {"day": "2024-02-01", "challenges": 3}
    assert second == first
    assert db_session.query(Challenge).filter(Challenge.day == date(2024, 2, 1)).count() == 3


def test_prune_old_challenges(db_session, task_session_factory):
    old_day = (date.today() - timedelta(days=45)).isoformat()

    with patch("ecoscan.tasks.challenges.SessionLocal", side_effect=task_session_factory):
        materialise_daily_challenges.run(old_day)
        materialise_daily_challenges.run()
        result = prune_old_challenges.run(30)

    assert result["deleted"] == 3
    assert db_session.query(Challenge).count() == 3


def test_check_user_achievements(db_session, task_session_factory, compost_history):
    with patch("ecoscan.tasks.achievements.SessionLocal", side_effect=task_session_factory):
        first = check_user_achievements.run("carol")
        second = check_user_achievements.run("carol")

    assert first == {"username": "carol", "newly_unlocked": 1, "achievements": ["Compost King"]}
    assert second["newly_unlocked"] == 0
    names = [row.name for row in db_session.query(UserAchievement).filter_by(username="carol")]
    assert names == ["Compost King"]


def test_check_all_achievements(db_session, task_session_factory, compost_history):
    with patch("ecoscan.tasks.achievements.SessionLocal", side_effect=task_session_factory):
        result = check_all_achievements.run()

    assert result == {"users_checked": 1, "total_unlocked": 1}
