"""Pytest fixtures for API and service tests."""

import os
from collections.abc import Generator

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ecoscan.api.deps import get_classifier, get_db
from ecoscan.core.classifier import CATALOGUE
from ecoscan.core.store import Classification
from ecoscan.db import models  # noqa: F401  # Imported for side effects
from ecoscan.db.base import Base
from ecoscan.main import create_app
from ecoscan.utils.cache import cache_backend


CATALOGUE_BY_TYPE = {item.waste_type: item for item in CATALOGUE}


class ScriptedClassifier:
    """Returns a fixed sequence of catalogue entries, repeating the last one."""

    def __init__(self, *waste_types: str) -> None:
        self.script(*(waste_types or ("Plastic",)))

    def script(self, *waste_types: str) -> None:
        self._queue: list[Classification] = [CATALOGUE_BY_TYPE[name] for name in waste_types]
        self.calls = 0

    def classify(self, image: bytes) -> Classification:
        index = min(self.calls, len(self._queue) - 1)
        self.calls += 1
        return self._queue[index]


@pytest.fixture()
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def file_session_factory(tmp_path) -> Generator[sessionmaker, None, None]:
    """Sessions over a file-backed SQLite database, one connection per thread."""

    engine = create_engine(
        f"sqlite:///{tmp_path / 'ecoscan.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()


@pytest.fixture(autouse=True)
def clear_cache() -> Generator[None, None, None]:
    cache_backend.clear()
    try:
        yield
    finally:
        cache_backend.clear()


@pytest.fixture()
def classifier() -> ScriptedClassifier:
    return ScriptedClassifier("Plastic")


@pytest.fixture()
def client(db_session: Session, classifier: ScriptedClassifier) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_classifier] = lambda: classifier
    with TestClient(app) as test_client:
        yield test_client


def upload(client: TestClient, username: str | None = "alice", image: bytes | None = b"fake-image"):
    """POST /classify the way the web client does."""

    data = {"username": username} if username is not None else {}
    files = {"image": ("waste.jpg", image, "image/jpeg")} if image is not None else None
    return client.post("/api/v1/classify", data=data, files=files)
