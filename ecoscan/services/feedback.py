"""User feedback collection."""
from __future__ import annotations

from loguru import logger
from sqlalchemy.orm import Session

from ecoscan.db.models.feedback import Feedback
from ecoscan.db.session import commit_or_raise
from ecoscan.utils.exceptions import require, require_username


ANONYMOUS = "Anonymous"


class FeedbackService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def submit(self, content: str | None, username: str | None = None) -> Feedback:
        """Store free-text feedback; a missing or blank username is recorded as ``Anonymous``."""

        content = require(content, "Feedback")
        author = require_username(username) if username and username.strip() else ANONYMOUS

        entry = Feedback(content=content, username=author)
        self.db.add(entry)
        commit_or_raise(self.db, "save feedback")
        logger.info(f"Feedback received from {author}")
        return entry


__all__ = ["ANONYMOUS", "FeedbackService"]
