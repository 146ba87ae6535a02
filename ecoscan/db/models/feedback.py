"""User feedback model."""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text

from ecoscan.db.base import Base


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True)
    content = Column(Text, nullable=False)
    username = Column(String(64), nullable=False, default="Anonymous")
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
