"""Classification history model."""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String

from ecoscan.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ClassificationEvent(Base):
    """Append-only record of a single waste-sorting action."""

    __tablename__ = "classifications"
    __table_args__ = (Index("ix_classifications_username_created_at", "username", "created_at"),)

    id = Column(Integer, primary_key=True)
    username = Column(String(64), nullable=False)
    waste_type = Column(String(50), nullable=False)
    action = Column(String(20), nullable=False)
    disposal = Column(String(255), nullable=False)
    points = Column(Integer, nullable=False)

    # Set client-side so events recorded within the same second keep their order
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
