"""Achievement tracking models."""
from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from ecoscan.db.base import Base


class UserAchievement(Base):
    """Achievements unlocked per user. Rows are never deleted."""

    __tablename__ = "user_achievements"
    __table_args__ = (UniqueConstraint("username", "name", name="uq_user_achievements_username_name"),)

    id = Column(Integer, primary_key=True)
    username = Column(String(64), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    unlocked_at = Column(DateTime(timezone=True), server_default=func.now())
