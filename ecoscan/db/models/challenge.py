"""Daily challenge models."""
from sqlalchemy import Boolean, Column, Date, Integer, String, Text, UniqueConstraint

from ecoscan.db.base import Base


class Challenge(Base):
    """One entry of the shared daily challenge pool."""

    __tablename__ = "challenges"
    __table_args__ = (UniqueConstraint("day", "slot", name="uq_challenges_day_slot"),)

    id = Column(Integer, primary_key=True)
    description = Column(Text, nullable=False)
    points = Column(Integer, nullable=False)
    day = Column(Date, nullable=False, index=True)
    slot = Column(Integer, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    username = Column(String(64))


class DailyChallengeProgress(Base):
    """Personal daily streak counter, one row per user."""

    __tablename__ = "daily_challenge_progress"

    username = Column(String(64), primary_key=True)
    day = Column(Date, nullable=False)
    count = Column(Integer, nullable=False, default=0)
    completed = Column(Boolean, nullable=False, default=False)
