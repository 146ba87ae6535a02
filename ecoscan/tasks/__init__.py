"""Celery tasks package."""

from ecoscan.tasks import achievements, challenges

__all__ = ["achievements", "challenges"]
