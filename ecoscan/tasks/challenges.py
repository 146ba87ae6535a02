"""Celery tasks maintaining the shared challenge pool."""
from __future__ import annotations

from datetime import date, timedelta

from loguru import logger

from ecoscan.celery_app import celery_app
from ecoscan.config import settings
from ecoscan.db.session import SessionLocal
from ecoscan.services.challenges import ChallengeService


@celery_app.task(name="ecoscan.tasks.challenges.materialise_daily_challenges")
def materialise_daily_challenges(day: str | None = None) -> dict[str, int | str]:
    """Create the pool for ``day`` (ISO date, default today) ahead of the first request."""

    target = date.fromisoformat(day) if day else date.today()
    db = SessionLocal()
    try:
        rows = ChallengeService(db).ensure_pool(target)
        logger.info(f"Challenge pool ready for {target.isoformat()} ({len(rows)} challenges)")
        return {"day": target.isoformat(), "challenges": len(rows)}
    except Exception as exc:
        logger.error(f"Materialising challenges for {target.isoformat()} failed: {exc}")
        raise
    finally:
        db.close()


@celery_app.task(name="ecoscan.tasks.challenges.prune_old_challenges")
def prune_old_challenges(retention_days: int | None = None) -> dict[str, int | str]:
    """Delete pools older than the retention window."""

    days = retention_days if retention_days is not None else settings.CHALLENGE_RETENTION_DAYS
    cutoff = date.today() - timedelta(days=days)
    db = SessionLocal()
    try:
        deleted = ChallengeService(db).prune_before(cutoff)
        logger.info(f"Pruned {deleted} challenges older than {cutoff.isoformat()}")
        return {"cutoff": cutoff.isoformat(), "deleted": deleted}
    except Exception as exc:
        logger.error(f"Pruning challenges before {cutoff.isoformat()} failed: {exc}")
        raise
    finally:
        db.close()
