"""Celery tasks for achievement processing."""
from __future__ import annotations

from loguru import logger

from ecoscan.celery_app import celery_app
from ecoscan.db.session import SessionLocal
from ecoscan.services.profile import ProfileService
from ecoscan.utils.exceptions import EcoScanError


@celery_app.task(name="ecoscan.tasks.achievements.check_user_achievements")
def check_user_achievements(username: str) -> dict[str, int | list[str] | str]:
    """Re-evaluate the achievement rules for one user."""

    db = SessionLocal()
    try:
        newly_unlocked = ProfileService(db).recheck_achievements(username)
        logger.info(f"Achievement check for {username} unlocked {len(newly_unlocked)}")
        return {
            "username": username,
            "newly_unlocked": len(newly_unlocked),
            "achievements": newly_unlocked,
        }
    except Exception as exc:
        logger.error(f"Achievement check failed for {username}: {exc}")
        raise
    finally:
        db.close()


@celery_app.task(name="ecoscan.tasks.achievements.check_all_achievements")
def check_all_achievements() -> dict[str, int]:
    """Re-evaluate every user with recorded classifications."""

    db = SessionLocal()
    try:
        service = ProfileService(db)
        usernames = service.known_usernames()

        total_checked = 0
        total_unlocked = 0
        for username in usernames:
            try:
                total_unlocked += len(service.recheck_achievements(username))
            except EcoScanError as exc:
                logger.error(f"Achievement check failed for {username}: {exc.message}")
                continue
            total_checked += 1

        logger.info(
            f"Bulk achievement check completed: {total_checked} users, {total_unlocked} unlocked"
        )
        return {"users_checked": total_checked, "total_unlocked": total_unlocked}
    finally:
        db.close()
