"""Static waste disposal guide."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GuideEntry:
    type: str
    instructions: str


GUIDE: tuple[GuideEntry, ...] = (
    GuideEntry("Plastic", "Recycle in blue bins."),
    GuideEntry("Paper", "Recycle if clean, compost if soiled."),
    GuideEntry("Organic", "Compost in green bins."),
    GuideEntry("Glass", "Recycle in designated glass bins."),
    GuideEntry("Metal", "Recycle aluminum and steel cans."),
)

TUTORIAL_STEPS: tuple[str, ...] = (
    "Welcome to EcoScan! Upload an image to classify waste and earn points.",
    "Check your progress, level, and achievements on your profile.",
    "See how you rank against others on the leaderboard.",
    "Use the waste guide to learn about proper disposal methods.",
    "Share your feedback to help us improve!",
    "Complete daily challenges to earn bonus points!",
    "View your full classification history.",
)


def search(term: str | None = None) -> list[GuideEntry]:
    """Case-insensitive substring match on type or instructions; blank returns everything."""

    needle = (term or "").strip().lower()
    if not needle:
        return list(GUIDE)
    return [
        entry
        for entry in GUIDE
        if needle in entry.type.lower() or needle in entry.instructions.lower()
    ]


__all__ = ["GUIDE", "GuideEntry", "TUTORIAL_STEPS", "search"]
