"""Classification oracle.

There is no image model: the oracle ignores the image bytes and returns one of a
fixed catalogue of waste categories. It is injected wherever a classification is
needed so callers can substitute a deterministic implementation.
"""
from __future__ import annotations

import random
from typing import Protocol, Sequence

from ecoscan.core.store import Classification


CATALOGUE: tuple[Classification, ...] = (
    Classification("Plastic", "Recycle", "blue recycling bin", 10),
    Classification("Paper", "Recycle", "paper recycling bin", 8),
    Classification("Organic", "Compost", "green compost bin", 12),
    Classification("Glass", "Recycle", "glass recycling bin", 10),
    Classification("Metal", "Recycle", "metal recycling bin", 10),
)


class Classifier(Protocol):
    """Protocol shared by classification oracles."""

    def classify(self, image: bytes) -> Classification:  # pragma: no cover - interface definition
        """Return the classification for ``image``."""


class RandomClassifier:
    """Pick uniformly from the catalogue."""

    def __init__(
        self,
        catalogue: Sequence[Classification] = CATALOGUE,
        *,
        rng: random.Random | None = None,
    ) -> None:
        if not catalogue:
            raise ValueError("catalogue must not be empty")
        self.catalogue = tuple(catalogue)
        self._rng = rng or random.Random()

    def classify(self, image: bytes) -> Classification:
        return self._rng.choice(self.catalogue)


__all__ = ["CATALOGUE", "Classifier", "RandomClassifier"]
