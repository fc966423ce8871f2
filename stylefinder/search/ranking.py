"""Rank-based similarity scoring."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SimilarityPolicy:
    """Linear decay of the similarity score with the result rank, clamped at ``floor``."""

    base: float = 0.95
    step: float = 0.07
    floor: float = 0.35

    def score(self, rank: int) -> float:
        """Return the similarity for a zero-based rank; higher ranks never score higher."""

        return round(max(self.floor, self.base - max(rank, 0) * self.step), 2)


DEFAULT_POLICY = SimilarityPolicy()
