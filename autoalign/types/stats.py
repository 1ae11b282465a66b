"""Sparse symbol statistics and the containers derived from them."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Hashable, Mapping, NamedTuple, Tuple

from .sequence import SEP, Symbol


def joint_key(left: Symbol, right: Symbol) -> str:
    """Build the composite key for a left/right symbol co-occurrence."""
    return left + SEP + right


def split_joint_key(key: str) -> Tuple[Symbol, Symbol]:
    """Split a composite key back into its left and right symbols."""
    left, _, right = key.partition(SEP)
    return left, right


class SymbolStats(Counter):
    """Sparse map from symbol keys to non-negative float counts.

    Keys that were never incremented read as zero. Construction from a
    mapping sums the provided counts, like ``Counter``.
    """

    def increment(self, key: Hashable, amount: float = 1.0) -> "SymbolStats":
        """Increase ``key``'s count by ``amount``."""
        self[key] += amount
        return self

    def reset(self) -> "SymbolStats":
        """Remove all keys and their counts."""
        self.clear()
        return self

    def size(self) -> int:
        """Number of keys with a count."""
        return len(self)

    def merge(self, other: Mapping[Hashable, float]) -> "SymbolStats":
        """Add every count in ``other`` to this counter."""
        for key, count in other.items():
            self[key] += count
        return self

    def total_count(self) -> float:
        """Sum of all counts."""
        return float(sum(self.values()))


class VocabSizes(NamedTuple):
    """Alphabet sizes of a corpus, each including one slot for GAP.

    ``joint`` excludes the impossible GAP/GAP combination.
    """

    joint: int
    left: int
    right: int


@dataclass(frozen=True)
class SmoothedStats:
    """Smoothed joint and marginal counts for one refinement iteration.

    Attributes:
        joint: Smoothed left/right co-occurrence counts, including UNSEEN
        left: Left marginal counts, inflated with unseen mass
        right: Right marginal counts, inflated with unseen mass
        unseen_count: Mass given to each unseen left/right combination
        total: Total count N shared by the joint and the marginals
    """

    joint: SymbolStats
    left: SymbolStats
    right: SymbolStats
    unseen_count: float
    total: float


__all__ = [
    "joint_key",
    "split_joint_key",
    "SymbolStats",
    "VocabSizes",
    "SmoothedStats",
]
