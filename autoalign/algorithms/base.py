"""Shared interfaces for pairwise alignment algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from autoalign.algorithms.grid import CostFn
from autoalign.types import AlignmentResult


class PairwiseAligner(ABC):
    """Abstract base class for pairwise alignment algorithms."""

    @abstractmethod
    def align(
        self,
        cost_fn: CostFn,
        left: Sequence[str],
        right: Sequence[str],
    ) -> AlignmentResult:
        """Align two sequences under the provided edit cost function."""
        raise NotImplementedError


__all__ = ["PairwiseAligner"]
