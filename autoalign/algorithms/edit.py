"""Minimum-cost edit alignment under an arbitrary symbol cost function."""

from __future__ import annotations

from typing import Sequence

from autoalign.algorithms.backtrack import first_alignment
from autoalign.algorithms.base import PairwiseAligner
from autoalign.algorithms.grid import CostFn, compute_grid
from autoalign.types import AlignmentResult


class EditAligner(PairwiseAligner):
    """Edit-distance alignment returning the first tied-optimal alignment.

    Ties are broken in favour of substitutions, then gaps in the left
    sequence, then gaps in the right sequence, so repeated calls with the
    same cost function always return the same alignment.
    """

    def align(
        self,
        cost_fn: CostFn,
        left: Sequence[str],
        right: Sequence[str],
    ) -> AlignmentResult:
        """Compute the grid and backtrack one optimal alignment."""
        grid = compute_grid(left, right, cost_fn)
        alignment = first_alignment(left, right, cost_fn, grid)
        return AlignmentResult(alignment=alignment, cost=grid.total_cost)


__all__ = ["EditAligner"]
