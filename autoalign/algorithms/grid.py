"""Edit-distance dynamic programming grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np

from autoalign.types import GAP

CostFn = Callable[[str, str], float]


@dataclass(frozen=True)
class EditGrid:
    """Minimal cumulative edit costs of every prefix pair.

    Attributes:
        costs: (|R|+1) x (|L|+1) matrix; costs[r, c] is the minimal cost of
            aligning the first c left symbols with the first r right symbols
        max_cost: Largest single edit cost evaluated while filling the grid
    """

    costs: np.ndarray
    max_cost: float

    @property
    def total_cost(self) -> float:
        """Minimal edit cost of the full sequences."""
        return float(self.costs[-1, -1])

    @property
    def shape(self):
        return self.costs.shape


def compute_grid(left: Sequence[str], right: Sequence[str], cost_fn: CostFn) -> EditGrid:
    """Fill the edit cost grid of ``left`` against ``right``.

    The first column accumulates right insertions against GAP and the first
    row left deletions against GAP. Interior cells take the cheapest of a
    substitution (diagonal), a gap in the left sequence (up) and a gap in the
    right sequence (left).
    """
    h = len(left) + 1
    v = len(right) + 1
    grid = np.zeros((v, h), dtype=float)
    max_cost = float("-inf")

    # Costs of gapping each symbol do not depend on the cell
    right_gap_costs = [cost_fn(GAP, r) for r in right]
    left_gap_costs = [cost_fn(l, GAP) for l in left]
    if right_gap_costs:
        max_cost = max(max_cost, max(right_gap_costs))
    if left_gap_costs:
        max_cost = max(max_cost, max(left_gap_costs))

    for r in range(1, v):
        grid[r, 0] = grid[r - 1, 0] + right_gap_costs[r - 1]

    for c in range(1, h):
        grid[0, c] = grid[0, c - 1] + left_gap_costs[c - 1]
        l_sym = left[c - 1]
        del_cost = left_gap_costs[c - 1]

        for r in range(1, v):
            sub_cost = cost_fn(l_sym, right[r - 1])
            if sub_cost > max_cost:
                max_cost = sub_cost
            grid[r, c] = min(
                grid[r - 1, c - 1] + sub_cost,
                grid[r - 1, c] + right_gap_costs[r - 1],
                grid[r, c - 1] + del_cost,
            )

    return EditGrid(costs=grid, max_cost=max_cost)


__all__ = ["CostFn", "EditGrid", "compute_grid"]
