"""
Backtracking of tied-optimal alignments through an edit cost grid.

Starting from the bottom-right cell, every incoming edge whose cost accounts
for the cell's value (within TOLERANCE) is a valid last step of some optimal
alignment. Edges are tried in a fixed order:

    - diagonal: substitution of the left and right symbols
    - up: a gap in the left sequence
    - left: a gap in the right sequence

Once the first row or column is reached the remaining prefix can only be
pure gaps, so it is completed without further cost checks.

The number of tied-optimal alignments can grow combinatorially with sequence
length for cost functions with many equal weights, so enumeration uses an
explicit stack, is lazy, and can be capped.
"""

from __future__ import annotations

from itertools import islice
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from autoalign.algorithms.grid import CostFn, EditGrid
from autoalign.types import GAP, Alignment, AlignmentReconstructionError

TOLERANCE = 1e-5

GridLike = Union[EditGrid, np.ndarray]
# (left symbol, right symbol, rest of the suffix)
_Suffix = Optional[Tuple[str, str, "_Suffix"]]


def _costs(grid: GridLike) -> np.ndarray:
    return grid.costs if isinstance(grid, EditGrid) else np.asarray(grid, dtype=float)


def _incoming_edges(
    left: Sequence[str],
    right: Sequence[str],
    cost_fn: CostFn,
    costs: np.ndarray,
    h: int,
    v: int,
) -> Iterator[Tuple[int, int, str, str]]:
    """Yield ``(h, v, left_symbol, right_symbol)`` for each consistent edge into (v, h)."""
    cell = costs[v, h]
    l_sym = left[h - 1]
    r_sym = right[v - 1]

    if abs(cell - costs[v - 1, h - 1] - cost_fn(l_sym, r_sym)) < TOLERANCE:
        yield h - 1, v - 1, l_sym, r_sym
    if abs(cell - costs[v - 1, h] - cost_fn(GAP, r_sym)) < TOLERANCE:
        yield h, v - 1, GAP, r_sym
    if abs(cell - costs[v, h - 1] - cost_fn(l_sym, GAP)) < TOLERANCE:
        yield h - 1, v, l_sym, GAP


def _reconstruction_error(
    left: Sequence[str], right: Sequence[str], costs: np.ndarray, h: int, v: int
) -> AlignmentReconstructionError:
    return AlignmentReconstructionError(
        f"No edge into cell ({v}, {h}) with cost {costs[v, h]} matches the grid "
        f"for {' '.join(left)} / {' '.join(right)}"
    )


def _materialize(
    left: Sequence[str], right: Sequence[str], h: int, v: int, suffix: _Suffix
) -> Alignment:
    """Complete the gap-only prefix and join it with the linked suffix."""
    if h == 0:
        aligned_left: List[str] = [GAP] * v
        aligned_right: List[str] = list(right[:v])
    else:
        aligned_left = list(left[:h])
        aligned_right = [GAP] * h

    while suffix is not None:
        l_sym, r_sym, suffix = suffix
        aligned_left.append(l_sym)
        aligned_right.append(r_sym)

    return Alignment(left=aligned_left, right=aligned_right)


def iter_alignments(
    left: Sequence[str], right: Sequence[str], cost_fn: CostFn, grid: GridLike
) -> Iterator[Alignment]:
    """Lazily yield every tied-optimal alignment, diagonal branches first."""
    costs = _costs(grid)
    stack: List[Tuple[int, int, _Suffix]] = [(len(left), len(right), None)]

    while stack:
        h, v, suffix = stack.pop()
        if h == 0 or v == 0:
            yield _materialize(left, right, h, v, suffix)
            continue

        edges = list(_incoming_edges(left, right, cost_fn, costs, h, v))
        if not edges:
            raise _reconstruction_error(left, right, costs, h, v)

        # Pushed in reverse so the diagonal branch is explored first
        for h_prev, v_prev, l_sym, r_sym in reversed(edges):
            stack.append((h_prev, v_prev, (l_sym, r_sym, suffix)))


def all_alignments(
    left: Sequence[str],
    right: Sequence[str],
    cost_fn: CostFn,
    grid: GridLike,
    limit: Optional[int] = None,
) -> List[Alignment]:
    """Return the tied-optimal alignments, at most ``limit`` of them if given."""
    alignments = iter_alignments(left, right, cost_fn, grid)
    if limit is not None:
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        return list(islice(alignments, limit))
    return list(alignments)


def first_alignment(
    left: Sequence[str], right: Sequence[str], cost_fn: CostFn, grid: GridLike
) -> Alignment:
    """Return the first tied-optimal alignment without enumerating the others."""
    costs = _costs(grid)
    h, v = len(left), len(right)
    suffix: _Suffix = None

    while h > 0 and v > 0:
        edge = next(_incoming_edges(left, right, cost_fn, costs, h, v), None)
        if edge is None:
            raise _reconstruction_error(left, right, costs, h, v)
        h, v, l_sym, r_sym = edge
        suffix = (l_sym, r_sym, suffix)

    return _materialize(left, right, h, v, suffix)


def count_alignments(
    left: Sequence[str], right: Sequence[str], cost_fn: CostFn, grid: GridLike
) -> int:
    """Count the tied-optimal alignments without materialising them."""
    costs = _costs(grid)
    h_len, v_len = len(left), len(right)
    # paths[v][h]: number of tied-optimal paths from cell (v, h) to the origin
    paths = [[1] * (h_len + 1) for _ in range(v_len + 1)]

    for v in range(1, v_len + 1):
        for h in range(1, h_len + 1):
            paths[v][h] = sum(
                paths[v_prev][h_prev]
                for h_prev, v_prev, _, _ in _incoming_edges(
                    left, right, cost_fn, costs, h, v
                )
            )

    return paths[v_len][h_len]


__all__ = [
    "TOLERANCE",
    "iter_alignments",
    "all_alignments",
    "first_alignment",
    "count_alignments",
]
