"""Top-level entry points: estimate a cost function and align a corpus with it."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from autoalign.algorithms.backtrack import first_alignment
from autoalign.algorithms.cost_functions import (
    CostFunctionBuilder,
    TrackedCostFunction,
    cost_fn_builder,
)
from autoalign.algorithms.edit import EditAligner
from autoalign.algorithms.grid import CostFn, compute_grid
from autoalign.algorithms.refinement import RefinementObserver, refine_cost_function
from autoalign.algorithms.seeds import SEED_ESTIMATORS, SeedEstimator
from autoalign.types import AlignmentResult, AutoalignConfig, MalformedInputError, as_pairs
from autoalign.types.config import DEFAULT_MAX_ALIGNMENTS
from autoalign.types.sequence import RawPair

logger = logging.getLogger(__name__)


def normalised_score(cost: float, length: int, max_cost: float) -> float:
    """Turn an alignment cost into a score, higher for better alignments.

    Formula: 1 - cost / (length * max_cost)

    The score lies in [0, 1] when ``max_cost`` bounds every edit cost of the
    alignment; it is not clamped, so a larger per-column cost gives a
    negative score.
    """
    denominator = length * max_cost
    if denominator == 0:
        if cost == 0:
            return 1.0
        raise ValueError(
            f"Cannot normalise cost {cost} with length {length} and max cost {max_cost}"
        )
    return 1.0 - cost / denominator


def _resolve_seed(seed: Union[str, SeedEstimator]) -> SeedEstimator:
    if callable(seed):
        return seed
    if seed not in SEED_ESTIMATORS:
        raise ValueError(
            f"Unknown seed method '{seed}'. Valid methods: {list(SEED_ESTIMATORS.keys())}"
        )
    return SEED_ESTIMATORS[seed]


def _resolve_builder(
    scoring: Union[str, CostFunctionBuilder], pmi_k: float
) -> CostFunctionBuilder:
    if callable(scoring):
        return scoring
    return cost_fn_builder(scoring, k=pmi_k)


def align(pairs: Iterable[RawPair], cost_fn: CostFn) -> List[AlignmentResult]:
    """Align every pair under a fixed cost function.

    Returns one result per pair with the first tied-optimal alignment and
    its cost; no score is set.
    """
    aligner = EditAligner()
    return [aligner.align(cost_fn, pair.left, pair.right) for pair in as_pairs(pairs)]


def estimate_cost_function(
    pairs: Iterable[RawPair],
    seed: Union[str, SeedEstimator] = "uniform",
    scoring: Union[str, CostFunctionBuilder] = "npmi",
    observer: Optional[RefinementObserver] = None,
    *,
    pmi_k: float = 2.0,
    max_iterations: Optional[int] = None,
    max_alignments: Optional[int] = DEFAULT_MAX_ALIGNMENTS,
    workers: Optional[int] = None,
) -> TrackedCostFunction:
    """Learn an edit cost function from the corpus.

    The seed estimator builds the initial function, which is then refined
    until the average alignment cost stops improving (see
    :func:`~autoalign.algorithms.refinement.refine_cost_function`).

    Returns:
        The learned cost function with the largest cost it produced while
        the corpus was aligned with it.
    """
    pairs = as_pairs(pairs)
    if not pairs:
        raise MalformedInputError("At least one sequence pair is required.")

    cost_fn_from = _resolve_builder(scoring, pmi_k)
    init_cost_fn = _resolve_seed(seed)(pairs, cost_fn_from)

    return refine_cost_function(
        pairs,
        init_cost_fn,
        cost_fn_from,
        observer,
        max_iterations=max_iterations,
        max_alignments=max_alignments,
        workers=workers,
    )


def autoalign(
    pairs: Iterable[RawPair],
    seed: Union[str, SeedEstimator] = "uniform",
    scoring: Union[str, CostFunctionBuilder] = "npmi",
    observer: Optional[RefinementObserver] = None,
    *,
    pmi_k: float = 2.0,
    max_iterations: Optional[int] = None,
    max_alignments: Optional[int] = DEFAULT_MAX_ALIGNMENTS,
    workers: Optional[int] = None,
) -> List[AlignmentResult]:
    """Learn a cost function from the corpus and align every pair with it.

    Args:
        pairs: The paired sequences.
        seed: Initial cost-function estimator, by name ("uniform",
            "padding") or as a callable.
        scoring: Scoring method by name ("npmi", "pmi") or a cost-function
            builder.
        observer: Optional refinement progress observer.
        pmi_k: Exponent for the "pmi" scoring method.
        max_iterations: Refinement iteration cap (None for no cap).
        max_alignments: Cap on tied-optimal alignments counted per pair.
        workers: Number of worker processes for refinement.

    Returns:
        One result per pair, in corpus order, with the first tied-optimal
        alignment, its cost and its normalised score.
    """
    pairs = as_pairs(pairs)
    tracked = estimate_cost_function(
        pairs,
        seed,
        scoring,
        observer,
        pmi_k=pmi_k,
        max_iterations=max_iterations,
        max_alignments=max_alignments,
        workers=workers,
    )

    grids = [compute_grid(pair.left, pair.right, tracked) for pair in pairs]
    for grid in grids:
        tracked = tracked.observed(grid.max_cost)
    logger.info("Aligning %d pairs; max edit cost %.6f", len(pairs), tracked.max_cost)

    results: List[AlignmentResult] = []
    for pair, grid in zip(pairs, grids):
        alignment = first_alignment(pair.left, pair.right, tracked, grid)
        results.append(
            AlignmentResult(
                alignment=alignment,
                cost=grid.total_cost,
                score=normalised_score(grid.total_cost, len(alignment), tracked.max_cost),
            )
        )
    return results


def autoalign_from_config(
    pairs: Iterable[RawPair],
    config: AutoalignConfig,
    observer: Optional[RefinementObserver] = None,
) -> List[AlignmentResult]:
    """Run :func:`autoalign` with the settings of ``config``."""
    return autoalign(
        pairs,
        seed=config.seed,
        scoring=config.scoring,
        observer=observer,
        pmi_k=config.pmi_k,
        max_iterations=config.max_iterations,
        max_alignments=config.max_alignments,
        workers=config.workers,
    )


__all__ = [
    "normalised_score",
    "align",
    "estimate_cost_function",
    "autoalign",
    "autoalign_from_config",
]
