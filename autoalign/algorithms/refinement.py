"""
Iterative (EM-like) refinement of an edit cost function.

Each iteration aligns every pair of the corpus under the current cost
function, collecting the co-occurrence counts of all tied-optimal alignments
(each pair contributing a total weight of one), and then rebuilds the cost
function from the smoothed counts.

Stopping rule: as soon as an iteration's average alignment cost is not lower
than the previous iteration's, the loop stops and returns the cost function
used in the previous iteration, i.e. the last one that improved on every
function evaluated before it. There is no iteration cap unless the caller
asks for one.

Pairs are independent within an iteration, so the corpus pass can be spread
over a process pool. Per-pair counts are merged in corpus order after all
pairs have been aligned, so results do not depend on the number of workers.
"""

from __future__ import annotations

import logging
import math
from concurrent.futures import Executor, ProcessPoolExecutor
from contextlib import nullcontext
from functools import partial
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

from autoalign.algorithms.backtrack import count_alignments, iter_alignments
from autoalign.algorithms.cost_functions import CostFunctionBuilder, TrackedCostFunction
from autoalign.algorithms.grid import CostFn, compute_grid
from autoalign.algorithms.smoothing import (
    joint_stats_from_alignment,
    smoothed_stats,
    vocab_sizes,
)
from autoalign.types import (
    Alignment,
    MalformedInputError,
    NonTerminatingRefinementError,
    SequencePair,
    SymbolStats,
    as_pairs,
)
from autoalign.types.config import DEFAULT_MAX_ALIGNMENTS
from autoalign.types.sequence import RawPair

logger = logging.getLogger(__name__)

# Batches handed to each worker per iteration
BATCHES_PER_WORKER = 4


class RefinementObserver:
    """Receives progress notifications from the refinement loop.

    Notifications are advisory; the default implementation ignores them.
    """

    def on_alignment(self, pair_index: int, alignment: Alignment) -> None:
        """Called with the first tied-optimal alignment of each pair."""

    def on_iteration(self, iteration: int, average_cost: float, max_cost: float) -> None:
        """Called after each corpus pass with its average alignment cost."""


class ConvergenceTrace(RefinementObserver):
    """Observer that records the cost trajectory of a refinement run."""

    def __init__(self) -> None:
        self.average_costs: List[float] = []
        self.max_costs: List[float] = []

    def on_iteration(self, iteration: int, average_cost: float, max_cost: float) -> None:
        self.average_costs.append(average_cost)
        self.max_costs.append(max_cost)

    @property
    def iterations(self) -> int:
        return len(self.average_costs)

    def records(self) -> List[Dict[str, float]]:
        """Return one row per iteration, e.g. for ``pandas.DataFrame``."""
        return [
            {"iteration": idx + 1, "average_cost": avg, "max_cost": mx}
            for idx, (avg, mx) in enumerate(zip(self.average_costs, self.max_costs))
        ]


class PairOutcome(NamedTuple):
    """Result of aligning one pair during a corpus pass."""

    cost: float
    max_cost: float
    num_alignments: int
    truncated: bool
    first: Alignment
    stats: SymbolStats


def align_pair(
    pair: SequencePair, cost_fn: CostFn, max_alignments: Optional[int] = None
) -> PairOutcome:
    """Align one pair and weight its tied-optimal alignments' counts."""
    grid = compute_grid(pair.left, pair.right, cost_fn)

    alignments: List[Alignment] = []
    truncated = False
    for alignment in iter_alignments(pair.left, pair.right, cost_fn, grid):
        if max_alignments is not None and len(alignments) == max_alignments:
            truncated = True
            break
        alignments.append(alignment)

    if truncated and logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Counted %d of %d tied-optimal alignments for %s / %s",
            len(alignments),
            count_alignments(pair.left, pair.right, cost_fn, grid),
            " ".join(pair.left),
            " ".join(pair.right),
        )

    stats = SymbolStats()
    for alignment in alignments:
        joint_stats_from_alignment(alignment, stats, len(alignments))

    return PairOutcome(
        cost=grid.total_cost,
        max_cost=grid.max_cost,
        num_alignments=len(alignments),
        truncated=truncated,
        first=alignments[0],
        stats=stats,
    )


def _align_batch(
    batch: Sequence[SequencePair], cost_fn: CostFn, max_alignments: Optional[int]
) -> List[PairOutcome]:
    return [align_pair(pair, cost_fn, max_alignments) for pair in batch]


def _corpus_pass(
    pairs: List[SequencePair],
    cost_fn: CostFn,
    max_alignments: Optional[int],
    executor: Optional[Executor],
    workers: int,
) -> List[PairOutcome]:
    if executor is None:
        return _align_batch(pairs, cost_fn, max_alignments)

    batch_size = max(1, math.ceil(len(pairs) / (workers * BATCHES_PER_WORKER)))
    batches = [pairs[i : i + batch_size] for i in range(0, len(pairs), batch_size)]
    # map() preserves batch order, which keeps the merge deterministic
    results = executor.map(
        partial(_align_batch, cost_fn=cost_fn, max_alignments=max_alignments),
        batches,
    )
    return [outcome for batch in results for outcome in batch]


def refine_cost_function(
    pairs: Iterable[RawPair],
    init_cost_fn: CostFn,
    cost_fn_from: CostFunctionBuilder,
    observer: Optional[RefinementObserver] = None,
    *,
    max_iterations: Optional[int] = None,
    max_alignments: Optional[int] = DEFAULT_MAX_ALIGNMENTS,
    workers: Optional[int] = None,
) -> TrackedCostFunction:
    """Refine ``init_cost_fn`` on the corpus until the average cost stops improving.

    Args:
        pairs: The paired sequences.
        init_cost_fn: Initial cost function, e.g. from a seed estimator.
        cost_fn_from: Builds a cost function from smoothed statistics and
            vocabulary sizes.
        observer: Optional progress observer.
        max_iterations: Maximum number of corpus passes; None (the default)
            never gives up.
        max_alignments: Maximum number of tied-optimal alignments counted
            per pair; None enumerates all of them.
        workers: Number of worker processes for the corpus pass; None or 1
            runs in this process.

    Returns:
        The estimated cost function with the largest cost it produced while
        the corpus was aligned with it.

    Raises:
        MalformedInputError: If the corpus is empty or a pair is invalid.
        NonTerminatingRefinementError: If ``max_iterations`` passes complete
            without the stopping rule triggering.
    """
    pairs = as_pairs(pairs)
    if not pairs:
        raise MalformedInputError("At least one sequence pair is required.")
    if max_iterations is not None and max_iterations < 1:
        raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")
    if max_alignments is not None and max_alignments < 1:
        raise ValueError(f"max_alignments must be >= 1, got {max_alignments}")

    observer = observer or RefinementObserver()
    sizes = vocab_sizes(pairs)
    parallel = workers is not None and workers > 1

    previous = TrackedCostFunction(init_cost_fn)
    cost_fn = init_cost_fn
    previous_cost = math.inf
    iteration = 0

    pool = ProcessPoolExecutor(max_workers=workers) if parallel else nullcontext()
    with pool as executor:
        while True:
            if max_iterations is not None and iteration >= max_iterations:
                raise NonTerminatingRefinementError(max_iterations, previous_cost)
            iteration += 1

            outcomes = _corpus_pass(pairs, cost_fn, max_alignments, executor, workers or 1)

            joint_stats = SymbolStats()
            total_cost = 0.0
            max_cost = -math.inf
            truncated = 0
            for idx, outcome in enumerate(outcomes):
                total_cost += outcome.cost
                max_cost = max(max_cost, outcome.max_cost)
                truncated += outcome.truncated
                joint_stats.merge(outcome.stats)
                observer.on_alignment(idx, outcome.first)

            average_cost = total_cost / len(pairs)
            observer.on_iteration(iteration, average_cost, max_cost)
            logger.info(
                "Iteration %d: average cost %.6f, max edit cost %.6f",
                iteration,
                average_cost,
                max_cost,
            )
            if truncated:
                logger.warning(
                    "Iteration %d: %d pair(s) had more than %d tied-optimal "
                    "alignments; only the first %d were counted",
                    iteration,
                    truncated,
                    max_alignments,
                    max_alignments,
                )

            if average_cost >= previous_cost:
                logger.info(
                    "Average cost stopped improving after %d iteration(s); "
                    "keeping the cost function with average cost %.6f",
                    iteration,
                    previous_cost,
                )
                return previous

            previous = TrackedCostFunction(cost_fn, max_cost)
            cost_fn = cost_fn_from(smoothed_stats(joint_stats, sizes), sizes)
            previous_cost = average_cost


__all__ = [
    "RefinementObserver",
    "ConvergenceTrace",
    "PairOutcome",
    "align_pair",
    "refine_cost_function",
]
