"""
Initial cost-function estimators, used before any alignment is available.

Both estimators derive joint left/right counts from the raw pairs and pass
them through the same smoothing and cost-function construction as the
refinement loop:

- padding: left-align the sequences and pad the shorter one with gaps on
  the right, then count the columns. Simple, and close to the uniform
  estimator for corpora where lengths rarely differ (e.g. English g2p).
- uniform: spread the longer sequence evenly over the shorter one and let
  every left/right position pair co-occur with weight 1 / (distance + 1)^2,
  crediting gaps in proportion to the length difference.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List

from autoalign.algorithms.cost_functions import CostFunction, CostFunctionBuilder
from autoalign.algorithms.smoothing import (
    joint_stats_from_alignment,
    smoothed_stats,
    vocab_sizes,
)
from autoalign.types import GAP, Alignment, SequencePair, SymbolStats, as_pairs, joint_key
from autoalign.types.sequence import RawPair

SeedEstimator = Callable[[Iterable[RawPair], CostFunctionBuilder], CostFunction]


def padding_seed_stats(pairs: Iterable[RawPair]) -> SymbolStats:
    """Count column co-occurrences of the gap-padded, left-aligned pairs."""
    stats = SymbolStats()
    for pair in as_pairs(pairs):
        width = max(len(pair.left), len(pair.right))
        padded = Alignment(
            left=list(pair.left) + [GAP] * (width - len(pair.left)),
            right=list(pair.right) + [GAP] * (width - len(pair.right)),
        )
        joint_stats_from_alignment(padded, stats)
    return stats


def _spread_counts(pair: SequencePair, stats: SymbolStats) -> None:
    left, right = pair.left, pair.right
    left_len, right_len = len(left), len(right)

    if left_len >= right_len:
        # Right positions mapped onto the left's index space
        delta = left_len / right_len
        half_delta = delta * 0.5
        for q in range(left_len):
            q_c = q + 0.5
            for h in range(right_len):
                h_c = h * delta + half_delta
                stats.increment(joint_key(left[q], right[h]), 1.0 / (abs(q_c - h_c) + 1.0) ** 2)
            if left_len > right_len:
                stats.increment(joint_key(left[q], GAP), (left_len - right_len) / left_len)
    else:
        # Left positions mapped onto the right's index space
        delta = right_len / left_len
        half_delta = delta * 0.5
        for h in range(right_len):
            h_c = h + 0.5
            for q in range(left_len):
                q_c = q * delta + half_delta
                stats.increment(joint_key(left[q], right[h]), 1.0 / (abs(q_c - h_c) + 1.0) ** 2)
            # Keyed (GAP, right) and accumulated across pairs
            stats.increment(joint_key(GAP, right[h]), (right_len - left_len) / right_len)


def uniform_seed_stats(pairs: Iterable[RawPair]) -> SymbolStats:
    """Distance-weighted co-occurrence counts over uniformly spread positions."""
    stats = SymbolStats()
    for pair in as_pairs(pairs):
        _spread_counts(pair, stats)
    return stats


def _estimate(stats: SymbolStats, pairs: List[SequencePair], cost_fn_from: CostFunctionBuilder) -> CostFunction:
    sizes = vocab_sizes(pairs)
    return cost_fn_from(smoothed_stats(stats, sizes), sizes)


def padding_cost_fn_estimator(
    pairs: Iterable[RawPair], cost_fn_from: CostFunctionBuilder
) -> CostFunction:
    """Estimate an initial cost function from gap-padded pairs."""
    pairs = as_pairs(pairs)
    return _estimate(padding_seed_stats(pairs), pairs, cost_fn_from)


def uniform_cost_fn_estimator(
    pairs: Iterable[RawPair], cost_fn_from: CostFunctionBuilder
) -> CostFunction:
    """Estimate an initial cost function from uniformly spread pairs."""
    pairs = as_pairs(pairs)
    return _estimate(uniform_seed_stats(pairs), pairs, cost_fn_from)


# Registry of seed estimators
SEED_ESTIMATORS: Dict[str, SeedEstimator] = {
    "padding": padding_cost_fn_estimator,
    "uniform": uniform_cost_fn_estimator,
}


__all__ = [
    "SeedEstimator",
    "SEED_ESTIMATORS",
    "padding_seed_stats",
    "uniform_seed_stats",
    "padding_cost_fn_estimator",
    "uniform_cost_fn_estimator",
]
