"""
Smoothed co-occurrence statistics for cost-function estimation.

Given the joint left/right counts gathered from alignments, the statistics
are smoothed in two stages:

1. Every observed joint count is replaced by its Simple Good-Turing estimate
   and the left/right marginals are rebuilt from the smoothed joints.
2. The mass Good-Turing reserves for unseen pairs is spread evenly over the
   joint combinations never observed, and each marginal is inflated by the
   unseen mass of the partners it never co-occurred with, so that joint and
   marginal totals agree.
"""

from __future__ import annotations

import logging
import warnings
from typing import Dict, Iterable, Mapping, Set, Tuple

from autoalign.algorithms.good_turing import simple_good_turing
from autoalign.types import (
    GAP,
    UNSEEN,
    Alignment,
    DegenerateSmoothingWarning,
    SmoothedStats,
    SymbolStats,
    VocabSizes,
    as_pairs,
    joint_key,
    split_joint_key,
)
from autoalign.types.sequence import RawPair

logger = logging.getLogger(__name__)

# Used when there are no singleton pairs, since Good-Turing then reserves
# no mass for the unseen ones.
MIN_ZERO_MASS = 1.0


def vocab_sizes(pairs: Iterable[RawPair]) -> VocabSizes:
    """Compute the joint, left and right alphabet sizes of a corpus."""
    left_vocab: Set[str] = set()
    right_vocab: Set[str] = set()
    for pair in as_pairs(pairs):
        left_vocab.update(pair.left)
        right_vocab.update(pair.right)

    left_n = len(left_vocab) + 1
    right_n = len(right_vocab) + 1
    return VocabSizes(joint=left_n * right_n - 1, left=left_n, right=right_n)


def joint_stats_from_alignment(
    alignment: Alignment, stats: SymbolStats, n: int = 1
) -> SymbolStats:
    """Add the column co-occurrences of ``alignment`` to ``stats``.

    Each column counts ``1 / n``, so that the ``n`` tied-optimal alignments
    of a pair together contribute one alignment's worth of counts.
    """
    left, right = alignment
    weight = 1.0 / n
    for l_sym, r_sym in zip(left, right):
        stats.increment(joint_key(l_sym, r_sym), weight)
    return stats


def freq_of_counts(counts: Mapping[str, float]) -> SymbolStats:
    """Map each count to the number of keys holding exactly that count."""
    count_to_freq = SymbolStats()
    for count in counts.values():
        count_to_freq.increment(count)
    return count_to_freq


def non_zero_smoothed_stats(
    emp_joint_stats: Mapping[str, float],
    smoothed_counts: Mapping[float, float],
) -> Tuple[SymbolStats, SymbolStats, SymbolStats, float]:
    """Smooth the joint counts that were observed and rebuild the marginals.

    Args:
        emp_joint_stats: Empirical left/right joint counts.
        smoothed_counts: Map from raw counts to smoothed counts; key 0 holds
            the total mass reserved for unseen pairs.

    Returns:
        Smoothed joint, left and right stats, and the total count N, which
        includes the unseen mass.
    """
    joint = SymbolStats()
    left_stats = SymbolStats()
    right_stats = SymbolStats()
    total = float(smoothed_counts.get(0, 0.0))

    for duo, count in emp_joint_stats.items():
        smooth_count = smoothed_counts[count]
        joint[duo] = smooth_count
        total += smooth_count

        left, right = split_joint_key(duo)
        left_stats.increment(left, smooth_count)
        right_stats.increment(right, smooth_count)

    return joint, left_stats, right_stats, total


def with_zero_smoothing(
    stats: Tuple[SymbolStats, SymbolStats, SymbolStats],
    sizes: VocabSizes,
    counts_for_zero: float,
) -> Tuple[SymbolStats, SymbolStats, SymbolStats, float]:
    """Spread the unseen mass over unseen pairs and inflate the marginals.

    The stats are updated in place: the joint stats gain an UNSEEN entry and
    every marginal gains the unseen mass of each partner it was never seen
    with (GAP never pairs with GAP).

    Returns:
        Joint, left and right stats, plus the per-pair unseen count.
    """
    joint, left_stats, right_stats = stats
    observed_pairs = joint.size()
    unseen_pairs = sizes.joint - observed_pairs
    unseen_count = counts_for_zero / unseen_pairs if unseen_pairs > 0 else 0.0

    rights_seen_with: Dict[str, Set[str]] = {}
    lefts_seen_with: Dict[str, Set[str]] = {}
    for duo in joint.keys():
        left, right = split_joint_key(duo)
        rights_seen_with.setdefault(left, set()).add(right)
        lefts_seen_with.setdefault(right, set()).add(left)

    joint[UNSEEN] = unseen_count

    for left in list(left_stats.keys()):
        partners = sizes.right - (left == GAP) - len(rights_seen_with.get(left, ()))
        left_stats.increment(left, partners * unseen_count)
    for right in list(right_stats.keys()):
        partners = sizes.left - (right == GAP) - len(lefts_seen_with.get(right, ()))
        right_stats.increment(right, partners * unseen_count)

    return joint, left_stats, right_stats, unseen_count


def smoothed_stats(emp_joint_stats: Mapping[str, float], sizes: VocabSizes) -> SmoothedStats:
    """Build the smoothed joint and marginal statistics for one iteration."""
    smoothed_counts = dict(simple_good_turing(freq_of_counts(emp_joint_stats)))

    zero_mass = smoothed_counts.get(0, 0.0)
    if zero_mass <= 0.0:
        message = (
            f"No singleton pairs among {len(emp_joint_stats)} observed pairs; "
            f"reserving a minimum mass of {MIN_ZERO_MASS} for unseen pairs"
        )
        logger.warning(message)
        warnings.warn(message, DegenerateSmoothingWarning, stacklevel=2)
        zero_mass = MIN_ZERO_MASS
        smoothed_counts[0] = zero_mass

    joint, left_stats, right_stats, total = non_zero_smoothed_stats(
        emp_joint_stats, smoothed_counts
    )
    joint, left_stats, right_stats, unseen_count = with_zero_smoothing(
        (joint, left_stats, right_stats), sizes, zero_mass
    )

    logger.debug(
        "Smoothed %d joint pairs: N=%.4f, unseen count per pair=%.6g",
        len(emp_joint_stats),
        total,
        unseen_count,
    )
    return SmoothedStats(
        joint=joint,
        left=left_stats,
        right=right_stats,
        unseen_count=unseen_count,
        total=total,
    )


__all__ = [
    "MIN_ZERO_MASS",
    "vocab_sizes",
    "joint_stats_from_alignment",
    "freq_of_counts",
    "non_zero_smoothed_stats",
    "with_zero_smoothing",
    "smoothed_stats",
]
