"""Association-based edit cost functions built from smoothed statistics."""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Literal, Mapping

from autoalign.types import GAP, SmoothedStats, VocabSizes, joint_key

# (log joint, log left, log right) -> cost
ScoringFunction = Callable[[float, float, float], float]
CostFunctionBuilder = Callable[[SmoothedStats, VocabSizes], "CostFunction"]
ScoringName = Literal["npmi", "pmi"]

NEG_INF = float("-inf")


def _log(value: float) -> float:
    return math.log(value) if value > 0.0 else NEG_INF


def npmi(log_joint: float, log_left: float, log_right: float) -> float:
    """Shifted normalised pointwise mutual information, in [0, 1].

    Formula: ((log p(l,r) - log p(l) - log p(r)) / log p(l,r) + 1) / 2

    Higher values mean the symbols are less associated, so the value can be
    used directly as an edit cost.
    """
    return ((log_joint - log_left - log_right) / log_joint + 1.0) * 0.5


def pmi(log_joint: float, log_left: float, log_right: float, k: float = 2.0) -> float:
    """Negative pointwise mutual information to the k-th (PMI^k).

    Formula: -(k * log p(l,r) - log p(l) - log p(r))

    k = 1 is negative standard PMI and can be negative; values of k >= 2 are
    non-negative and therefore valid edit costs.
    """
    return -(k * log_joint - log_left - log_right)


# Registry of scoring functions
SCORING_FUNCTIONS: Dict[str, ScoringFunction] = {
    "npmi": npmi,
    "pmi": pmi,
}


@dataclass(frozen=True)
class CostFunction:
    """Edit operation cost looked up from precomputed log-probabilities.

    Symbols or pairs never observed fall back to out-of-vocabulary
    log-probabilities derived from the per-pair unseen mass. Calls are pure;
    the largest cost produced is tracked by the callers (see ``EditGrid``
    and ``TrackedCostFunction``).
    """

    log_joints: Mapping[str, float]
    log_lefts: Mapping[str, float]
    log_rights: Mapping[str, float]
    oov: float
    left_oov: float
    right_oov: float
    score_fn: ScoringFunction = npmi

    def __call__(self, left: str, right: str) -> float:
        if left == GAP and right == GAP:
            raise ValueError("At most one side of an edit operation can be a gap.")
        return self.score_fn(
            self.log_joints.get(joint_key(left, right), self.oov),
            self.log_lefts.get(left, self.left_oov),
            self.log_rights.get(right, self.right_oov),
        )


@dataclass(frozen=True)
class TrackedCostFunction:
    """A cost function paired with the largest cost it has produced so far."""

    cost_fn: Callable[[str, str], float]
    max_cost: float = NEG_INF

    def __call__(self, left: str, right: str) -> float:
        return self.cost_fn(left, right)

    def observed(self, max_cost: float) -> "TrackedCostFunction":
        """Return a copy whose running maximum also covers ``max_cost``."""
        return TrackedCostFunction(self.cost_fn, max(self.max_cost, max_cost))


def pmi_cost_fn_from(
    smoothed: SmoothedStats,
    sizes: VocabSizes,
    score_fn: ScoringFunction = npmi,
) -> CostFunction:
    """Build a PMI-based edit cost function from smoothed alignment statistics.

    Args:
        smoothed: Smoothed joint/marginal counts, unseen count and total N.
        sizes: Joint, left and right vocabulary sizes.
        score_fn: Scoring function over (log joint, log left, log right);
            defaults to NPMI.

    Returns:
        The statistics-based cost function.
    """
    total = smoothed.total
    log_joints = {duo: _log(count / total) for duo, count in smoothed.joint.items()}
    log_lefts = {left: _log(count / total) for left, count in smoothed.left.items()}
    log_rights = {right: _log(count / total) for right, count in smoothed.right.items()}

    # An unseen left symbol could pair with any right symbol, and vice versa.
    # This is off by one when GAP itself was never seen, which is negligible.
    unseen_p = smoothed.unseen_count / total
    return CostFunction(
        log_joints=log_joints,
        log_lefts=log_lefts,
        log_rights=log_rights,
        oov=_log(unseen_p),
        left_oov=_log(unseen_p * sizes.right),
        right_oov=_log(unseen_p * sizes.left),
        score_fn=score_fn,
    )


def cost_fn_builder(scoring: ScoringName = "npmi", k: float = 2.0) -> CostFunctionBuilder:
    """Resolve a scoring method name into a picklable cost-function builder."""
    if scoring not in SCORING_FUNCTIONS:
        raise ValueError(
            f"Unknown scoring method '{scoring}'. "
            f"Valid methods: {list(SCORING_FUNCTIONS.keys())}"
        )
    score_fn = SCORING_FUNCTIONS[scoring]
    if scoring == "pmi":
        score_fn = partial(pmi, k=k)
    return partial(pmi_cost_fn_from, score_fn=score_fn)


__all__ = [
    "ScoringFunction",
    "CostFunctionBuilder",
    "SCORING_FUNCTIONS",
    "npmi",
    "pmi",
    "CostFunction",
    "TrackedCostFunction",
    "pmi_cost_fn_from",
    "cost_fn_builder",
]
