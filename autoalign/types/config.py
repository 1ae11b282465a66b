"""
Run configuration for cost-function estimation and alignment.

The defaults are a uniform seed, NPMI costs and no iteration cap. The number
of tied-optimal alignments enumerated per pair is capped, as it can grow
combinatorially for cost functions with many equal weights.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

SeedMethod = Literal["uniform", "padding"]
ScoringMethod = Literal["npmi", "pmi"]

SEED_METHODS: Tuple[str, str] = ("uniform", "padding")
SCORING_METHODS: Tuple[str, str] = ("npmi", "pmi")

DEFAULT_MAX_ALIGNMENTS = 1000


def _validate_optional_positive(value: Optional[int], name: str) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer or None, got {value!r}")
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")


@dataclass(frozen=True)
class AutoalignConfig:
    """Settings for one autoalign run."""

    seed: SeedMethod = "uniform"
    scoring: ScoringMethod = "npmi"
    pmi_k: float = 2.0
    max_iterations: Optional[int] = None
    max_alignments: Optional[int] = DEFAULT_MAX_ALIGNMENTS
    workers: Optional[int] = None

    def __post_init__(self) -> None:
        if self.seed not in SEED_METHODS:
            raise ValueError(f"seed must be one of {SEED_METHODS}, got '{self.seed}'")
        if self.scoring not in SCORING_METHODS:
            raise ValueError(
                f"scoring must be one of {SCORING_METHODS}, got '{self.scoring}'"
            )
        if isinstance(self.pmi_k, bool) or not isinstance(self.pmi_k, (int, float)):
            raise ValueError(f"pmi_k must be a number, got {self.pmi_k!r}")
        object.__setattr__(self, "pmi_k", float(self.pmi_k))

        _validate_optional_positive(self.max_iterations, "max_iterations")
        _validate_optional_positive(self.max_alignments, "max_alignments")
        _validate_optional_positive(self.workers, "workers")


__all__ = [
    "AutoalignConfig",
    "SeedMethod",
    "ScoringMethod",
    "SEED_METHODS",
    "SCORING_METHODS",
    "DEFAULT_MAX_ALIGNMENTS",
]
