"""Unsupervised alignment of paired symbol sequences with learned edit costs."""

from autoalign.algorithms import align, autoalign, autoalign_from_config, estimate_cost_function
from autoalign.types import GAP, Alignment, AlignmentResult, SequencePair

__version__ = "1.0.0"

__all__ = [
    "GAP",
    "Alignment",
    "AlignmentResult",
    "SequencePair",
    "align",
    "autoalign",
    "autoalign_from_config",
    "estimate_cost_function",
]
