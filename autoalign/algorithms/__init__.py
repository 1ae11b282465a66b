"""Algorithms for the project."""

from .base import PairwiseAligner
from .edit import EditAligner
from .pipeline import align, autoalign, autoalign_from_config, estimate_cost_function
from .refinement import ConvergenceTrace, RefinementObserver, refine_cost_function


__all__ = [
    "PairwiseAligner",
    "EditAligner",
    "align",
    "autoalign",
    "autoalign_from_config",
    "estimate_cost_function",
    "refine_cost_function",
    "RefinementObserver",
    "ConvergenceTrace",
    "backtrack",
    "cost_functions",
    "good_turing",
    "grid",
    "pipeline",
    "seeds",
    "smoothing",
]
