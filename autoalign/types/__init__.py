"""Types for the project."""

from .sequence import GAP, SEP, UNSEEN, SequencePair, as_pairs
from .alignment import Alignment, AlignmentResult
from .stats import SymbolStats, VocabSizes, SmoothedStats, joint_key, split_joint_key
from .config import AutoalignConfig
from .errors import (
    AutoalignError,
    MalformedInputError,
    AlignmentReconstructionError,
    NonTerminatingRefinementError,
    DegenerateSmoothingWarning,
)


__all__ = [
    "GAP",
    "SEP",
    "UNSEEN",
    "SequencePair",
    "as_pairs",
    "Alignment",
    "AlignmentResult",
    "SymbolStats",
    "VocabSizes",
    "SmoothedStats",
    "joint_key",
    "split_joint_key",
    "AutoalignConfig",
    "AutoalignError",
    "MalformedInputError",
    "AlignmentReconstructionError",
    "NonTerminatingRefinementError",
    "DegenerateSmoothingWarning",
]
