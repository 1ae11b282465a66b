"""Error types raised by the alignment and estimation engine."""

from __future__ import annotations


class AutoalignError(Exception):
    """Base class for errors raised by the project."""


class MalformedInputError(AutoalignError, ValueError):
    """A sequence pair or corpus row fails structural validation."""


class AlignmentReconstructionError(AutoalignError, RuntimeError):
    """Backtracking found no incoming edge consistent with the cost grid.

    This indicates that the grid was filled with a different cost function
    than the one used for backtracking, or that the costs are not finite.
    """


class NonTerminatingRefinementError(AutoalignError, RuntimeError):
    """Refinement exceeded the caller-imposed iteration cap."""

    def __init__(self, max_iterations: int, last_average_cost: float) -> None:
        self.max_iterations = max_iterations
        self.last_average_cost = last_average_cost
        super().__init__(
            f"Refinement did not terminate within {max_iterations} iterations "
            f"(last average cost: {last_average_cost})"
        )


class DegenerateSmoothingWarning(UserWarning):
    """No zero-count mass was available; a minimum mass was used instead."""


__all__ = [
    "AutoalignError",
    "MalformedInputError",
    "AlignmentReconstructionError",
    "NonTerminatingRefinementError",
    "DegenerateSmoothingWarning",
]
