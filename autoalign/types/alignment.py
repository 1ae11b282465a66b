"""Alignment types."""

from dataclasses import dataclass
from typing import Optional

from .sequence import GAP, SymbolSequence


@dataclass(frozen=True)
class Alignment:
    """Pairwise alignment of a left and a right sequence.

    Both sides have the same number of columns; a column may hold GAP on
    one side but never on both.
    """

    left: SymbolSequence
    right: SymbolSequence

    def __post_init__(self):
        object.__setattr__(self, "left", tuple(self.left))
        object.__setattr__(self, "right", tuple(self.right))

        # Validate that both sides have the same number of columns
        if len(self.left) != len(self.right):
            raise ValueError("Both sides of an alignment must have the same length.")

        # Validate that no column is a gap on both sides
        if any(l == GAP and r == GAP for l, r in zip(self.left, self.right)):
            raise ValueError("An alignment column cannot be a gap on both sides.")

    def __len__(self) -> int:
        return len(self.left)

    def __iter__(self):
        yield self.left
        yield self.right

    @property
    def columns(self) -> int:
        """Number of columns in the alignment."""
        return len(self.left)

    def ungapped(self) -> tuple:
        """Return the original (left, right) sequences with gaps removed."""
        return (
            tuple(s for s in self.left if s != GAP),
            tuple(s for s in self.right if s != GAP),
        )

    def __str__(self) -> str:
        class_name = self.__class__.__name__
        return (
            f"{class_name} (\n"
            f"   columns: {self.columns}\n"
            f"   left:  {' '.join(self.left)}\n"
            f"   right: {' '.join(self.right)}\n"
            f")"
        )


@dataclass(frozen=True)
class AlignmentResult:
    """Result of aligning one sequence pair.

    Attributes:
        alignment: The first tied-optimal alignment of the pair
        cost: The minimal edit cost under the cost function used
        score: Normalised score in [0, 1] (1 is a perfect alignment), only
            set once a corpus-wide maximum cost is known
    """

    alignment: Alignment
    cost: float
    score: Optional[float] = None


__all__ = ["Alignment", "AlignmentResult"]
