"""Machine- and human-readable rendering of alignment results."""

from __future__ import annotations

from typing import Iterable, List, Literal, Sequence, Tuple

from autoalign.types import AlignmentResult

SortKey = Literal["score", "alpha"]


def by_score(result: AlignmentResult) -> float:
    """Sort key ordering results by descending score."""
    return -(result.score if result.score is not None else float("-inf"))


def by_alpha(result: AlignmentResult) -> Tuple[str, ...]:
    """Sort key ordering results by their (ungapped) left sequence."""
    left, _ = result.alignment.ungapped()
    return left


def sort_alignments(results: Iterable[AlignmentResult], by: SortKey = "score") -> List[AlignmentResult]:
    """Return the results sorted by score (descending) or by left sequence."""
    keys = {"score": by_score, "alpha": by_alpha}
    if by not in keys:
        raise ValueError(f"Unknown sort key '{by}'. Valid keys: {list(keys)}")
    return sorted(results, key=keys[by])


def _score_of(result: AlignmentResult) -> float:
    return result.score if result.score is not None else result.cost


def csv_text_from_alignments(results: Iterable[AlignmentResult]) -> str:
    """One ``LEFT, RIGHT, SCORE`` row per alignment, symbols space-separated."""
    lines = []
    for result in results:
        left, right = result.alignment
        lines.append(f"{' '.join(left)}, {' '.join(right)}, {_score_of(result)}\n")
    return "".join(lines)


def _padded(symbols: Sequence[str], others: Sequence[str]) -> str:
    # Commas are shown as ':' so the output stays comma-free
    cells = [
        symbol.ljust(len(other)).replace(",", ":")
        for symbol, other in zip(symbols, others)
    ]
    return " ".join(cells)


def pretty_text_from_alignments(results: Iterable[AlignmentResult]) -> str:
    """Score followed by the two column-aligned sequences, one block per alignment."""
    blocks = []
    for result in results:
        left, right = result.alignment
        blocks.append(
            f"{_score_of(result):.2f} {_padded(left, right)}\n"
            f"     {_padded(right, left)}\n\n"
        )
    return "".join(blocks)


__all__ = [
    "by_score",
    "by_alpha",
    "sort_alignments",
    "csv_text_from_alignments",
    "pretty_text_from_alignments",
]
