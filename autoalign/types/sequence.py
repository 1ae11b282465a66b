"""Symbol sequences and the pairs of them that make up a corpus."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .errors import MalformedInputError

GAP: str = "·"
SEP: str = "±"
UNSEEN: str = "¨¨¨"

RESERVED_SYMBOLS: Tuple[str, str, str] = (GAP, SEP, UNSEEN)

Symbol = str
SymbolSequence = Tuple[Symbol, ...]
RawSequence = Union[str, Sequence[Symbol]]
RawPair = Union["SequencePair", Tuple[RawSequence, RawSequence], List[RawSequence]]


def _validate_symbols(symbols: SymbolSequence, side: str) -> None:
    if not symbols:
        raise MalformedInputError(f"{side} sequence must contain at least one symbol.")

    for symbol in symbols:
        if not isinstance(symbol, str) or not symbol:
            raise MalformedInputError(
                f"{side} sequence has an invalid symbol: {symbol!r}"
            )
        if symbol in RESERVED_SYMBOLS:
            raise MalformedInputError(
                f"{side} sequence contains the reserved symbol {symbol!r}"
            )
        # joint keys are split on SEP
        if SEP in symbol:
            raise MalformedInputError(
                f"{side} sequence symbol {symbol!r} contains the separator {SEP!r}"
            )


@dataclass(frozen=True)
class SequencePair:
    """A left/right pair of symbol sequences, e.g. graphemes and phonemes.

    Strings are split into one symbol per character; any other sequence is
    taken as a list of symbols.
    """

    left: SymbolSequence
    right: SymbolSequence
    identifier: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "left", tuple(self.left))
        object.__setattr__(self, "right", tuple(self.right))
        _validate_symbols(self.left, "left")
        _validate_symbols(self.right, "right")

    def __iter__(self):
        yield self.left
        yield self.right

    def __str__(self) -> str:
        class_name = self.__class__.__name__
        return (
            f"{class_name} (\n"
            f"   id: {self.identifier}\n"
            f"   left: {' '.join(self.left)}\n"
            f"   right: {' '.join(self.right)}\n"
            f")"
        )


def as_pairs(pairs: Iterable[RawPair]) -> List[SequencePair]:
    """Coerce raw ``(left, right)`` items into validated SequencePairs."""
    result: List[SequencePair] = []
    for item in pairs:
        if isinstance(item, SequencePair):
            result.append(item)
            continue
        try:
            left, right = item
        except (TypeError, ValueError) as exc:
            raise MalformedInputError(
                f"Expected a (left, right) pair, got {item!r}"
            ) from exc
        result.append(SequencePair(left=left, right=right))
    return result


__all__ = [
    "GAP",
    "SEP",
    "UNSEEN",
    "RESERVED_SYMBOLS",
    "Symbol",
    "SymbolSequence",
    "SequencePair",
    "as_pairs",
]
