"""Functions for reading paired-sequence corpora.

Each non-empty line holds two comma-separated columns, the left and the
right sequence, each a whitespace-separated list of symbols::

    p h o n e, f ou n
"""

import re
from pathlib import Path
from typing import Iterable, List, Union

from autoalign.types import MalformedInputError, SequencePair

VALID_ROW = re.compile(r"^\s*[^\s,]+(\s+[^\s,]+)*?\s*,\s*[^\s,]+(\s+[^\s,]+)*?\s*$")
SEPARATOR = ","


def pairs_from_lines(lines: Iterable[str]) -> List[SequencePair]:
    """Parse corpus lines into SequencePairs, skipping blank lines."""
    pairs: List[SequencePair] = []
    for line_no, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        if not VALID_ROW.match(line):
            raise MalformedInputError(f"line {line_no} has an invalid structure: {line!r}")

        left, right = line.split(SEPARATOR)
        try:
            pairs.append(
                SequencePair(left=left.split(), right=right.split(), identifier=str(line_no))
            )
        except MalformedInputError as exc:
            raise MalformedInputError(f"line {line_no}: {exc}") from exc
    return pairs


def read_pairs(file_path: Union[str, Path]) -> List[SequencePair]:
    """Read a paired-sequence corpus file."""
    with open(file_path, "r", encoding="utf-8") as fh:
        return pairs_from_lines(fh)


__all__ = ["pairs_from_lines", "read_pairs"]
