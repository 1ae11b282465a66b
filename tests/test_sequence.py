"""Unit tests for SequencePair, Alignment and pair coercion."""

from __future__ import annotations

import pytest

from autoalign.types import (
    GAP,
    SEP,
    UNSEEN,
    Alignment,
    MalformedInputError,
    SequencePair,
    as_pairs,
)


def test_string_sides_are_split_into_characters():
    pair = SequencePair(left="ab", right="xyz")
    assert pair.left == ("a", "b")
    assert pair.right == ("x", "y", "z")


def test_list_sides_keep_multi_character_symbols():
    pair = SequencePair(left=["ph", "o"], right=["f", "ou"], identifier="7")
    left, right = pair
    assert left == ("ph", "o")
    assert right == ("f", "ou")
    assert pair.identifier == "7"


@pytest.mark.parametrize(
    "left, right",
    [
        ("", "x"),
        ("a", []),
        ([GAP], "x"),
        ("a", [UNSEEN]),
        (["a" + SEP + "b"], "x"),
        (["a", ""], "x"),
    ],
)
def test_invalid_sequences_are_rejected(left, right):
    """Empty sequences and reserved symbols are malformed input."""
    with pytest.raises(MalformedInputError):
        SequencePair(left=left, right=right)


def test_malformed_input_is_a_value_error():
    with pytest.raises(ValueError):
        SequencePair(left="", right="x")


def test_as_pairs_accepts_tuples_lists_and_pairs():
    existing = SequencePair(left="a", right="b")
    pairs = as_pairs([("ab", "x"), ["c", "yz"], existing])
    assert [p.left for p in pairs] == [("a", "b"), ("c",), ("a",)]
    assert pairs[2] is existing


def test_as_pairs_rejects_wrong_shape():
    with pytest.raises(MalformedInputError):
        as_pairs([("a", "b", "c")])
    with pytest.raises(MalformedInputError):
        as_pairs([42])


def test_alignment_requires_equal_lengths():
    with pytest.raises(ValueError):
        Alignment(left=["a", "b"], right=["x"])


def test_alignment_rejects_double_gap_column():
    with pytest.raises(ValueError):
        Alignment(left=["a", GAP], right=["x", GAP])


def test_alignment_ungapped_restores_sequences():
    alignment = Alignment(left=["a", "b", GAP], right=["x", GAP, "y"])
    assert len(alignment) == alignment.columns == 3
    assert alignment.ungapped() == (("a", "b"), ("x", "y"))
