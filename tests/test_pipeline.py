"""End-to-end tests for cost estimation followed by alignment."""

from __future__ import annotations

import pytest

from autoalign import align, autoalign, autoalign_from_config, estimate_cost_function
from autoalign.algorithms import ConvergenceTrace, EditAligner
from autoalign.algorithms.cost_functions import CostFunction, TrackedCostFunction
from autoalign.algorithms.pipeline import normalised_score
from autoalign.types import GAP, AutoalignConfig, MalformedInputError

CORPUS = [
    ("p h o n e".split(), "f ou n".split()),
    ("ph o t o".split(), "f ou t ou".split()),
    ("t o n e".split(), "t ou n".split()),
    ("n o t e".split(), "n ou t".split()),
    ("ph o n i c".split(), "f o n i k".split()),
    ("c o n e".split(), "k ou n".split()),
    ("t o p".split(), "t o p".split()),
    ("c o t".split(), "k o t".split()),
]


def unit_cost(left: str, right: str) -> float:
    if left == GAP or right == GAP:
        return 1.0
    return 0.0 if left == right else 1.0


@pytest.mark.parametrize("seed", ["uniform", "padding"])
@pytest.mark.parametrize("scoring", ["npmi", "pmi"])
def test_autoalign_scores_are_normalised(seed, scoring):
    results = autoalign(CORPUS, seed=seed, scoring=scoring, max_iterations=50)

    assert len(results) == len(CORPUS)
    for (left, right), result in zip(CORPUS, results):
        assert result.alignment.ungapped() == (tuple(left), tuple(right))
        assert result.score is not None
        assert -1e-9 <= result.score <= 1.0 + 1e-9


def test_autoalign_reports_progress_to_observer():
    trace = ConvergenceTrace()
    autoalign(CORPUS, observer=trace, max_iterations=50)
    assert trace.iterations >= 2


def test_autoalign_from_config_matches_keyword_call():
    config = AutoalignConfig(seed="padding", scoring="pmi", pmi_k=3, max_iterations=50)
    from_config = autoalign_from_config(CORPUS, config)
    direct = autoalign(CORPUS, seed="padding", scoring="pmi", pmi_k=3.0, max_iterations=50)

    assert [r.alignment for r in from_config] == [r.alignment for r in direct]
    assert [r.score for r in from_config] == pytest.approx([r.score for r in direct])


def test_autoalign_rejects_empty_corpus_and_unknown_methods():
    with pytest.raises(MalformedInputError):
        autoalign([])
    with pytest.raises(ValueError):
        autoalign(CORPUS, seed="random")
    with pytest.raises(ValueError):
        autoalign(CORPUS, scoring="dice")


def test_align_is_deterministic():
    first = align(CORPUS, unit_cost)
    second = align(CORPUS, unit_cost)
    assert first == second
    assert all(result.score is None for result in first)


def test_align_matches_edit_aligner():
    results = align([("ab", "b")], unit_cost)
    expected = EditAligner().align(unit_cost, ("a", "b"), ("b",))
    assert results == [expected]
    assert expected.alignment.left == ("a", "b")
    assert expected.alignment.right == (GAP, "b")
    assert expected.cost == pytest.approx(1.0)


def test_normalised_score():
    assert normalised_score(0.0, 3, 1.0) == pytest.approx(1.0)
    assert normalised_score(3.0, 3, 1.0) == pytest.approx(0.0)
    assert normalised_score(1.5, 3, 1.0) == pytest.approx(0.5)


def test_normalised_score_is_not_clamped():
    assert normalised_score(3.0, 2, 1.0) == pytest.approx(-0.5)


def test_normalised_score_with_zero_denominator():
    assert normalised_score(0.0, 2, 0.0) == 1.0
    with pytest.raises(ValueError):
        normalised_score(1.0, 2, 0.0)


def test_estimate_cost_function_from_strategy_names():
    trace = ConvergenceTrace()
    learned = estimate_cost_function(CORPUS, "uniform", "npmi", trace, max_iterations=50)

    assert isinstance(learned, TrackedCostFunction)
    assert isinstance(learned.cost_fn, CostFunction)
    assert trace.iterations >= 2
    assert 0.0 < learned.max_cost <= 1.0
    assert 0.0 <= learned("ph", "f") <= 1.0
    assert learned("ph", "f") < learned("ph", "t")


def test_estimate_cost_function_rejects_empty_corpus_and_unknown_methods():
    with pytest.raises(MalformedInputError):
        estimate_cost_function([], "uniform", "npmi")
    with pytest.raises(ValueError):
        estimate_cost_function(CORPUS, "random", "npmi")
    with pytest.raises(ValueError):
        estimate_cost_function(CORPUS, "uniform", "dice")


def test_autoalign_uses_the_estimated_cost_function():
    learned = estimate_cost_function(CORPUS, "padding", "pmi", max_iterations=50)
    aligned = autoalign(CORPUS, seed="padding", scoring="pmi", max_iterations=50)

    assert [r.alignment for r in align(CORPUS, learned)] == [r.alignment for r in aligned]


def test_align_with_converged_cost_function_is_idempotent():
    learned = estimate_cost_function(CORPUS, "uniform", "npmi", max_iterations=50)
    first = align(CORPUS, learned)
    second = align(CORPUS, learned)

    assert first == second
    for (left, right), result in zip(CORPUS, first):
        assert result.alignment.ungapped() == (tuple(left), tuple(right))
