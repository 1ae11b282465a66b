"""Unit tests for iterative cost-function refinement."""

from __future__ import annotations

import pytest

from autoalign.algorithms.cost_functions import TrackedCostFunction, cost_fn_builder
from autoalign.algorithms.refinement import (
    ConvergenceTrace,
    RefinementObserver,
    align_pair,
    refine_cost_function,
)
from autoalign.algorithms.seeds import uniform_cost_fn_estimator
from autoalign.types import (
    GAP,
    MalformedInputError,
    NonTerminatingRefinementError,
    SequencePair,
    joint_key,
)

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
        return 0.5
    return 0.0 if left == right else 1.0


class ShrinkingBuilder:
    """Builds ever cheaper cost functions, so the average cost never stops falling."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, smoothed, sizes):
        self.calls += 1
        scale = 0.5**self.calls
        return lambda left, right: scale * unit_cost(left, right)


class CountingObserver(RefinementObserver):
    def __init__(self) -> None:
        self.alignments = 0
        self.iterations = []

    def on_alignment(self, pair_index, alignment):
        self.alignments += 1

    def on_iteration(self, iteration, average_cost, max_cost):
        self.iterations.append(iteration)


def test_align_pair_weights_tied_alignments():
    outcome = align_pair(SequencePair(left="a", right="b"), unit_cost)

    assert outcome.num_alignments == 3
    assert not outcome.truncated
    assert outcome.cost == pytest.approx(1.0)
    assert outcome.first.left == ("a",)
    assert outcome.stats[joint_key("a", "b")] == pytest.approx(1 / 3)
    assert outcome.stats[joint_key(GAP, "b")] == pytest.approx(2 / 3)
    assert outcome.stats.total_count() == pytest.approx(5 / 3)


def test_align_pair_truncates_enumeration():
    outcome = align_pair(SequencePair(left="a", right="b"), unit_cost, max_alignments=2)
    assert outcome.num_alignments == 2
    assert outcome.truncated


def test_average_cost_decreases_until_the_final_iteration():
    builder = cost_fn_builder("npmi")
    trace = ConvergenceTrace()
    refine_cost_function(
        CORPUS,
        uniform_cost_fn_estimator(CORPUS, builder),
        builder,
        trace,
        max_iterations=50,
    )

    costs = trace.average_costs
    assert trace.iterations == len(costs) >= 2
    for previous, current in zip(costs[:-2], costs[1:-1]):
        assert current < previous
    assert costs[-1] >= costs[-2]
    assert [row["iteration"] for row in trace.records()] == list(range(1, len(costs) + 1))


def test_returns_the_previous_cost_function_when_cost_stops_improving():
    observer = CountingObserver()
    pairs = [("ab", "xy"), ("ba", "yx")]

    result = refine_cost_function(
        pairs, unit_cost, lambda smoothed, sizes: unit_cost, observer
    )

    assert isinstance(result, TrackedCostFunction)
    assert result.cost_fn is unit_cost
    assert result.max_cost == pytest.approx(1.0)
    assert observer.iterations == [1, 2]
    assert observer.alignments == 2 * len(pairs)


def test_iteration_cap_raises_when_cost_keeps_falling():
    builder = ShrinkingBuilder()
    with pytest.raises(NonTerminatingRefinementError) as excinfo:
        refine_cost_function([("ab", "xy")], unit_cost, builder, max_iterations=3)

    assert excinfo.value.max_iterations == 3
    assert builder.calls == 3


def test_empty_corpus_is_rejected():
    with pytest.raises(MalformedInputError):
        refine_cost_function([], unit_cost, cost_fn_builder("npmi"))


def test_invalid_caps_are_rejected():
    with pytest.raises(ValueError):
        refine_cost_function(CORPUS, unit_cost, cost_fn_builder("npmi"), max_iterations=0)
    with pytest.raises(ValueError):
        refine_cost_function(CORPUS, unit_cost, cost_fn_builder("npmi"), max_alignments=0)


def test_worker_pool_gives_the_same_cost_function():
    builder = cost_fn_builder("npmi")
    seed = uniform_cost_fn_estimator(CORPUS, builder)

    serial = refine_cost_function(CORPUS, seed, builder, max_iterations=50)
    pooled = refine_cost_function(CORPUS, seed, builder, max_iterations=50, workers=2)

    assert pooled.max_cost == pytest.approx(serial.max_cost)
    for left, right in CORPUS:
        for l_sym in left:
            for r_sym in right:
                assert pooled(l_sym, r_sym) == pytest.approx(serial(l_sym, r_sym))
