"""Unit tests for two-stage smoothing of joint statistics."""

from __future__ import annotations

import math

import pytest

from autoalign.algorithms.smoothing import (
    MIN_ZERO_MASS,
    non_zero_smoothed_stats,
    smoothed_stats,
    with_zero_smoothing,
)
from autoalign.types import (
    GAP,
    UNSEEN,
    DegenerateSmoothingWarning,
    SymbolStats,
    VocabSizes,
    joint_key,
)


def _approx_stats(actual: SymbolStats, expected: dict) -> None:
    assert set(actual) == set(expected)
    for key, value in expected.items():
        assert actual[key] == pytest.approx(value)


def test_non_zero_smoothed_stats_rebuilds_marginals():
    emp = SymbolStats({joint_key("a", "x"): 2, joint_key("b", GAP): 1})
    joint, left, right, total = non_zero_smoothed_stats(emp, {2: 0.5, 1: 1.5, 0: 1})

    _approx_stats(joint, {joint_key("a", "x"): 0.5, joint_key("b", GAP): 1.5})
    _approx_stats(left, {"a": 0.5, "b": 1.5})
    _approx_stats(right, {"x": 0.5, GAP: 1.5})
    # N includes the mass reserved for unseen pairs
    assert total == pytest.approx(3.0)


def test_with_zero_smoothing_inflates_marginals():
    ax, by, gap_z = joint_key("a", "x"), joint_key("b", "y"), joint_key(GAP, "z")
    stats = (
        SymbolStats({ax: 0.5, by: 0.75, gap_z: 0.75}),
        SymbolStats({"a": 0.5, "b": 0.75, GAP: 0.75}),
        SymbolStats({"x": 0.5, "y": 0.75, "z": 0.75}),
    )
    joint, left, right, unseen = with_zero_smoothing(stats, VocabSizes(11, 3, 4), 2)

    assert unseen == pytest.approx(2 / 8)
    _approx_stats(joint, {ax: 0.5, by: 0.75, gap_z: 0.75, UNSEEN: 2 / 8})
    _approx_stats(left, {"a": 0.5 + 3 * 2 / 8, "b": 0.75 + 3 * 2 / 8, GAP: 0.75 + 2 * 2 / 8})
    _approx_stats(right, {"x": 0.5 + 2 * 2 / 8, "y": 0.75 + 2 * 2 / 8, "z": 0.75 + 2 * 2 / 8})


def test_with_zero_smoothing_without_unseen_pairs():
    stats = (
        SymbolStats({joint_key("a", "x"): 1.0}),
        SymbolStats({"a": 1.0}),
        SymbolStats({"x": 1.0}),
    )
    joint, left, _, unseen = with_zero_smoothing(stats, VocabSizes(1, 1, 1), 1.0)
    assert unseen == 0.0
    assert joint[UNSEEN] == 0.0
    assert left["a"] == 1.0


def _fully_observed_counts() -> SymbolStats:
    """Counts in which every symbol, GAP included, is observed on both sides."""
    return SymbolStats(
        {
            joint_key("a", "x"): 1.0,
            joint_key("a", GAP): 1.0,
            joint_key(GAP, "x"): 2.0,
            joint_key("b", "x"): 1.0,
            joint_key("b", GAP): 3.0,
            joint_key("a", "y"): 2.0,
            joint_key(GAP, "y"): 1.0,
        }
    )


def test_smoothed_marginals_agree_with_joint_total():
    emp = _fully_observed_counts()
    # left {a, b} + GAP, right {x, y} + GAP
    sizes = VocabSizes(joint=8, left=3, right=3)
    smoothed = smoothed_stats(emp, sizes)

    joint_mass = sum(v for k, v in smoothed.joint.items() if k != UNSEEN)
    unseen_mass = smoothed.unseen_count * (sizes.joint - (len(smoothed.joint) - 1))
    assert joint_mass + unseen_mass == pytest.approx(smoothed.total)
    assert sum(smoothed.left.values()) == pytest.approx(smoothed.total)
    assert sum(smoothed.right.values()) == pytest.approx(smoothed.total)


def test_smoothed_stats_preserve_total_mass():
    emp = _fully_observed_counts()
    smoothed = smoothed_stats(emp, VocabSizes(joint=8, left=3, right=3))
    assert smoothed.total == pytest.approx(emp.total_count())
    assert smoothed.unseen_count > 0.0


def test_smoothed_stats_warns_without_singletons():
    emp = SymbolStats({joint_key("a", "x"): 2.0, joint_key("b", "y"): 4.0})
    sizes = VocabSizes(joint=8, left=3, right=3)

    with pytest.warns(DegenerateSmoothingWarning):
        smoothed = smoothed_stats(emp, sizes)

    assert smoothed.unseen_count == pytest.approx(MIN_ZERO_MASS / (sizes.joint - 2))
    assert math.isfinite(smoothed.total)
    assert smoothed.total > emp.total_count() - 1e-9


def test_all_singleton_pairs_reserve_minimum_mass():
    emp = SymbolStats({joint_key("a", "x"): 1.0, joint_key("b", "y"): 1.0})
    sizes = VocabSizes(joint=8, left=3, right=3)

    with pytest.warns(DegenerateSmoothingWarning):
        smoothed = smoothed_stats(emp, sizes)

    assert smoothed.joint[joint_key("a", "x")] == pytest.approx(1.0)
    assert smoothed.total == pytest.approx(emp.total_count() + MIN_ZERO_MASS)
