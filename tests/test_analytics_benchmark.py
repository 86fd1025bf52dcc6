"""
Tests for src/analytics/benchmark.py

These tests verify input generation (shape, range, reproducibility, no
degenerate rows), timing collection with a deterministic clock, summary
statistics on hand-built frames, and disagreement detection.
"""

import math

import numpy as np
import pandas as pd
import pytest

from src.analytics.benchmark import (
    benchmark_algorithms,
    find_disagreements,
    generate_gcd_inputs,
    summarize_benchmark,
)
from src.gcd.engine import INT32_MAX, INT32_MIN


class TickingClock:
    """Clock advancing by a fixed step on every reading."""

    def __init__(self, step: int):
        self._step = step
        self._now = 0

    def now_ns(self) -> int:
        self._now += self._step
        return self._now


# =============================================================================
# generate_gcd_inputs
# =============================================================================

def test_generate_gcd_inputs_shape_and_dtype():
    inputs = generate_gcd_inputs(n_cases=50, arity=4, seed=1)

    assert inputs.shape == (50, 4)
    assert inputs.dtype == np.int64


def test_generate_gcd_inputs_respects_range():
    inputs = generate_gcd_inputs(n_cases=200, low=-10, high=10, seed=3)

    assert inputs.min() >= -10
    assert inputs.max() <= 10


def test_generate_gcd_inputs_reproducible_with_seed():
    first = generate_gcd_inputs(n_cases=20, seed=42)
    second = generate_gcd_inputs(n_cases=20, seed=42)

    assert np.array_equal(first, second)


def test_generate_gcd_inputs_never_all_zero():
    """With values in {0, 1} a quarter of pairs start all-zero and must be redrawn."""
    inputs = generate_gcd_inputs(n_cases=500, low=0, high=1, seed=5)

    assert inputs.any(axis=1).all()


def test_generate_gcd_inputs_accepts_full_valid_domain():
    inputs = generate_gcd_inputs(n_cases=100, low=INT32_MIN + 1, high=INT32_MAX, seed=9)

    assert (inputs > INT32_MIN).all()
    assert (inputs <= INT32_MAX).all()


@pytest.mark.parametrize("kwargs", [
    {"n_cases": -1},
    {"n_cases": 5, "arity": 1},
    {"n_cases": 5, "low": INT32_MIN},
    {"n_cases": 5, "high": INT32_MAX + 1},
    {"n_cases": 5, "low": 10, "high": 1},
    {"n_cases": 5, "low": 0, "high": 0},
])
def test_generate_gcd_inputs_rejects_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        generate_gcd_inputs(**kwargs)


# =============================================================================
# benchmark_algorithms
# =============================================================================

def test_benchmark_algorithms_records_every_case_and_method():
    inputs = np.array([[12, 18], [17, 5], [0, 7]])

    frame = benchmark_algorithms(inputs, repeats=2, clock=TickingClock(step=100))

    assert list(frame.columns) == ["case", "method", "arity", "result", "elapsed_ns"]
    assert len(frame) == 6
    assert set(frame["method"]) == {"euclidean", "stein"}
    # Each run reads the clock twice, one step apart
    assert (frame["elapsed_ns"] == 100).all()

    results = frame.pivot(index="case", columns="method", values="result")
    assert list(results["euclidean"]) == [6, 1, 7]
    assert list(results["stein"]) == [6, 1, 7]


def test_benchmark_algorithms_handles_higher_arity():
    inputs = generate_gcd_inputs(n_cases=30, arity=3, low=-500, high=500, seed=11)

    frame = benchmark_algorithms(inputs, repeats=1, clock=TickingClock(step=1))

    assert (frame["arity"] == 3).all()
    for case, row in enumerate(inputs):
        expected = math.gcd(*(int(value) for value in row))
        assert (frame.loc[frame["case"] == case, "result"] == expected).all()


def test_benchmark_algorithms_rejects_zero_repeats():
    with pytest.raises(ValueError, match="repeats"):
        benchmark_algorithms(np.array([[1, 2]]), repeats=0)


def test_benchmark_algorithms_empty_input():
    frame = benchmark_algorithms(np.empty((0, 2), dtype=np.int64))

    assert frame.empty
    assert list(frame.columns) == ["case", "method", "arity", "result", "elapsed_ns"]


# =============================================================================
# summarize_benchmark / find_disagreements
# =============================================================================

def test_summarize_benchmark_known_values():
    """
    euclidean timings 100, 200, 300, 10000:
      mean = 2650, median = 250, max = 10000
      trim 0.25 drops one value per tail -> mean(200, 300) = 250
    """
    frame = pd.DataFrame({
        "case": [0, 1, 2, 3, 0, 1, 2, 3],
        "method": ["euclidean"] * 4 + ["stein"] * 4,
        "arity": [2] * 8,
        "result": [1] * 8,
        "elapsed_ns": [100, 200, 300, 10_000, 50, 50, 50, 50],
    })

    summary = summarize_benchmark(frame, trim=0.25)

    assert summary.loc["euclidean", "cases"] == 4
    assert summary.loc["euclidean", "mean_ns"] == pytest.approx(2650.0)
    assert summary.loc["euclidean", "median_ns"] == pytest.approx(250.0)
    assert summary.loc["euclidean", "trimmed_mean_ns"] == pytest.approx(250.0)
    assert summary.loc["euclidean", "max_ns"] == 10_000
    assert summary.loc["stein", "trimmed_mean_ns"] == pytest.approx(50.0)


@pytest.mark.parametrize("trim", [-0.1, 0.5, 0.9])
def test_summarize_benchmark_rejects_invalid_trim(trim):
    frame = pd.DataFrame({"method": ["stein"], "elapsed_ns": [1]})

    with pytest.raises(ValueError, match="trim"):
        summarize_benchmark(frame, trim=trim)


def test_find_disagreements_empty_when_algorithms_agree():
    inputs = np.array([[3, 2], [48, 18]])
    frame = benchmark_algorithms(inputs, repeats=1, clock=TickingClock(step=1))

    assert find_disagreements(frame).empty


def test_find_disagreements_reports_legacy_unit_branch_cases():
    """Legacy Stein returns 3 for gcd(3, 2); Euclidean returns 1."""
    inputs = np.array([[3, 2], [48, 18]])
    frame = benchmark_algorithms(
        inputs, repeats=1, clock=TickingClock(step=1), legacy_unit_branch=True
    )

    disagreements = find_disagreements(frame)

    assert list(disagreements.index) == [0]
    assert disagreements.loc[0, "euclidean"] == 1
    assert disagreements.loc[0, "stein"] == 3


def test_find_disagreements_with_zero_cases():
    """A benchmark with no cases reports no disagreements and keeps both method columns."""
    inputs = generate_gcd_inputs(n_cases=0, seed=1)
    frame = benchmark_algorithms(inputs, clock=TickingClock(step=1))

    disagreements = find_disagreements(frame)

    assert disagreements.empty
    assert list(disagreements.columns) == ["euclidean", "stein"]
