"""Unit tests for analysis module."""

import numpy as np
import pytest

from agentsort.analysis.disorder import (
    count_inversions,
    kendall_tau,
    values_in_order,
    displacement,
    satisfied_fraction,
)
from agentsort.analysis.convergence import (
    TraceRecorder,
    run_to_convergence,
    sweep_stubbornness,
    fit_ticks_vs_disorder,
)
from agentsort.core.engine import SortEngine, SortEngineConfig


class TestDisorder:
    """Tests for disorder measures."""

    def test_sorted_has_no_inversions(self):
        assert count_inversions([1, 2, 3, 4]) == 0

    def test_reversed_has_all_inversions(self):
        n = 6
        assert count_inversions(list(range(n, 0, -1))) == n * (n - 1) // 2

    def test_single_inversion(self):
        assert count_inversions([2, 1, 3]) == 1
        assert count_inversions([1, 3, 2, 4]) == 1

    def test_inversions_match_pairwise_count(self, rng):
        values = rng.permutation(25)
        expected = sum(
            1 for i in range(len(values)) for j in range(i + 1, len(values))
            if values[i] > values[j]
        )
        assert count_inversions(values) == expected

    def test_trivial_sequences(self):
        assert count_inversions([]) == 0
        assert count_inversions([5]) == 0
        assert kendall_tau([5]) == 1.0

    def test_kendall_tau_extremes(self):
        assert kendall_tau([1, 2, 3, 4, 5]) == pytest.approx(1.0)
        assert kendall_tau([5, 4, 3, 2, 1]) == pytest.approx(-1.0)

    def test_kendall_tau_partial(self):
        tau = kendall_tau([2, 1, 3, 4, 5])
        assert 0.0 < tau < 1.0

    def test_displacement(self):
        snapshot = SortEngine(SortEngineConfig(values=[3, 1, 2], shuffle=False)).snapshot()

        assert values_in_order(snapshot).tolist() == [3, 1, 2]
        assert displacement(snapshot).tolist() == [2, 1, 1]
        assert satisfied_fraction(snapshot) == 0.0

    def test_satisfied_fraction(self):
        snapshot = SortEngine(SortEngineConfig(values=[1, 3, 2, 4], shuffle=False)).snapshot()
        assert satisfied_fraction(snapshot) == pytest.approx(0.5)


class TestTraceRecorder:
    """Tests for TraceRecorder."""

    def test_records_reset_and_ticks(self):
        recorder = TraceRecorder()
        engine = SortEngine(
            SortEngineConfig(values=list(range(6, 0, -1)), shuffle=False, seed=3), on_tick=recorder
        )
        for _ in range(4):
            engine.step_once()

        trace = recorder.as_trace()
        assert len(trace) == 5
        assert trace.step.tolist() == [0, 1, 2, 3, 4]
        assert np.all(np.diff(trace.swaps) >= 0)
        assert trace.satisfied.dtype == np.float64

    def test_terminal_snapshot_replaces_last_entry(self):
        recorder = TraceRecorder()
        engine = SortEngine(SortEngineConfig(values=[1, 2, 3], shuffle=False), on_tick=recorder)
        engine.step_once()
        engine.step_once()

        trace = recorder.as_trace()
        assert trace.step.tolist() == [0]
        assert trace.inversions.tolist() == [0]
        assert trace.satisfied.tolist() == [1.0]

    def test_empty_recorder(self):
        trace = TraceRecorder().as_trace()
        assert len(trace) == 0
        assert trace.inversions.dtype == np.int64


class TestRunToConvergence:
    """Tests for run_to_convergence."""

    def test_converges(self):
        config = SortEngineConfig(values=[3, 1, 5, 2, 4], shuffle=False, stubbornness=0.0, seed=7)
        result = run_to_convergence(config, max_ticks=1000)

        assert result.converged
        assert result.initial_inversions == 4
        assert result.final.values == [1, 2, 3, 4, 5]
        assert result.ticks == result.final.step == result.trace.step[-1]
        assert result.trace.inversions[0] == 4
        assert result.trace.inversions[-1] == 0
        assert result.trace.satisfied[-1] == 1.0

    def test_unconverged_run(self):
        config = SortEngineConfig(values=list(range(20, 0, -1)), shuffle=False,
                                  stubbornness=0.9, seed=1)
        result = run_to_convergence(config, max_ticks=3)

        assert not result.converged
        assert result.ticks == 3
        assert result.initial_inversions == 190


class TestSweep:
    """Tests for stubbornness sweeps and scaling fits."""

    def test_sweep_points(self):
        points = sweep_stubbornness([0.0, 0.5], agent_count=6, trials=2, max_ticks=20_000, seed=1)

        assert [p.stubbornness for p in points] == [0.0, 0.5]
        assert points[0].convergence_rate == 1.0
        assert points[0].mean_jams == 0.0
        assert all(p.mean_ticks > 0 for p in points)
        assert all(p.std_ticks >= 0 for p in points)

    def test_sweep_reproducible(self):
        a = sweep_stubbornness([0.3], agent_count=5, trials=2, seed=9)
        b = sweep_stubbornness([0.3], agent_count=5, trials=2, seed=9)
        assert a == b

    def test_fit_exact_line(self):
        inversions = [0, 5, 10, 20]
        ticks = [1, 11, 21, 41]
        slope, intercept, r_squared = fit_ticks_vs_disorder(inversions, ticks)

        assert slope == pytest.approx(2.0)
        assert intercept == pytest.approx(1.0)
        assert r_squared == pytest.approx(1.0)
