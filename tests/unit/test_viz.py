"""Smoke tests for visualization helpers."""

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pytest

from agentsort.analysis.convergence import run_to_convergence, SweepPoint
from agentsort.core.engine import SortEngine, SortEngineConfig
from agentsort.viz import STATE_COLORS, plot_snapshot, plot_trace, plot_sweep, plot_run_summary, save_figure


@pytest.fixture
def result():
    config = SortEngineConfig(values=[3, 1, 5, 2, 4], shuffle=False, stubbornness=0.0, seed=7)
    return run_to_convergence(config, max_ticks=1000)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


class TestPlots:
    """Tests that plots build from snapshots and traces."""

    def test_plot_snapshot_bars(self):
        snapshot = SortEngine(SortEngineConfig(agent_count=7, seed=0)).snapshot()
        fig, ax = plot_snapshot(snapshot, show_goals=True)

        assert len(ax.patches) == 7
        assert "step 0" in ax.get_title()

    def test_state_colors_cover_all_states(self):
        assert set(STATE_COLORS) == {"idle", "moving", "jammed", "rerouting", "satisfied"}

    def test_plot_trace(self, result):
        fig, ax = plot_trace(result.trace)
        assert len(ax.lines) == 3

    def test_plot_sweep(self):
        points = [
            SweepPoint(0.0, 30.0, 2.0, 1.0, 0.0, 0.0),
            SweepPoint(0.5, 80.0, 10.0, 0.5, 40.0, 3.0),
        ]
        fig, ax = plot_sweep(points)
        assert ax.get_xlabel() == "stubbornness"

    def test_run_summary_saves(self, result, tmp_path):
        initial = SortEngine(SortEngineConfig(values=[3, 1, 5, 2, 4], shuffle=False)).snapshot()
        fig = plot_run_summary(initial, result.final, result.trace)

        path = tmp_path / "summary.png"
        save_figure(fig, path, dpi=50)
        assert path.exists()
