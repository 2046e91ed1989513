"""
Visualization of the self-sorting array.

Provides:
- Bar view of a snapshot (height = value, colour = agent state)
- Counter / disorder time series of a run
- Stubbornness sweep summaries

All plots use matplotlib and consume snapshots, traces or sweep points
only; nothing here touches a live engine.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes
from matplotlib.patches import Patch

if TYPE_CHECKING:
    from agentsort.core.events import Snapshot
    from agentsort.analysis.convergence import Trace, SweepPoint


# One colour per agent state
STATE_COLORS = {
    "idle": "#94a3b8",       # Slate
    "moving": "#3b82f6",     # Blue
    "jammed": "#ef4444",     # Red
    "rerouting": "#f59e0b",  # Amber
    "satisfied": "#10b981",  # Green
}


def plot_snapshot(
    snapshot: "Snapshot",
    title: str | None = None,
    ax: Axes | None = None,
    show_goals: bool = False,
    legend: bool = True,
    figsize: tuple[float, float] = (10, 4),
) -> tuple[Figure, Axes]:
    """
    Plot the array as bars coloured by agent state.

    Args:
        snapshot: Snapshot to draw
        title: Plot title (defaults to the step/counter summary)
        ax: Existing axes to plot on (creates new figure if None)
        show_goals: Mark each agent's goal index with a tick below its bar
        legend: Whether to add a state legend
        figsize: Figure size if creating new figure

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    positions = np.arange(len(snapshot.agents))
    values = np.asarray(snapshot.values, dtype=np.float64)
    colors = [STATE_COLORS.get(a.state, "#000000") for a in snapshot.agents]

    ax.bar(positions, values, color=colors, width=0.85)

    if show_goals:
        goals = [a.goal for a in snapshot.agents]
        ax.scatter(goals, np.zeros(len(goals)), marker="|", color="black", s=60, zorder=3)

    if title is None:
        title = (
            f"step {snapshot.step}  swaps={snapshot.swaps}  jams={snapshot.jams}  "
            f"reroutes={snapshot.reroutes}  sorted={'yes' if snapshot.sorted else 'no'}"
        )
    ax.set_title(title)
    ax.set_xlabel("position")
    ax.set_ylabel("value")
    ax.set_xlim(-0.5, len(positions) - 0.5)

    if legend:
        handles = [Patch(color=c, label=s) for s, c in STATE_COLORS.items()]
        ax.legend(handles=handles, loc="upper left", fontsize="small", ncol=len(handles))

    return fig, ax


def plot_trace(
    trace: "Trace",
    title: str = "Run History",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 5),
) -> tuple[Figure, Axes]:
    """
    Plot cumulative counters and inversions against step.

    Inversions are drawn on a secondary y axis.

    Returns:
        (fig, ax) tuple (ax is the primary axes)
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ax.plot(trace.step, trace.swaps, label="swaps", linewidth=2)
    ax.plot(trace.step, trace.jams, label="jams", linewidth=2)
    ax.plot(trace.step, trace.reroutes, label="reroutes", linewidth=2)
    ax.set_xlabel("step")
    ax.set_ylabel("cumulative count")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)

    ax2 = ax.twinx()
    ax2.plot(trace.step, trace.inversions, "k--", label="inversions", linewidth=1.5)
    ax2.set_ylabel("inversions")
    ax2.legend(loc="upper right")

    ax.set_title(title)
    return fig, ax


def plot_sweep(
    points: Sequence["SweepPoint"],
    title: str = "Ticks to Sort vs Stubbornness",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 5),
) -> tuple[Figure, Axes]:
    """Plot mean ticks-to-sort (± std) per stubbornness level."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    levels = np.array([p.stubbornness for p in points])
    mean = np.array([p.mean_ticks for p in points])
    std = np.array([p.std_ticks for p in points])

    ax.errorbar(levels, mean, yerr=std, fmt="o-", capsize=4, linewidth=2)

    for p in points:
        if p.convergence_rate < 1.0:
            ax.annotate(
                f"{100 * p.convergence_rate:.0f}%",
                (p.stubbornness, p.mean_ticks),
                textcoords="offset points", xytext=(0, 8), ha="center",
            )

    ax.set_xlabel("stubbornness")
    ax.set_ylabel("ticks to sort")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    return fig, ax


def plot_run_summary(
    initial: "Snapshot",
    final: "Snapshot",
    trace: "Trace",
    figsize: tuple[float, float] = (14, 8),
) -> Figure:
    """Initial array, final array and run history in one figure."""
    fig = plt.figure(figsize=figsize)
    grid = fig.add_gridspec(2, 2)

    plot_snapshot(initial, title=f"Initial (step {initial.step})", ax=fig.add_subplot(grid[0, 0]))
    plot_snapshot(final, ax=fig.add_subplot(grid[0, 1]), legend=False)
    plot_trace(trace, ax=fig.add_subplot(grid[1, :]))

    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
