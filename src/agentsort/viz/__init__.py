"""
Visualization utilities.

- Snapshot bar views (value heights, state colours)
- Run history plots
- Stubbornness sweep plots
"""

from agentsort.viz.arrays import (
    STATE_COLORS,
    plot_snapshot,
    plot_trace,
    plot_sweep,
    plot_run_summary,
    save_figure,
)

__all__ = [
    "STATE_COLORS",
    "plot_snapshot",
    "plot_trace",
    "plot_sweep",
    "plot_run_summary",
    "save_figure",
]
