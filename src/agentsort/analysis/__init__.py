"""
Analysis layer: derived quantities for visualization and experiments.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- count_inversions / kendall_tau: global disorder of the array
- displacement / satisfied_fraction: per-agent distance to goal
- TraceRecorder: per-tick time series from emitted snapshots
- run_to_convergence / sweep_stubbornness: convergence experiments
- fit_ticks_vs_disorder: how ticks-to-sort scales with initial disorder
"""

from agentsort.analysis.disorder import (
    count_inversions,
    kendall_tau,
    values_in_order,
    displacement,
    satisfied_fraction,
)
from agentsort.analysis.convergence import (
    Trace,
    TraceRecorder,
    ConvergenceResult,
    run_to_convergence,
    SweepPoint,
    sweep_stubbornness,
    fit_ticks_vs_disorder,
)

__all__ = [
    "count_inversions",
    "kendall_tau",
    "values_in_order",
    "displacement",
    "satisfied_fraction",
    # Convergence experiments
    "Trace",
    "TraceRecorder",
    "ConvergenceResult",
    "run_to_convergence",
    "SweepPoint",
    "sweep_stubbornness",
    "fit_ticks_vs_disorder",
]
