"""
Convergence experiments: how fast does sortedness emerge?

- TraceRecorder: on_tick sink turning snapshots into per-tick arrays
- run_to_convergence: one full run with its trace
- sweep_stubbornness: repeated runs across stubbornness levels
- fit_ticks_vs_disorder: linear fit of ticks-to-sort against initial inversions
"""

from __future__ import annotations
import dataclasses
import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy import stats

from agentsort.analysis.disorder import count_inversions, satisfied_fraction
from agentsort.core.engine import SortEngine, SortEngineConfig
from agentsort.core.events import Snapshot

logger = logging.getLogger(__name__)


@dataclass
class Trace:
    """Per-tick time series of one run (index k = k-th recorded tick)."""

    step: np.ndarray
    swaps: np.ndarray
    jams: np.ndarray
    reroutes: np.ndarray
    inversions: np.ndarray
    satisfied: np.ndarray  # Fraction of agents at their goal

    def __len__(self) -> int:
        return len(self.step)


class TraceRecorder:
    """
    Records every snapshot an engine emits.

    Usage:
        recorder = TraceRecorder()
        engine = SortEngine(config, on_tick=recorder)

    The terminal snapshot repeats the last step; it replaces that entry
    instead of adding a new one.
    """

    _FIELDS = ("step", "swaps", "jams", "reroutes", "inversions", "satisfied")

    def __init__(self):
        self._rows: list[tuple] = []

    def __call__(self, snapshot: Snapshot) -> None:
        row = (
            snapshot.step,
            snapshot.swaps,
            snapshot.jams,
            snapshot.reroutes,
            count_inversions(snapshot.values),
            satisfied_fraction(snapshot),
        )
        if self._rows and self._rows[-1][0] == snapshot.step:
            self._rows[-1] = row
        else:
            self._rows.append(row)

    def __len__(self) -> int:
        return len(self._rows)

    def clear(self) -> None:
        self._rows.clear()

    def as_trace(self) -> Trace:
        columns = list(zip(*self._rows)) if self._rows else [()] * len(self._FIELDS)
        arrays = {}
        for name, column in zip(self._FIELDS, columns):
            dtype = np.float64 if name == "satisfied" else np.int64
            arrays[name] = np.asarray(column, dtype=dtype)
        return Trace(**arrays)


@dataclass
class ConvergenceResult:
    """Outcome of one run."""

    converged: bool
    ticks: int  # Engine step count at the end
    swaps: int
    jams: int
    reroutes: int
    initial_inversions: int
    final: Snapshot
    trace: Trace


def run_to_convergence(
    config: SortEngineConfig,
    max_ticks: int = 10_000,
) -> ConvergenceResult:
    """
    Run one engine until the terminal tick (or max_ticks).

    Args:
        config: Engine configuration (seed it for reproducible runs)
        max_ticks: Upper bound on ticks before giving up

    Returns:
        ConvergenceResult with counters and the full trace
    """
    recorder = TraceRecorder()
    engine = SortEngine(config, on_tick=recorder)
    initial_inversions = count_inversions(engine.snapshot().values)

    final = engine.run_until_sorted(max_ticks=max_ticks)

    return ConvergenceResult(
        converged=final.sorted,
        ticks=final.step,
        swaps=final.swaps,
        jams=final.jams,
        reroutes=final.reroutes,
        initial_inversions=initial_inversions,
        final=final,
        trace=recorder.as_trace(),
    )


@dataclass
class SweepPoint:
    """Aggregate over trials at one stubbornness level."""

    stubbornness: float
    mean_ticks: float  # Over all trials; unconverged trials count as max_ticks
    std_ticks: float
    convergence_rate: float
    mean_jams: float
    mean_reroutes: float


def sweep_stubbornness(
    levels: Sequence[float],
    agent_count: int = 20,
    trials: int = 5,
    max_ticks: int = 20_000,
    seed: int | None = None,
    base_config: SortEngineConfig | None = None,
) -> list[SweepPoint]:
    """
    Measure ticks-to-sort across stubbornness levels.

    Args:
        levels: Stubbornness values to test, each in [0, 1]
        agent_count: Number of agents per run (ignored if base_config given)
        trials: Independent runs per level
        max_ticks: Per-run tick limit
        seed: Root seed; every trial gets its own derived seed
        base_config: Template configuration (stubbornness/seed overridden)

    Returns:
        One SweepPoint per level, in the given order
    """
    if base_config is None:
        base_config = SortEngineConfig(agent_count=agent_count)
    rng = np.random.default_rng(seed)

    points = []
    for level in levels:
        ticks, jams, reroutes, converged = [], [], [], []
        for _ in range(trials):
            config = dataclasses.replace(
                base_config,
                stubbornness=level,
                seed=int(rng.integers(2**32)),
            )
            result = run_to_convergence(config, max_ticks=max_ticks)
            ticks.append(result.ticks)
            jams.append(result.jams)
            reroutes.append(result.reroutes)
            converged.append(result.converged)

        point = SweepPoint(
            stubbornness=level,
            mean_ticks=float(np.mean(ticks)),
            std_ticks=float(np.std(ticks)),
            convergence_rate=float(np.mean(converged)),
            mean_jams=float(np.mean(jams)),
            mean_reroutes=float(np.mean(reroutes)),
        )
        logger.info(
            "stubbornness=%.2f ticks=%.1f±%.1f converged=%.0f%%",
            level, point.mean_ticks, point.std_ticks, 100 * point.convergence_rate,
        )
        points.append(point)

    return points


def fit_ticks_vs_disorder(
    inversions: Sequence[int],
    ticks: Sequence[int],
) -> tuple[float, float, float]:
    """
    Fit ticks ≈ slope · inversions + intercept.

    Returns:
        (slope, intercept, r_squared)
    """
    slope, intercept, r_value, _, _ = stats.linregress(
        np.asarray(inversions, dtype=np.float64),
        np.asarray(ticks, dtype=np.float64),
    )
    return float(slope), float(intercept), float(r_value ** 2)
