"""
Disorder measures for an array of payloads.

IMPORTANT: These are derived from snapshots only. The engine never sees
them, and no agent could compute them (they are global quantities).

- count_inversions: pairs (i < j) with values[i] > values[j]
- kendall_tau: rank correlation with the sorted order (1 = sorted, -1 = reversed)
- displacement: |pos - goal| per agent
- satisfied_fraction: share of agents sitting on their goal
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

import numpy as np
from scipy import stats

if TYPE_CHECKING:
    from agentsort.core.events import Snapshot


def count_inversions(values: Sequence[float]) -> int:
    """
    Count out-of-order pairs.

    Zero exactly when the sequence is ascending; n(n-1)/2 when descending.
    """
    v = np.asarray(values)
    if v.size < 2:
        return 0
    # Upper triangle of the pairwise comparison matrix: i < j and v[i] > v[j]
    return int(np.triu(v[:, None] > v[None, :], k=1).sum())


def kendall_tau(values: Sequence[float]) -> float:
    """Kendall rank correlation between array order and value order."""
    v = np.asarray(values)
    if v.size < 2:
        return 1.0
    tau, _ = stats.kendalltau(np.arange(v.size), v)
    return float(tau)


def values_in_order(snapshot: "Snapshot") -> np.ndarray:
    """Payloads in current array order."""
    return np.asarray(snapshot.values)


def displacement(snapshot: "Snapshot") -> np.ndarray:
    """Distance of every agent from its goal, in array order."""
    pos = np.array([a.pos for a in snapshot.agents])
    goal = np.array([a.goal for a in snapshot.agents])
    return np.abs(goal - pos)


def satisfied_fraction(snapshot: "Snapshot") -> float:
    """Fraction of agents with pos == goal."""
    if not snapshot.agents:
        return 1.0
    return float(np.mean(displacement(snapshot) == 0))
