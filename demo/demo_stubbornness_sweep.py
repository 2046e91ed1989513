"""
Test: How does stubbornness slow down emergent sorting?

Sweeps stubbornness from 0 to 0.95 and measures ticks-to-sort over several
trials per level. Also fits ticks against initial disorder (inversions) at
a fixed stubbornness to check that work scales with how shuffled the
array starts.

Key insight: at stubbornness 0 no swap is ever refused, so no jams and no
reroutes occur. As stubbornness approaches 1, refusals dominate and the
reroute escalation becomes the main way forward.
"""

import logging
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

from agentsort.core import SortEngineConfig
from agentsort.analysis import sweep_stubbornness, run_to_convergence, fit_ticks_vs_disorder
from agentsort.viz import plot_sweep, save_figure


def main():
    """Run the stubbornness sweep."""
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    print("=" * 60)
    print("Stubbornness Sweep")
    print("=" * 60)

    levels = [0.0, 0.2, 0.4, 0.6, 0.8, 0.9, 0.95]
    agent_count = 16
    trials = 8

    print(f"\n1. Sweeping {len(levels)} levels, {agent_count} agents, {trials} trials each...")
    points = sweep_stubbornness(levels, agent_count=agent_count, trials=trials,
                                max_ticks=50_000, seed=42)

    print(f"\n   {'stub':>5} {'ticks':>10} {'±':>8} {'conv':>6} {'jams':>9} {'reroutes':>9}")
    for p in points:
        print(f"   {p.stubbornness:5.2f} {p.mean_ticks:10.1f} {p.std_ticks:8.1f} "
              f"{100 * p.convergence_rate:5.0f}% {p.mean_jams:9.1f} {p.mean_reroutes:9.1f}")

    print("\n2. Ticks vs initial disorder (stubbornness=0.3)...")
    rng = np.random.default_rng(0)
    inversions, ticks = [], []
    for _ in range(40):
        config = SortEngineConfig(agent_count=agent_count, stubbornness=0.3,
                                  seed=int(rng.integers(2**32)))
        result = run_to_convergence(config, max_ticks=50_000)
        if result.converged:
            inversions.append(result.initial_inversions)
            ticks.append(result.ticks)

    slope, intercept, r_squared = fit_ticks_vs_disorder(inversions, ticks)
    print(f"   ticks ≈ {slope:.3f} · inversions + {intercept:.1f}   (R² = {r_squared:.3f})")

    print("\n3. Creating visualization...")
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    plot_sweep(points, ax=axes[0])

    ax = axes[1]
    ax.scatter(inversions, ticks, alpha=0.6)
    x = np.array([min(inversions), max(inversions)])
    ax.plot(x, slope * x + intercept, "r-", linewidth=2, label=f"fit: R²={r_squared:.2f}")
    ax.set_xlabel("initial inversions")
    ax.set_ylabel("ticks to sort")
    ax.set_title("Work vs Initial Disorder")
    ax.legend()
    ax.grid(True, alpha=0.3)

    fig.tight_layout()

    output_dir = Path("output")
    output_dir.mkdir(exist_ok=True)
    output_path = output_dir / "stubbornness_sweep.png"
    save_figure(fig, output_path)
    print(f"   Saved to: {output_path}")

    plt.show()

    print("\n" + "=" * 60)
    print("Demo complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
