"""
Demo: An Array Sorts Itself.

Twenty agents, shuffled, each knowing only its goal index and its two
neighbours. No sorting algorithm runs; the array converges through local
swap proposals, refusals (jams) and forced reroutes.

The demo:
1. Builds a shuffled engine
2. Steps it to completion while recording the trace
3. Prints the run counters and the last few log lines
4. Plots initial array, final array and run history
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt

from agentsort.core import SortEngine, SortEngineConfig, EventLog, LogCategory
from agentsort.analysis import TraceRecorder, count_inversions, kendall_tau
from agentsort.viz import plot_run_summary, save_figure


def main():
    """Run the self-sorting demo."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Self-Sorting Array Demo")
    print("=" * 60)

    config = SortEngineConfig(agent_count=20, stubbornness=0.3, seed=42)
    recorder = TraceRecorder()
    log = EventLog(max_lines=200)
    engine = SortEngine(config, on_tick=recorder, on_log=log.append)

    initial = engine.snapshot()
    print(f"\n1. Initial array ({config.agent_count} agents, stubbornness={config.stubbornness})")
    print(f"   values:     {initial.values}")
    print(f"   inversions: {count_inversions(initial.values)}")
    print(f"   kendall τ:  {kendall_tau(initial.values):.3f}")

    print("\n2. Running to completion...")
    final = engine.run_until_sorted(max_ticks=50_000)

    print(f"\n   RESULTS:")
    print(f"   ---------")
    print(f"   sorted:     {final.sorted}")
    print(f"   steps:      {final.step}")
    print(f"   swaps:      {final.swaps}")
    print(f"   jams:       {final.jams}")
    print(f"   reroutes:   {final.reroutes}")
    print(f"   values:     {final.values}")

    print("\n3. Last log lines:")
    for line in log.lines()[-8:]:
        print(f"   {line}")
    print(f"   ({len(log.by_category(LogCategory.ROUTE))} reroutes kept in log)")

    print("\n4. Creating visualization...")
    fig = plot_run_summary(initial, final, recorder.as_trace())

    output_dir = Path("output")
    output_dir.mkdir(exist_ok=True)
    output_path = output_dir / "self_sort.png"
    save_figure(fig, output_path)
    print(f"   Saved to: {output_path}")

    plt.show()

    print("\n" + "=" * 60)
    print("Demo complete!")
    print("=" * 60)

    return final


if __name__ == "__main__":
    main()
