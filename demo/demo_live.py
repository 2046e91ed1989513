"""
Demo: Continuous Ticking with Live Parameter Changes.

Runs the engine on the TickScheduler (background thread, fixed tick rate)
and prints log events as they happen. Halfway through, stubbornness is
dropped to 0 live, which clears any remaining jams.
"""

import logging
import time

from agentsort.core import SortEngine, SortEngineConfig, TickScheduler, LogEvent


def print_event(event: LogEvent) -> None:
    print(f"   {event.category.value:>5}  {event}")


def main():
    """Run the live scheduler demo."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s: %(message)s")

    print("=" * 60)
    print("Live Self-Sorting Demo")
    print("=" * 60)

    config = SortEngineConfig(agent_count=12, stubbornness=0.8, tick_rate=40.0, seed=7)
    engine = SortEngine(config, on_log=print_event)
    scheduler = TickScheduler(engine)

    print(f"\n1. Running at {config.tick_rate:.0f} ticks/s with stubbornness={config.stubbornness}")
    scheduler.run()
    time.sleep(2.0)

    print("\n2. Dropping stubbornness to 0 and doubling the tick rate (live)")
    engine.set_stubbornness(0.0)
    engine.tick_rate = 2 * config.tick_rate

    finished = scheduler.wait(timeout=30.0)
    scheduler.stop()

    snapshot = engine.snapshot()
    print(f"\n3. finished={finished} sorted={snapshot.sorted} step={snapshot.step} "
          f"swaps={snapshot.swaps} jams={snapshot.jams} reroutes={snapshot.reroutes}")
    print(f"   values: {snapshot.values}")

    print("\n" + "=" * 60)
    print("Demo complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
