"""
Core engine primitives.

This layer knows NOTHING about inversions, traces or plots.
It only knows:
- Agents with a goal, a position and local cognitive state
- Intents (stay / wait / move / push) and neighbour consent
- Resolving intents into swaps, once per index per tick
- Snapshots and log events for outside collaborators

Two ways to drive the engine:
- SortEngine.step_once / run_until_sorted: synchronous, for tests and analysis
- TickScheduler: continuous ticking on a worker thread (run / stop)
"""

from agentsort.core.agent import Agent, AgentState, Action, Intent
from agentsort.core.events import AgentRecord, EventLog, LogCategory, LogEvent, Snapshot
from agentsort.core.engine import SortEngine, SortEngineConfig, goal_indices
from agentsort.core.scheduler import TickScheduler

__all__ = [
    "Agent",
    "AgentState",
    "Action",
    "Intent",
    "AgentRecord",
    "EventLog",
    "LogCategory",
    "LogEvent",
    "Snapshot",
    "SortEngine",
    "SortEngineConfig",
    "goal_indices",
    "TickScheduler",
]
