"""
What the engine emits to the outside world.

- Snapshot: per-tick, read-only picture of counters and agents
- LogEvent: human-readable message tagged route / jam / done
- EventLog: bounded sink for LogEvents (keeps the most recent lines)

Collaborators (renderers, telemetry, analysis) only ever see these types.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from agentsort.core.agent import Agent


class LogCategory(str, Enum):
    ROUTE = "route"
    JAM = "jam"
    DONE = "done"


@dataclass(frozen=True)
class LogEvent:
    """One log line emitted during a tick."""

    step: int
    message: str
    category: LogCategory

    def __str__(self) -> str:
        return f"[{self.step}] {self.message}"


@dataclass(frozen=True)
class AgentRecord:
    """Frozen view of one agent at snapshot time."""

    id: int
    value: float
    pos: int
    goal: int
    state: str
    jam_count: int
    total_jams: int
    total_swaps: int

    @classmethod
    def from_agent(cls, agent: "Agent") -> "AgentRecord":
        return cls(
            id=agent.id,
            value=agent.value,
            pos=agent.pos,
            goal=agent.goal_index,
            state=agent.state.value,
            jam_count=agent.jam_count,
            total_jams=agent.total_jams,
            total_swaps=agent.total_swaps,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "value": self.value,
            "pos": self.pos,
            "goal": self.goal,
            "state": self.state,
            "jamCount": self.jam_count,
            "totalJams": self.total_jams,
            "totalSwaps": self.total_swaps,
        }


@dataclass(frozen=True)
class Snapshot:
    """Engine state after a tick. Agents are ordered by array position."""

    step: int
    swaps: int
    jams: int
    reroutes: int
    sorted: bool
    agents: tuple[AgentRecord, ...]

    @property
    def values(self) -> list[float]:
        """Payloads in current array order."""
        return [a.value for a in self.agents]

    def to_dict(self) -> dict:
        """Plain-dict form with the external (camelCase) agent keys."""
        return {
            "step": self.step,
            "swaps": self.swaps,
            "jams": self.jams,
            "reroutes": self.reroutes,
            "sorted": self.sorted,
            "agents": [a.to_dict() for a in self.agents],
        }


class EventLog:
    """
    Bounded log sink; pass `log.append` as an engine's on_log callback.

    Oldest lines are evicted once `max_lines` is reached.
    """

    def __init__(self, max_lines: int = 200):
        self._events: deque[LogEvent] = deque(maxlen=max_lines)

    def append(self, event: LogEvent) -> None:
        self._events.append(event)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[LogEvent]:
        return iter(self._events)

    def by_category(self, category: LogCategory) -> list[LogEvent]:
        return [e for e in self._events if e.category == category]

    def lines(self) -> list[str]:
        """Rendered "[step] message" lines, oldest first."""
        return [str(e) for e in self._events]

    def clear(self) -> None:
        self._events.clear()
