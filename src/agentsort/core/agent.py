"""
Agent: a single array slot with autonomy.

Each agent knows its value and its goal (the index it must occupy for the
array to be sorted). On every tick it perceives ONLY its two neighbours and
decides what to do:

- MOVE : request a swap toward the goal (neighbour may refuse)
- WAIT : sit out this tick (cooling off after a jam)
- PUSH : force a swap AWAY from the goal after repeated jams (reroute)
- STAY : at goal, or blocked by the array edge

The agent never sees the array. Its position is written by the engine
through notify_swap(); everything else is private cognitive state.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


DEFAULT_PATIENCE = 3
DEFAULT_STUBBORNNESS = 0.3
DEFAULT_ENERGY = 100.0

MEMORY_SIZE = 12  # Most recent events kept per agent
MAX_BACKOFF_TICKS = 3  # Cap on the linear back-off after a jam
NEUTRAL_ACCEPT_PROBABILITY = 0.7  # Swap leaves our distance unchanged


class AgentState(str, Enum):
    """Cognitive state, set only as a side effect of decide/notify calls."""

    IDLE = "idle"
    MOVING = "moving"
    JAMMED = "jammed"
    REROUTING = "rerouting"
    SATISFIED = "satisfied"


class Action(str, Enum):
    """What an agent wants to do this tick."""

    STAY = "stay"
    WAIT = "wait"
    MOVE = "move"
    PUSH = "push"


@dataclass(frozen=True)
class Intent:
    """An agent's request for this tick: action + direction (-1, 0, +1)."""

    action: Action
    direction: int = 0


STAY = Intent(Action.STAY, 0)
WAIT = Intent(Action.WAIT, 0)


class RandomSource(Protocol):
    """Anything with numpy Generator's random() signature."""

    def random(self) -> float:
        ...


class Agent:
    """
    One array element with a private goal and a local negotiation policy.

    Args:
        agent_id: Stable identifier (never reused by the owning engine)
        value: Payload being sorted
        goal_index: Index this value occupies in the sorted sequence
        pos: Initial index in the live array
        rng: Source for the randomized consent draws
        stubbornness: Probability of refusing a swap that hurts us
        patience: Consecutive jams tolerated before rerouting
    """

    def __init__(
        self,
        agent_id: int,
        value: float,
        goal_index: int,
        pos: int,
        rng: RandomSource,
        stubbornness: float = DEFAULT_STUBBORNNESS,
        patience: int = DEFAULT_PATIENCE,
    ):
        self.id = agent_id
        self.value = value
        self._goal_index = goal_index
        self.pos = pos
        self.rng = rng

        self.state = AgentState.IDLE

        # Cognitive state
        self.energy = DEFAULT_ENERGY  # Informational only
        self.patience = patience
        self.stubbornness = stubbornness
        self.jam_count = 0  # Consecutive jams since last relief
        self.total_jams = 0
        self.total_swaps = 0
        self.wait_ticks = 0  # Remaining cooldown ticks

        self.memory: deque[str] = deque(maxlen=MEMORY_SIZE)

    def __repr__(self) -> str:
        return (
            f"Agent(id={self.id}, value={self.value!r}, pos={self.pos}, "
            f"goal={self._goal_index}, state={self.state.value})"
        )

    @property
    def goal_index(self) -> int:
        """Target index in the sorted sequence (immutable)."""
        return self._goal_index

    @property
    def at_goal(self) -> bool:
        return self.pos == self._goal_index

    @property
    def distance_to_goal(self) -> int:
        """Signed distance: negative means the goal is to the left."""
        return self._goal_index - self.pos

    # ------------------------------------------------------------------
    # Decision policy
    # ------------------------------------------------------------------

    def decide(self, left: Agent | None, right: Agent | None) -> Intent:
        """
        Choose this tick's intent from local perception only.

        Args:
            left, right: Current neighbours, None at an array edge

        Returns:
            Intent for the engine to resolve
        """
        if self.at_goal:
            self.state = AgentState.SATISFIED
            return STAY

        if self.wait_ticks > 0:
            self.wait_ticks -= 1
            self.state = AgentState.JAMMED
            return WAIT

        want = 1 if self.distance_to_goal > 0 else -1
        neighbor = right if want > 0 else left

        # Edge of the array: sit tight, no lateral substitution
        if neighbor is None:
            self.state = AgentState.IDLE
            return STAY

        # Patience exhausted: push away from the goal
        if self.jam_count >= self.patience:
            self.jam_count = 0
            self.state = AgentState.REROUTING
            return Intent(Action.PUSH, -want)

        self.state = AgentState.MOVING
        return Intent(Action.MOVE, want)

    def consider_swap(self, requester_direction: int) -> bool:
        """
        Decide whether to accept a swap proposed by a neighbour.

        Args:
            requester_direction: Where the swap would move US (-1 or +1)

        Returns:
            True to accept, False to refuse
        """
        hypothetical = self.pos + requester_direction
        current = abs(self.distance_to_goal)
        after = abs(self._goal_index - hypothetical)

        if after < current:
            return True
        if after == current:
            return self.rng.random() < NEUTRAL_ACCEPT_PROBABILITY
        # Harmful: yield with probability 1 - stubbornness
        return self.rng.random() < 1.0 - self.stubbornness

    # ------------------------------------------------------------------
    # Engine notifications
    # ------------------------------------------------------------------

    def notify_jam(self) -> None:
        """Our move was refused: back off linearly, capped."""
        self.jam_count += 1
        self.total_jams += 1
        self.wait_ticks = min(self.jam_count, MAX_BACKOFF_TICKS)
        self.state = AgentState.JAMMED
        self._remember("jam")

    def notify_swap(self, new_pos: int) -> None:
        """A swap involving us happened; successful swaps relieve frustration."""
        self.pos = new_pos
        self.total_swaps += 1
        self.jam_count = max(0, self.jam_count - 1)
        self._remember("swap")

    def _remember(self, event: str) -> None:
        self.memory.append(event)
