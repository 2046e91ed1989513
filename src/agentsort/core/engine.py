"""
SortEngine: the "physics" layer that owns the array of agents.

Each tick:
1. Draw a random permutation of indices (no agent gets a permanent
   positional advantage)
2. Collect one intent per agent, in permutation order, from live neighbours
3. Resolve intents in the same order: forced pushes always swap, moves ask
   the neighbour's consent, refusals become jams
4. Emit a snapshot

An index can take part in at most one swap per tick, which keeps the
positions a permutation of [0, n).

The engine never sorts anything itself. Sortedness is only ever CHECKED.
"""

from __future__ import annotations
import dataclasses
import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np

from agentsort.core.agent import (
    Action,
    Agent,
    AgentState,
    Intent,
    DEFAULT_PATIENCE,
    DEFAULT_STUBBORNNESS,
)
from agentsort.core.events import AgentRecord, LogCategory, LogEvent, Snapshot

logger = logging.getLogger(__name__)

MIN_TICK_DELAY_S = 0.01  # Floor on the delay between continuous ticks

TickCallback = Callable[[Snapshot], None]
LogCallback = Callable[[LogEvent], None]


def _check_stubbornness(value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"stubbornness must be in [0, 1], got {value}")


@dataclass
class SortEngineConfig:
    """Configuration for a self-sorting run."""

    agent_count: int = 20
    stubbornness: float = DEFAULT_STUBBORNNESS  # Applied to every agent
    tick_rate: float = 50.0  # Ticks per second when running continuously
    patience: int = DEFAULT_PATIENCE  # Jams tolerated before rerouting
    values: Sequence[float] | None = None  # Explicit payloads (default 1..n)
    shuffle: bool = True  # Shuffle payloads on every reset
    seed: int | None = None  # Root seed for all random draws

    def __post_init__(self):
        if self.values is not None:
            self.values = tuple(self.values)
            if len(set(self.values)) != len(self.values):
                raise ValueError("values must be unique")
            self.agent_count = len(self.values)
        if not isinstance(self.agent_count, (int, np.integer)) or isinstance(self.agent_count, bool):
            raise ValueError(f"agent_count must be an integer, got {self.agent_count!r}")
        if self.agent_count < 2:
            raise ValueError(f"agent_count must be >= 2, got {self.agent_count}")
        _check_stubbornness(self.stubbornness)
        if self.tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {self.tick_rate}")
        if self.patience < 1:
            raise ValueError(f"patience must be >= 1, got {self.patience}")


def goal_indices(values: Sequence[float]) -> np.ndarray:
    """
    Index each value occupies in the sorted sequence.

    Example: [5, 3, 1, 4, 2] -> [4, 2, 0, 3, 1]
    """
    order = np.argsort(np.asarray(values), kind="stable")
    goals = np.empty(len(order), dtype=np.int64)
    goals[order] = np.arange(len(order))
    return goals


class SortEngine:
    """
    Tick engine for one self-sorting run.

    The engine exclusively owns the agent sequence: an agent's position IS
    its index in `agents`. Agents mutate only their own fields, and only
    when the engine calls them.

    Args:
        config: Run configuration (defaults to SortEngineConfig())
        on_tick: Called with every emitted Snapshot
        on_log: Called with every LogEvent
    """

    def __init__(
        self,
        config: SortEngineConfig | None = None,
        on_tick: TickCallback | None = None,
        on_log: LogCallback | None = None,
    ):
        # Private copy: live changes must not leak into other engines
        self.config = dataclasses.replace(config) if config is not None else SortEngineConfig()
        self.on_tick = on_tick
        self.on_log = on_log

        # Independent streams: initial layout, tick order, consent draws
        layout_seed, order_seed, consent_seed = np.random.SeedSequence(
            self.config.seed
        ).spawn(3)
        self._layout_rng = np.random.default_rng(layout_seed)
        self._order_rng = np.random.default_rng(order_seed)
        self._consent_rng = np.random.default_rng(consent_seed)

        self._ids = itertools.count()

        self.agents: list[Agent] = []
        self.step = 0
        self.swaps = 0
        self.jams = 0
        self.reroutes = 0
        self.finished = False

        self.reset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> Snapshot:
        """Rebuild a freshly (re)shuffled agent set and zero the counters."""
        cfg = self.config
        self.step = 0
        self.swaps = 0
        self.jams = 0
        self.reroutes = 0
        self.finished = False

        if cfg.values is not None:
            values = np.asarray(cfg.values)
        else:
            values = np.arange(1, cfg.agent_count + 1)
        if cfg.shuffle:
            values = self._layout_rng.permutation(values)

        goals = goal_indices(values)
        self.agents = [
            Agent(
                agent_id=next(self._ids),
                value=value.item(),
                goal_index=int(goal),
                pos=pos,
                rng=self._consent_rng,
                stubbornness=cfg.stubbornness,
                patience=cfg.patience,
            )
            for pos, (value, goal) in enumerate(zip(values, goals))
        ]
        self._check_permutation()

        logger.info(
            "reset agents=%d stubbornness=%.2f seed=%s",
            len(self.agents), cfg.stubbornness, cfg.seed,
        )
        snapshot = self.snapshot()
        self._publish(snapshot)
        return snapshot

    def set_stubbornness(self, value: float) -> None:
        """Change stubbornness live for every agent (and future resets)."""
        _check_stubbornness(value)
        self.config.stubbornness = value
        for agent in self.agents:
            agent.stubbornness = value

    @property
    def tick_rate(self) -> float:
        return self.config.tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"tick_rate must be positive, got {value}")
        self.config.tick_rate = value

    @property
    def tick_delay(self) -> float:
        """Seconds between continuous ticks, clamped to MIN_TICK_DELAY_S."""
        return max(MIN_TICK_DELAY_S, 1.0 / self.config.tick_rate)

    @property
    def is_sorted(self) -> bool:
        return all(agent.at_goal for agent in self.agents)

    # ------------------------------------------------------------------
    # Core tick
    # ------------------------------------------------------------------

    def step_once(self) -> Snapshot:
        """Advance exactly one tick and return the emitted snapshot."""
        if self.is_sorted:
            return self._finish()

        self.step += 1
        n = len(self.agents)
        order = self._order_rng.permutation(n).tolist()

        # Intent collection: neighbours are looked up live, positions are
        # stable until resolution
        intents: list[Intent | None] = [None] * n
        for i in order:
            left = self.agents[i - 1] if i > 0 else None
            right = self.agents[i + 1] if i < n - 1 else None
            intents[i] = self.agents[i].decide(left, right)

        # Resolution in the same random order
        consumed: set[int] = set()
        for i in order:
            if i in consumed:
                continue
            intent = intents[i]
            if intent.direction == 0:
                continue

            j = i + intent.direction
            if j < 0 or j >= n or j in consumed:
                continue

            agent = self.agents[i]
            neighbor = self.agents[j]

            if intent.action is Action.PUSH:
                self._swap(i, j)
                consumed.update((i, j))
                self.reroutes += 1
                self._emit(
                    f"Agent {agent.value} rerouted: yielded pos {i}->{j}",
                    LogCategory.ROUTE,
                )
                continue

            if neighbor.consider_swap(-intent.direction):
                self._swap(i, j)
                consumed.update((i, j))
            else:
                agent.notify_jam()
                self.jams += 1
                self._emit(
                    f"Agent {agent.value} jammed at pos {i} "
                    f"(refused by {neighbor.value})",
                    LogCategory.JAM,
                )

        snapshot = self.snapshot()
        self._publish(snapshot)
        return snapshot

    def run_until_sorted(self, max_ticks: int | None = None) -> Snapshot:
        """
        Step synchronously until the terminal tick fires.

        Args:
            max_ticks: Give up after this many step_once calls (None = no limit)

        Returns:
            The last emitted snapshot (sorted=False if max_ticks ran out)
        """
        snapshot = self.snapshot()
        calls = 0
        while not self.finished:
            if max_ticks is not None and calls >= max_ticks:
                logger.warning(
                    "gave up after %d ticks: step=%d jams=%d reroutes=%d",
                    calls, self.step, self.jams, self.reroutes,
                )
                break
            snapshot = self.step_once()
            calls += 1
        return snapshot

    def snapshot(self) -> Snapshot:
        return Snapshot(
            step=self.step,
            swaps=self.swaps,
            jams=self.jams,
            reroutes=self.reroutes,
            sorted=self.is_sorted,
            agents=tuple(AgentRecord.from_agent(a) for a in self.agents),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _finish(self) -> Snapshot:
        """Terminal tick: no counter changes, completion logged once."""
        for agent in self.agents:
            agent.state = AgentState.SATISFIED
        snapshot = self.snapshot()
        self._publish(snapshot)
        if not self.finished:
            self.finished = True
            self._emit("All agents reached their goals.", LogCategory.DONE)
        return snapshot

    def _swap(self, i: int, j: int) -> None:
        n = len(self.agents)
        if not (0 <= i < n and 0 <= j < n):
            raise IndexError(f"swap ({i}, {j}) out of bounds for {n} agents")
        if abs(i - j) != 1:
            raise ValueError(f"swap ({i}, {j}) is not between neighbours")

        a = self.agents[i]
        b = self.agents[j]
        self.agents[i] = b
        self.agents[j] = a
        a.notify_swap(j)
        b.notify_swap(i)
        self.swaps += 1

    def _check_permutation(self) -> None:
        n = len(self.agents)
        positions = sorted(a.pos for a in self.agents)
        goals = sorted(a.goal_index for a in self.agents)
        if positions != list(range(n)) or goals != list(range(n)):
            raise RuntimeError("positions and goals must each be a permutation of [0, n)")

    def _publish(self, snapshot: Snapshot) -> None:
        if self.on_tick is not None:
            self.on_tick(snapshot)

    def _emit(self, message: str, category: LogCategory) -> None:
        event = LogEvent(step=self.step, message=message, category=category)
        level = logging.DEBUG if category is LogCategory.JAM else logging.INFO
        logger.log(level, "%s", event)
        if self.on_log is not None:
            self.on_log(event)
