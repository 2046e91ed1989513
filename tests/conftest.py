"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


class FixedRandom:
    """Stand-in for a numpy Generator that replays fixed draws."""

    def __init__(self, *draws: float):
        self.draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        draw = self.draws[self.calls % len(self.draws)]
        self.calls += 1
        return draw


@pytest.fixture
def fixed_random():
    """Factory for FixedRandom draw sources."""
    return FixedRandom


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def small_config():
    """Five agents in a known order, fully cooperative."""
    from agentsort.core import SortEngineConfig
    return SortEngineConfig(
        values=[3, 1, 5, 2, 4],
        shuffle=False,
        stubbornness=0.0,
        seed=7,
    )


@pytest.fixture
def reversed_config():
    """Thirty agents in descending order, very stubborn (slow to sort)."""
    from agentsort.core import SortEngineConfig
    return SortEngineConfig(
        values=list(range(30, 0, -1)),
        shuffle=False,
        stubbornness=0.9,
        tick_rate=1000.0,
        seed=3,
    )
