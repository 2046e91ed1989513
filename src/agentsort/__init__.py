"""
agentsort: an array that sorts itself through autonomous agents

Each array slot is an agent with a private goal (its sorted index) and
perception limited to its two neighbours. No agent sees the array, and
no top-down algorithm runs.

Core concepts:
- Agents propose swaps toward their goal
- Neighbours accept or refuse (stubbornness)
- Refusals are jams; jams cause back-off
- Too many jams trigger a reroute: a forced swap AWAY from the goal
- Sortedness emerges from local negotiation alone

See SPEC_FULL.md and DESIGN.md for full details.
"""

__version__ = "0.1.0"
