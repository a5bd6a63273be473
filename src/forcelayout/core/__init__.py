"""
Core layout engine.

This layer knows NOTHING about rendering or where the graph came from.
It only knows:
- Nodes and weighted links (the graph model)
- Per-node position, velocity and pin (the simulation state)
- Link, charge and center forces plus cooling (the force accumulator)
- Tick scheduling and snapshot publishing (the driver)
- Pin / unpin / drag (the interaction controller)
"""

from forcelayout.core.graph import (
    Node,
    Link,
    GraphModel,
    InvalidGraph,
    build_graph,
    graph_from_book_analysis,
    load_book_analysis,
)
from forcelayout.core.state import (
    Free,
    Pinned,
    SimNode,
    SimulationState,
    InvalidViewport,
)
from forcelayout.core.forces import ForceConfig, step
from forcelayout.core.simulation import (
    Simulation,
    SimulationConfig,
    SimulationStatus,
    create,
)
from forcelayout.core.interaction import InteractionController

__all__ = [
    "Node",
    "Link",
    "GraphModel",
    "InvalidGraph",
    "build_graph",
    "graph_from_book_analysis",
    "load_book_analysis",
    "Free",
    "Pinned",
    "SimNode",
    "SimulationState",
    "InvalidViewport",
    "ForceConfig",
    "step",
    "Simulation",
    "SimulationConfig",
    "SimulationStatus",
    "create",
    "InteractionController",
]
