"""
Simulation state: per-node position, velocity and pin.

The state stores ONLY what the force accumulator reads and writes:
- positions [n, 2]
- velocities [n, 2] (this tick's accumulated displacement)
- one pin variant per node: Free or Pinned(x, y)
- the cooling term alpha

Readers never touch these arrays directly. They receive immutable SimNode
tuples built by `to_snapshot()`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

import numpy as np

if TYPE_CHECKING:
    from forcelayout.core.graph import GraphModel, Node


# Initial positions are sampled from this fraction of each viewport axis
INITIAL_SPREAD = (0.3, 0.7)


class InvalidViewport(ValueError):
    """Raised when a simulation is created with a non-positive viewport."""


@dataclass(frozen=True)
class Free:
    """Node moves under the simulated forces."""


@dataclass(frozen=True)
class Pinned:
    """Node is held at (x, y) by the caller."""

    x: float
    y: float

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y


PinState = Union[Free, Pinned]

FREE = Free()


@dataclass(frozen=True)
class SimNode:
    """Published, read-only view of one node at the end of a tick."""

    node: "Node"
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    pin: PinState = FREE

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def weight(self) -> float:
        return self.node.weight

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    @property
    def velocity(self) -> tuple[float, float]:
        return self.vx, self.vy

    @property
    def is_pinned(self) -> bool:
        return isinstance(self.pin, Pinned)


class SimulationState:
    """
    Mutable working copy owned by the simulation driver.

    Args:
        graph: The graph being laid out
        width, height: Viewport extent used for initial placement and centering
        rng: Random source for initial placement

    Raises:
        InvalidViewport: If width or height is not positive.
    """

    def __init__(
        self,
        graph: "GraphModel",
        width: float,
        height: float,
        rng: np.random.Generator,
    ):
        if width <= 0 or height <= 0:
            raise InvalidViewport(f"Viewport must be positive, got {width}x{height}")

        self.graph = graph
        self.width = float(width)
        self.height = float(height)
        self.rng = rng

        n = len(graph.nodes)
        self.positions = np.zeros((n, 2), dtype=np.float64)
        self.velocities = np.zeros((n, 2), dtype=np.float64)
        # Displacement applied by the last integration, reported in snapshots
        self.last_velocities = np.zeros((n, 2), dtype=np.float64)
        self.pins: list[PinState] = [FREE] * n
        self.alpha = 1.0

        # Per-node attributes the forces need, resolved once
        self.weights = np.array([node.weight for node in graph.nodes], dtype=np.float64)
        links = list(graph.resolved_links())
        self.link_sources = np.array([s for s, _, _ in links], dtype=np.intp)
        self.link_targets = np.array([t for _, t, _ in links], dtype=np.intp)
        self.link_weights = np.array([w for _, _, w in links], dtype=np.float64)

        self.randomize_positions()

    @property
    def n_nodes(self) -> int:
        return len(self.pins)

    @property
    def center(self) -> np.ndarray:
        """Viewport center (x, y)."""
        return np.array([self.width / 2.0, self.height / 2.0])

    @property
    def pinned_mask(self) -> np.ndarray:
        """[n] bool array, True where the node is pinned."""
        return np.array([isinstance(p, Pinned) for p in self.pins], dtype=bool)

    def randomize_positions(self):
        """Place every node uniformly in the central band of the viewport."""
        lo, hi = INITIAL_SPREAD
        n = self.n_nodes
        extent = np.array([self.width, self.height])
        self.positions = self.rng.uniform(lo, hi, size=(n, 2)) * extent
        self.velocities.fill(0.0)
        self.last_velocities.fill(0.0)

    def clear_pins(self):
        self.pins = [FREE] * self.n_nodes

    def set_pin(self, index: int, pin: PinState):
        """Apply a pin variant; pinning also moves the node and zeroes velocity."""
        self.pins[index] = pin
        if isinstance(pin, Pinned):
            self.positions[index] = pin.position
            self.velocities[index] = 0.0
            self.last_velocities[index] = 0.0

    def to_snapshot(self) -> tuple[SimNode, ...]:
        """Build an immutable view of every node, in graph order."""
        nodes = self.graph.nodes
        pos = self.positions
        vel = self.last_velocities
        return tuple(
            SimNode(
                node=nodes[i],
                x=float(pos[i, 0]),
                y=float(pos[i, 1]),
                vx=float(vel[i, 0]),
                vy=float(vel[i, 1]),
                pin=self.pins[i],
            )
            for i in range(self.n_nodes)
        )
