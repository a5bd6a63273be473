"""
Force accumulator: one tick of the layout.

Each tick applies, in order:
1. Link force    - springs with a rest length, scaled by link weight
2. Charge force  - all-pairs repulsion, scaled by node weight
3. Center force  - weak pull toward the viewport center
4. Integration   - damp, move free nodes, reset velocities
5. Cooling       - alpha decays toward its floor

Forces only ADD to `state.velocities`; positions are read but not written
until integration, so stages 1-3 see the same positions.

"Velocity" here is really this tick's net displacement: it is rebuilt from
scratch every tick, no momentum carries over.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    from forcelayout.core.state import SimulationState


# Distance clamps keeping directions and magnitudes finite
MIN_LINK_DISTANCE = 0.1
MIN_CHARGE_DISTANCE = 1.0

# Weight coupling of link and charge strength
LINK_WEIGHT_SCALE = 0.1
CHARGE_WEIGHT_SCALE = 0.01


@dataclass
class ForceConfig:
    """Tunable constants of the force model."""

    link_distance: float = 100.0   # Rest length of every link
    link_strength: float = 0.7     # Base spring strength
    charge_strength: float = -500.0  # Negative = repulsive; magnitude is used
    center_strength: float = 0.1
    velocity_decay: float = 0.9    # Damping applied once per tick

    # Cooling
    alpha_min: float = 0.001       # Simulation stops once alpha reaches this
    alpha_target: float = 0.0      # Value alpha decays toward
    cooling_ticks: int = 300       # Ticks for alpha to fall from 1 to alpha_min

    @property
    def alpha_decay(self) -> float:
        """
        Per-tick cooling rate.

        Chosen so that alpha_min is reached after `cooling_ticks` ticks:
            (1 - alpha_decay) ** cooling_ticks == alpha_min
        """
        return 1.0 - self.alpha_min ** (1.0 / self.cooling_ticks)

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.link_distance <= 0:
            return False, "link_distance must be positive"
        if self.link_strength < 0:
            return False, "link_strength must be non-negative"
        if self.center_strength < 0:
            return False, "center_strength must be non-negative"
        if not 0 < self.velocity_decay <= 1:
            return False, "velocity_decay must be in (0, 1]"
        if not 0 < self.alpha_min < 1:
            return False, "alpha_min must be in (0, 1)"
        if not 0 <= self.alpha_target < self.alpha_min:
            return False, "alpha_target must be in [0, alpha_min)"
        if self.cooling_ticks < 1:
            return False, "cooling_ticks must be >= 1"
        return True, None


def apply_link_force(state: "SimulationState", config: ForceConfig, alpha: float):
    """
    Spring force along every resolvable link.

    Links longer than the rest length pull their endpoints together,
    shorter ones push them apart. The source receives exactly the negated
    delta of the target.
    """
    src = state.link_sources
    tgt = state.link_targets
    if len(src) == 0:
        return

    pos = state.positions
    delta = pos[tgt] - pos[src]
    dist = np.sqrt(np.sum(delta ** 2, axis=1))
    dist = np.maximum(dist, MIN_LINK_DISTANCE)

    strength = config.link_strength * (1.0 + state.link_weights * LINK_WEIGHT_SCALE)
    factor = strength * alpha * (config.link_distance - dist) / dist
    force = delta * factor[:, np.newaxis]

    # np.add.at accumulates repeated indices (nodes with several links)
    np.add.at(state.velocities, src, -force)
    np.add.at(state.velocities, tgt, force)


def node_charges(weights: np.ndarray, config: ForceConfig) -> np.ndarray:
    """Per-node repulsion strength: |charge| * (1 + weight * 0.01)."""
    return abs(config.charge_strength) * (1.0 + weights * CHARGE_WEIGHT_SCALE)


def apply_charge_force(state: "SimulationState", config: ForceConfig, alpha: float):
    """
    All-pairs repulsion, O(n^2).

    Pair (i, j) is pushed apart with magnitude alpha * s_i * s_j / d^2
    along the line joining them. Graphs are expected to stay in the tens to
    low hundreds of nodes.
    """
    n = state.n_nodes
    if n < 2:
        return

    pos = state.positions
    # delta[i, j] = pos[j] - pos[i]
    delta = pos[np.newaxis, :, :] - pos[:, np.newaxis, :]
    dist = np.sqrt(np.sum(delta ** 2, axis=2))
    dist = np.maximum(dist, MIN_CHARGE_DISTANCE)

    charges = node_charges(state.weights, config)
    factor = alpha * np.outer(charges, charges) / dist ** 2
    np.fill_diagonal(factor, 0.0)

    # force[i, j] is what j receives from the pair; i receives its negation
    force = delta * (factor / dist)[:, :, np.newaxis]
    state.velocities -= force.sum(axis=1)


def apply_center_force(state: "SimulationState", config: ForceConfig, alpha: float):
    """Pull every node toward the viewport center, proportional to displacement."""
    if state.n_nodes == 0:
        return
    offset = state.center[np.newaxis, :] - state.positions
    state.velocities += offset * config.center_strength * alpha


def integrate(state: "SimulationState", config: ForceConfig):
    """
    Move free nodes by their damped velocity, then clear velocities.

    Pinned nodes keep their pinned position and report zero velocity.
    """
    pinned = state.pinned_mask
    state.velocities *= config.velocity_decay
    state.velocities[pinned] = 0.0

    state.positions += state.velocities

    state.last_velocities = state.velocities.copy()
    state.velocities.fill(0.0)


def cool(alpha: float, config: ForceConfig) -> float:
    """
    One cooling step: exponential approach toward alpha_target.

    The result never drops below alpha_min and never exceeds the input.

    Approaching alpha_min itself (rate 1 - 0.9 ** (1/300)) would need
    tens of thousands of ticks and never reach it, so the decay aims below
    the floor and clamps there, landing on alpha_min after cooling_ticks.
    """
    alpha = alpha + (config.alpha_target - alpha) * config.alpha_decay
    return max(alpha, config.alpha_min)


def step(state: "SimulationState", config: ForceConfig) -> float:
    """
    Run one full tick on `state` and return the new alpha.

    The caller is responsible for holding whatever lock guards `state`.
    """
    alpha = state.alpha
    apply_link_force(state, config, alpha)
    apply_charge_force(state, config, alpha)
    apply_center_force(state, config, alpha)
    integrate(state, config)
    state.alpha = cool(alpha, config)
    return state.alpha
