"""
Simulation driver: tick scheduling, lifecycle and snapshot publishing.

Ownership model:
- The driver owns one mutable SimulationState (the working copy)
- Every mutation (tick, pin, unpin, reset) happens under a single lock
- After each mutation an immutable tuple of SimNode is built and published
  by plain reference assignment
- snapshot() returns the last published tuple without locking, so readers
  never observe a half-updated node

Lifecycle:
    IDLE --start()--> RUNNING --stop()--> STOPPED
    RUNNING --alpha reaches alpha_min--> IDLE

The background loop checks a stop event between ticks and never interrupts
a tick in progress.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional
import logging
import threading

import numpy as np

from forcelayout.core.forces import ForceConfig, step
from forcelayout.core.state import SimulationState, SimNode, PinState

if TYPE_CHECKING:
    from forcelayout.core.graph import GraphModel


logger = logging.getLogger(__name__)

Snapshot = tuple[SimNode, ...]


class SimulationStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass
class SimulationConfig:
    """Configuration for the simulation driver."""

    tick_interval: float = 0.016  # Seconds between ticks (~60 per second)
    seed: Optional[int] = None    # Seed for initial placement when no rng is given
    forces: ForceConfig = field(default_factory=ForceConfig)

    def validate(self) -> tuple[bool, Optional[str]]:
        if self.tick_interval < 0:
            return False, "tick_interval must be non-negative"
        ok, error = self.forces.validate()
        if not ok:
            return False, f"forces: {error}"
        return True, None


class Simulation:
    """
    A running (or runnable) layout of one graph in one viewport.

    Use `create()` rather than constructing directly.

    Args:
        graph: Graph to lay out
        width, height: Viewport size
        config: Driver and force configuration
        rng: Random source for initial placement (seeded from config if None)
        on_tick: Optional callback receiving each snapshot published by
                 the background loop
    """

    def __init__(
        self,
        graph: "GraphModel",
        width: float,
        height: float,
        config: SimulationConfig | None = None,
        rng: np.random.Generator | None = None,
        on_tick: Callable[[Snapshot], None] | None = None,
    ):
        self.config = config if config is not None else SimulationConfig()
        ok, error = self.config.validate()
        if not ok:
            raise ValueError(f"Invalid simulation config: {error}")

        if rng is None:
            rng = np.random.default_rng(self.config.seed)

        self.graph = graph
        self.on_tick = on_tick
        self._state = SimulationState(graph, width, height, rng)

        # Guards _state; held for every tick and every pin change
        self._lock = threading.Lock()
        # Serializes start/stop bookkeeping
        self._control_lock = threading.Lock()

        self._status = SimulationStatus.IDLE
        self._thread: threading.Thread | None = None
        self._stop_event: threading.Event | None = None

        self.current_tick = 0
        self._snapshot: Snapshot = self._state.to_snapshot()

        logger.debug(
            "Created simulation: %d nodes, %d links, viewport %gx%g",
            len(graph.nodes), len(self._state.link_sources), width, height,
        )

    # ═══════════════════════════════════════════════════════════════
    # READ ACCESS
    # ═══════════════════════════════════════════════════════════════

    def snapshot(self) -> Snapshot:
        """Latest published node states, in graph order."""
        return self._snapshot

    @property
    def alpha(self) -> float:
        return self._state.alpha

    @property
    def width(self) -> float:
        return self._state.width

    @property
    def height(self) -> float:
        return self._state.height

    @property
    def status(self) -> SimulationStatus:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._status is SimulationStatus.RUNNING

    @property
    def converged(self) -> bool:
        return self._state.alpha <= self.config.forces.alpha_min

    # ═══════════════════════════════════════════════════════════════
    # SYNCHRONOUS STEPPING
    # ═══════════════════════════════════════════════════════════════

    def tick(self) -> float:
        """Run one tick now, publish the result and return the new alpha."""
        with self._lock:
            alpha = step(self._state, self.config.forces)
            self.current_tick += 1
            self._snapshot = self._state.to_snapshot()
        return alpha

    def run(self, n_ticks: int) -> dict:
        """
        Run up to n_ticks synchronously, stopping early on convergence.

        Returns:
            Statistics dictionary
        """
        ran = 0
        for _ in range(n_ticks):
            if self.converged:
                break
            self.tick()
            ran += 1

        return {
            "n_ticks": ran,
            "tick": self.current_tick,
            "alpha": self.alpha,
            "converged": self.converged,
        }

    def run_until_converged(self, max_ticks: int = 100_000) -> dict:
        """Tick synchronously until alpha reaches its floor."""
        return self.run(max_ticks)

    # ═══════════════════════════════════════════════════════════════
    # BACKGROUND LOOP
    # ═══════════════════════════════════════════════════════════════

    def start(self):
        """
        Start ticking in the background.

        If a loop is already running it is cancelled and replaced, so there
        is never more than one. Does nothing beyond that if the layout has
        already converged.
        """
        with self._control_lock:
            previous = self._detach_loop()

            if self.converged:
                self._status = SimulationStatus.IDLE
                logger.info("Simulation already converged (alpha=%.4g), not starting", self.alpha)
            else:
                stop_event = threading.Event()
                thread = threading.Thread(
                    target=self._loop,
                    args=(stop_event,),
                    name="forcelayout-ticker",
                    daemon=True,
                )
                self._stop_event = stop_event
                self._thread = thread
                self._status = SimulationStatus.RUNNING
                thread.start()
                logger.info("Simulation started (alpha=%.4g)", self.alpha)

        self._join(previous)

    def stop(self):
        """Stop ticking, keeping all state. Safe to call repeatedly."""
        with self._control_lock:
            previous = self._detach_loop()
            if self._status is SimulationStatus.RUNNING:
                self._status = SimulationStatus.STOPPED
                logger.info("Simulation stopped at tick %d (alpha=%.4g)", self.current_tick, self.alpha)

        self._join(previous)

    def reset(self, restart: bool = True):
        """
        Re-randomize every node, clear all pins and re-arm alpha to 1.

        Args:
            restart: Start the background loop afterwards
        """
        self.stop()
        with self._lock:
            self._state.alpha = 1.0
            self._state.clear_pins()
            self._state.randomize_positions()
            self.current_tick = 0
            self._snapshot = self._state.to_snapshot()
        logger.info("Simulation reset")

        if restart:
            self.start()

    def close(self):
        """Stop the loop and wait for it to exit."""
        self.stop()

    def __enter__(self) -> "Simulation":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _detach_loop(self) -> threading.Thread | None:
        """Signal the current loop to exit. Caller holds _control_lock."""
        thread = self._thread
        if self._stop_event is not None:
            self._stop_event.set()
        self._thread = None
        self._stop_event = None
        return thread

    @staticmethod
    def _join(thread: threading.Thread | None):
        # The loop may stop itself from its own on_tick callback
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _loop(self, stop_event: threading.Event):
        interval = self.config.tick_interval
        try:
            while not stop_event.is_set():
                self.tick()

                if self.on_tick is not None:
                    self.on_tick(self._snapshot)

                if self.converged:
                    self._finish(stop_event)
                    return

                stop_event.wait(interval)
        except Exception:
            logger.exception("Simulation loop failed at tick %d", self.current_tick)
            with self._control_lock:
                if self._stop_event is stop_event:
                    self._thread = None
                    self._stop_event = None
                    self._status = SimulationStatus.STOPPED
            raise

    def _finish(self, stop_event: threading.Event):
        with self._control_lock:
            # A newer loop may have replaced this one in the meantime
            if self._stop_event is stop_event:
                self._thread = None
                self._stop_event = None
                self._status = SimulationStatus.IDLE
                logger.info("Simulation converged after %d ticks", self.current_tick)

    # ═══════════════════════════════════════════════════════════════
    # PIN ACCESS (used by InteractionController)
    # ═══════════════════════════════════════════════════════════════

    def get_pin(self, node_id: str) -> PinState | None:
        """Current pin variant of a node, or None if the id is unknown."""
        i = self.graph.index_of(node_id)
        if i is None:
            return None
        return self._snapshot[i].pin

    def update_pin(self, node_id: str, pin: PinState) -> bool:
        """
        Replace a node's pin variant and publish.

        Pinned moves the node to the pinned position and zeroes its
        velocity; Free leaves it where it is.

        Returns:
            False if the node id is unknown (nothing changes)
        """
        i = self.graph.index_of(node_id)
        if i is None:
            logger.debug("Ignoring pin change for unknown node %r", node_id)
            return False

        with self._lock:
            self._state.set_pin(i, pin)
            self._snapshot = self._state.to_snapshot()
        return True


def create(
    graph: "GraphModel",
    viewport_width: float,
    viewport_height: float,
    config: SimulationConfig | None = None,
    rng: np.random.Generator | None = None,
    on_tick: Callable[[Snapshot], None] | None = None,
) -> Simulation:
    """
    Create a simulation with randomized initial positions.

    Raises:
        InvalidViewport: If either viewport dimension is not positive.
    """
    return Simulation(
        graph,
        viewport_width,
        viewport_height,
        config=config,
        rng=rng,
        on_tick=on_tick,
    )
