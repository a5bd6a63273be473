"""
Interaction controller: pointer gestures mapped onto pins.

The controller never runs forces. It only changes the pin variant of single
nodes through Simulation.update_pin, which takes the same lock as a tick.
Hit testing (which node is under the pointer) belongs to the rendering
layer; see forcelayout.viz.network.find_node_at.

Unknown node ids are ignored everywhere: the node set a gesture refers to
may be stale by the time the call arrives.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging

from forcelayout.core.state import FREE, Pinned, PinState

if TYPE_CHECKING:
    from forcelayout.core.simulation import Simulation


logger = logging.getLogger(__name__)


class InteractionController:
    """Pin, unpin and drag nodes of one simulation."""

    def __init__(self, simulation: "Simulation"):
        self.simulation = simulation

        # Active drag: node id and the pin it had before the drag began
        self.dragged_node_id: str | None = None
        self._pin_before_drag: PinState | None = None

    def pin(self, node_id: str, position: tuple[float, float]):
        """Hold a node at `position`, moving it there immediately."""
        x, y = position
        self.simulation.update_pin(node_id, Pinned(float(x), float(y)))

    def unpin(self, node_id: str):
        """Release a pinned node where it currently stands."""
        current = self.simulation.get_pin(node_id)
        if not isinstance(current, Pinned):
            return
        self.simulation.update_pin(node_id, FREE)

    def is_pinned(self, node_id: str) -> bool:
        return isinstance(self.simulation.get_pin(node_id), Pinned)

    # Drag gestures

    def begin_drag(self, node_id: str) -> bool:
        """
        Grab a node at its current position.

        Returns:
            False if the id is unknown (no drag starts)
        """
        previous = self.simulation.get_pin(node_id)
        if previous is None:
            logger.debug("Ignoring drag of unknown node %r", node_id)
            return False

        if self.dragged_node_id is not None:
            self.end_drag()

        self.dragged_node_id = node_id
        self._pin_before_drag = previous

        i = self.simulation.graph.index_of(node_id)
        self.pin(node_id, self.simulation.snapshot()[i].position)
        return True

    def drag_to(self, position: tuple[float, float]):
        """Move the grabbed node. Ignored when nothing is grabbed."""
        if self.dragged_node_id is None:
            return
        self.pin(self.dragged_node_id, position)

    def end_drag(self):
        """
        Drop the grabbed node.

        A node that was free before the drag becomes free again. A node that
        was already pinned stays pinned where it was dropped.
        """
        node_id = self.dragged_node_id
        if node_id is None:
            return

        if not isinstance(self._pin_before_drag, Pinned):
            self.unpin(node_id)

        self.dragged_node_id = None
        self._pin_before_drag = None
