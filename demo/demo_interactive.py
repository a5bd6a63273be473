#!/usr/bin/env python3
"""
Demo: Interactive Layout

Runs the simulation on its background thread while matplotlib redraws the
latest snapshot every frame:
- Drag a node with the left mouse button (it is pinned while held)
- Press 'r' to reset the layout
- Press 'space' to stop / restart ticking

The renderer only ever reads published snapshots.
"""

import logging

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from forcelayout.core import (
    create, graph_from_book_analysis, InteractionController, SimulationConfig, ForceConfig
)
from forcelayout.logging_config import setup_logging
from forcelayout.viz import find_node_at, plot_network

from demo_convergence import BOOK


def main():
    setup_logging(logging.INFO)

    width, height = 1000.0, 1000.0
    graph = graph_from_book_analysis(BOOK)

    # Longer cooling so there is time to play with it
    config = SimulationConfig(forces=ForceConfig(cooling_ticks=1200))
    sim = create(graph, width, height, config=config, rng=np.random.default_rng(7))
    controller = InteractionController(sim)

    fig, ax = plt.subplots(figsize=(9, 9))

    def on_press(event):
        if event.inaxes is not ax or event.button != 1 or event.xdata is None:
            return
        node_id = find_node_at(sim.snapshot(), (event.xdata, event.ydata))
        if node_id is not None:
            controller.begin_drag(node_id)

    def on_motion(event):
        if event.inaxes is not ax or event.xdata is None:
            return
        controller.drag_to((event.xdata, event.ydata))

    def on_release(event):
        controller.end_drag()

    def on_key(event):
        if event.key == "r":
            sim.reset()
        elif event.key == " ":
            if sim.is_running:
                sim.stop()
            else:
                sim.start()

    def draw(_frame):
        ax.clear()
        plot_network(
            sim.snapshot(), graph, ax=ax,
            viewport=(width, height),
            selected=controller.dragged_node_id,
            title=f"tick {sim.current_tick}  alpha {sim.alpha:.3f}  [{sim.status.value}]",
        )

    fig.canvas.mpl_connect("button_press_event", on_press)
    fig.canvas.mpl_connect("motion_notify_event", on_motion)
    fig.canvas.mpl_connect("button_release_event", on_release)
    fig.canvas.mpl_connect("key_press_event", on_key)

    animation = FuncAnimation(fig, draw, interval=33, cache_frame_data=False)

    with sim:
        sim.start()
        plt.show()

    del animation


if __name__ == "__main__":
    main()
