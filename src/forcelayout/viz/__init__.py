"""
Visualization utilities.

- Network drawing from snapshots (circles, weighted lines, labels)
- Hit testing of layout coordinates against rendered node circles
"""

from forcelayout.viz.network import (
    node_radius,
    link_width,
    find_node_at,
    plot_network,
    save_figure,
)

__all__ = [
    "node_radius",
    "link_width",
    "find_node_at",
    "plot_network",
    "save_figure",
]
