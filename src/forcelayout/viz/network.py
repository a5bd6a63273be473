"""
Rendering of layout snapshots.

Draws each link as a line whose width grows with link weight and each node
as a circle whose radius grows with node weight, labeled below with the
node name. Radii are in layout units so they scale with zoom.

Also provides the hit test used to turn pointer positions into node ids.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.collections import LineCollection, PatchCollection
from matplotlib.figure import Figure
from matplotlib.patches import Circle

if TYPE_CHECKING:
    from forcelayout.core.graph import GraphModel
    from forcelayout.core.state import SimNode


NODE_COLOR = "#1f3fbf"
SELECTED_COLOR = "#f2d43a"
PINNED_EDGE_COLOR = "#d62728"
LINK_COLOR = (0.5, 0.5, 0.5, 0.5)
BACKGROUND = "#fafafa"


def node_radius(weight: float) -> float:
    """Rendered radius: 20 plus half the weight, capped at 50."""
    return 20.0 + min(weight * 0.5, 30.0)


def link_width(weight: float) -> float:
    """Rendered line width: 2 plus a fifth of the weight, capped at 7."""
    return 2.0 + min(weight * 0.2, 5.0)


def find_node_at(
    snapshot: Sequence["SimNode"],
    point: tuple[float, float],
) -> str | None:
    """
    Id of the first node whose circle contains `point`, or None.

    `point` is in layout coordinates (undo any pan/zoom first).
    """
    px, py = point
    for sim_node in snapshot:
        r = node_radius(sim_node.weight)
        if (sim_node.x - px) ** 2 + (sim_node.y - py) ** 2 <= r * r:
            return sim_node.id
    return None


def plot_network(
    snapshot: Sequence["SimNode"],
    graph: "GraphModel",
    ax: Axes | None = None,
    title: str = "",
    figsize: tuple[float, float] = (8, 8),
    viewport: tuple[float, float] | None = None,
    selected: str | None = None,
    show_labels: bool = True,
) -> tuple[Figure, Axes]:
    """
    Draw one snapshot.

    Args:
        snapshot: Published node states
        graph: Graph the snapshot belongs to (for links)
        ax: Existing axes (creates new if None)
        title: Plot title
        viewport: Optional (width, height) to fix the axis limits
        selected: Node id to highlight
        show_labels: Draw node names

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ax.set_facecolor(BACKGROUND)

    # Links first so nodes are drawn on top
    index = graph.node_index
    segments = []
    widths = []
    for link in graph.links:
        s = index.get(link.source_id)
        t = index.get(link.target_id)
        if s is None or t is None:
            continue
        segments.append([snapshot[s].position, snapshot[t].position])
        widths.append(link_width(link.weight))
    if segments:
        ax.add_collection(
            LineCollection(segments, linewidths=widths, colors=[LINK_COLOR], zorder=1)
        )

    circles = []
    face_colors = []
    edge_colors = []
    for sim_node in snapshot:
        circles.append(Circle(sim_node.position, node_radius(sim_node.weight)))
        face_colors.append(SELECTED_COLOR if sim_node.id == selected else NODE_COLOR)
        edge_colors.append(PINNED_EDGE_COLOR if sim_node.is_pinned else NODE_COLOR)
    if circles:
        ax.add_collection(
            PatchCollection(
                circles,
                facecolors=face_colors,
                edgecolors=edge_colors,
                linewidths=2.0,
                zorder=2,
            )
        )

    if show_labels:
        for sim_node in snapshot:
            ax.text(
                sim_node.x,
                sim_node.y + node_radius(sim_node.weight) + 10.0,
                sim_node.name,
                ha="center",
                va="top",
                fontsize=9,
                fontweight="bold",
                zorder=3,
            )

    if viewport is not None:
        width, height = viewport
        ax.set_xlim(0, width)
        ax.set_ylim(0, height)
    elif snapshot:
        pos = np.array([n.position for n in snapshot])
        pad = 60.0
        ax.set_xlim(pos[:, 0].min() - pad, pos[:, 0].max() + pad)
        ax.set_ylim(pos[:, 1].min() - pad, pos[:, 1].max() + pad)

    # Screen coordinates: y grows downward
    ax.invert_yaxis()
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])
    if title:
        ax.set_title(title)

    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
