"""
Layout quality metrics computed from a published snapshot.

Used to judge whether a layout has settled and how legible it is:
- link lengths vs the rest length
- closest pair of nodes (overlap risk)
- spread around the viewport center
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np
from scipy.spatial.distance import pdist

if TYPE_CHECKING:
    from forcelayout.core.graph import GraphModel
    from forcelayout.core.state import SimNode


@dataclass
class LayoutMetrics:
    """Summary of one snapshot."""

    n_nodes: int
    n_links: int
    mean_link_length: float
    link_length_rmse: float   # RMS deviation from the rest length
    min_separation: float
    centroid: tuple[float, float]
    bounding_box: tuple[float, float, float, float]  # (xmin, ymin, xmax, ymax)
    max_displacement: float   # Largest per-node move in the last tick


def positions_array(snapshot: Sequence["SimNode"]) -> np.ndarray:
    """Node positions as an [n, 2] array, in snapshot order."""
    if not snapshot:
        return np.zeros((0, 2), dtype=np.float64)
    return np.array([n.position for n in snapshot], dtype=np.float64)


def link_lengths(snapshot: Sequence["SimNode"], graph: "GraphModel") -> np.ndarray:
    """Euclidean length of every resolvable link."""
    pos = positions_array(snapshot)
    pairs = [(s, t) for s, t, _ in graph.resolved_links()]
    if not pairs:
        return np.zeros(0, dtype=np.float64)
    idx = np.array(pairs, dtype=np.intp)
    return np.linalg.norm(pos[idx[:, 1]] - pos[idx[:, 0]], axis=1)


def min_separation(snapshot: Sequence["SimNode"]) -> float:
    """Smallest distance between any two nodes (inf for fewer than two)."""
    pos = positions_array(snapshot)
    if len(pos) < 2:
        return float("inf")
    return float(pdist(pos).min())


def compute_layout_metrics(
    snapshot: Sequence["SimNode"],
    graph: "GraphModel",
    rest_length: float = 100.0,
) -> LayoutMetrics:
    """
    Compute summary metrics for a snapshot.

    Args:
        snapshot: Published node states
        graph: Graph the snapshot belongs to
        rest_length: Link rest length to measure deviation against

    Returns:
        LayoutMetrics
    """
    pos = positions_array(snapshot)
    lengths = link_lengths(snapshot, graph)

    if len(lengths) > 0:
        mean_length = float(lengths.mean())
        rmse = float(np.sqrt(np.mean((lengths - rest_length) ** 2)))
    else:
        mean_length = 0.0
        rmse = 0.0

    if len(pos) > 0:
        centroid = (float(pos[:, 0].mean()), float(pos[:, 1].mean()))
        bbox = (
            float(pos[:, 0].min()), float(pos[:, 1].min()),
            float(pos[:, 0].max()), float(pos[:, 1].max()),
        )
        velocities = np.array([n.velocity for n in snapshot], dtype=np.float64)
        max_disp = float(np.linalg.norm(velocities, axis=1).max())
    else:
        centroid = (0.0, 0.0)
        bbox = (0.0, 0.0, 0.0, 0.0)
        max_disp = 0.0

    return LayoutMetrics(
        n_nodes=len(pos),
        n_links=len(lengths),
        mean_link_length=mean_length,
        link_length_rmse=rmse,
        min_separation=min_separation(snapshot),
        centroid=centroid,
        bounding_box=bbox,
        max_displacement=max_disp,
    )
