"""
Analysis layer: derived quantities for inspecting layouts.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- positions_array: snapshot -> [n, 2] array
- link_lengths / min_separation: geometric measurements
- compute_layout_metrics: one-call summary of a snapshot
"""

from forcelayout.analysis.metrics import (
    LayoutMetrics,
    positions_array,
    link_lengths,
    min_separation,
    compute_layout_metrics,
)

__all__ = [
    "LayoutMetrics",
    "positions_array",
    "link_lengths",
    "min_separation",
    "compute_layout_metrics",
]
