#!/usr/bin/env python3
"""
Demo: Layout Convergence

Lays out a small character network headlessly:
1. Build the graph from a book analysis payload
2. Tick synchronously until alpha reaches its floor
3. Track alpha and link-length error per tick
4. Plot the cooling curve and the final layout

Shows that cooling, not kinetic energy, ends the simulation.
"""

import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path

from forcelayout.core import create, graph_from_book_analysis
from forcelayout.analysis import compute_layout_metrics
from forcelayout.logging_config import setup_logging
from forcelayout.viz import plot_network, save_figure


BOOK = {
    "book_id": 1342,
    "status": "complete",
    "title": "Pride and Prejudice",
    "author": "Jane Austen",
    "characters": [
        {"name": "Elizabeth", "mentions": 60},
        {"name": "Darcy", "mentions": 45},
        {"name": "Jane", "mentions": 30},
        {"name": "Bingley", "mentions": 28},
        {"name": "Mrs. Bennet", "mentions": 22},
        {"name": "Mr. Bennet", "mentions": 18},
        {"name": "Wickham", "mentions": 16},
        {"name": "Lydia", "mentions": 14},
        {"name": "Collins", "mentions": 12},
        {"name": "Charlotte", "mentions": 8},
        {"name": "Lady Catherine", "mentions": 8},
    ],
    "interactions": [
        {"character1": "Elizabeth", "character2": "Darcy", "interaction_count": 40},
        {"character1": "Elizabeth", "character2": "Jane", "interaction_count": 25},
        {"character1": "Jane", "character2": "Bingley", "interaction_count": 20},
        {"character1": "Darcy", "character2": "Bingley", "interaction_count": 12},
        {"character1": "Elizabeth", "character2": "Mr. Bennet", "interaction_count": 10},
        {"character1": "Mrs. Bennet", "character2": "Mr. Bennet", "interaction_count": 9},
        {"character1": "Elizabeth", "character2": "Wickham", "interaction_count": 8},
        {"character1": "Lydia", "character2": "Wickham", "interaction_count": 8},
        {"character1": "Collins", "character2": "Charlotte", "interaction_count": 6},
        {"character1": "Elizabeth", "character2": "Collins", "interaction_count": 5},
        {"character1": "Lady Catherine", "character2": "Darcy", "interaction_count": 4},
        {"character1": "Lady Catherine", "character2": "Collins", "interaction_count": 4},
        {"character1": "Mrs. Bennet", "character2": "Lydia", "interaction_count": 3},
    ],
}


def main():
    setup_logging("INFO", log_file=Path(__file__).parent / "output" / "convergence.log")

    print("=" * 60)
    print("  FORCE LAYOUT CONVERGENCE")
    print("=" * 60)

    width, height = 1000.0, 1000.0
    graph = graph_from_book_analysis(BOOK)
    sim = create(graph, width, height, rng=np.random.default_rng(42))

    print(f"\n1. Setup:")
    print(f"   Nodes: {len(graph.nodes)}, links: {len(graph.links)}")
    print(f"   Viewport: {width:.0f}x{height:.0f}")
    print(f"   Cooling horizon: {sim.config.forces.cooling_ticks} ticks")

    print("\n2. Ticking until converged...")
    alphas = [sim.alpha]
    rmse = [compute_layout_metrics(sim.snapshot(), graph).link_length_rmse]
    while not sim.converged:
        sim.tick()
        alphas.append(sim.alpha)
        rmse.append(compute_layout_metrics(sim.snapshot(), graph).link_length_rmse)
    print(f"   Converged after {sim.current_tick} ticks (alpha={sim.alpha:.4g})")

    metrics = compute_layout_metrics(sim.snapshot(), graph)
    print("\n3. Final layout:")
    print(f"   Mean link length: {metrics.mean_link_length:.1f}")
    print(f"   Min separation:   {metrics.min_separation:.1f}")
    print(f"   Centroid:         ({metrics.centroid[0]:.1f}, {metrics.centroid[1]:.1f})")

    print("\n4. Creating visualization...")
    fig, axes = plt.subplots(1, 2, figsize=(16, 7))

    ax = axes[0]
    ax.semilogy(alphas, label="alpha")
    ax.axhline(sim.config.forces.alpha_min, color="gray", linestyle="--", label="alpha_min")
    ax2 = ax.twinx()
    ax2.plot(rmse, color="tab:orange", label="link length RMSE")
    ax.set_xlabel("tick")
    ax.set_ylabel("alpha")
    ax2.set_ylabel("RMS deviation from rest length")
    ax.set_title("Cooling")
    ax.legend(loc="upper right")

    plot_network(
        sim.snapshot(), graph, ax=axes[1],
        title=f"{BOOK['title']} ({sim.current_tick} ticks)",
    )

    out_dir = Path(__file__).parent / "output"
    out_dir.mkdir(exist_ok=True)
    save_figure(fig, out_dir / "convergence.png")
    print(f"   Saved {out_dir / 'convergence.png'}")


if __name__ == "__main__":
    main()
