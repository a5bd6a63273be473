"""
Pytest configuration and shared fixtures.
"""

import time

import matplotlib
matplotlib.use("Agg")

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def two_node_graph():
    """Nodes A and B (weight 10) joined by one link of weight 5."""
    from forcelayout.core import GraphModel, Node, Link
    return GraphModel(
        nodes=(Node("A", "Alice", 10), Node("B", "Bob", 10)),
        links=(Link("A", "B", 5),),
    )


@pytest.fixture
def small_graph():
    """A six-node graph: a triangle, a tail and an isolated node."""
    from forcelayout.core import GraphModel, Node, Link
    nodes = (
        Node("a", "Ann", 12),
        Node("b", "Ben", 4),
        Node("c", "Cat", 30),
        Node("d", "Dan", 0),
        Node("e", "Eve", 7),
        Node("f", "Fay", 1),
    )
    links = (
        Link("a", "b", 3),
        Link("b", "c", 1),
        Link("c", "a", 8),
        Link("c", "d", 2),
        Link("d", "e", 0),
    )
    return GraphModel(nodes=nodes, links=links)


@pytest.fixture
def ring_graph():
    """Factory for a ring of n equally weighted nodes."""
    from forcelayout.core import GraphModel, Node, Link

    def make(n: int):
        nodes = tuple(Node(f"n{i}", f"Node {i}", 5) for i in range(n))
        links = tuple(Link(f"n{i}", f"n{(i + 1) % n}", 2) for i in range(n))
        return GraphModel(nodes=nodes, links=links)

    return make


@pytest.fixture
def wait_for():
    """Poll a predicate until it holds or a timeout expires."""

    def wait(predicate, timeout: float = 5.0, interval: float = 0.005) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(interval)
        return predicate()

    return wait
