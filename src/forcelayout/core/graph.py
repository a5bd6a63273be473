"""
Graph model: the immutable input of a layout simulation.

A graph is a set of uniquely identified nodes plus weighted links between
them. Links are NOT checked against the node set here: a link whose source
or target is unknown is simply skipped when forces are applied. This keeps
partially loaded or late-arriving data usable.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator
import json


class InvalidGraph(ValueError):
    """Raised when a graph cannot be constructed from the given nodes."""


@dataclass(frozen=True)
class Node:
    """A labeled node. `weight` drives rendered size and repulsion strength."""

    id: str
    name: str
    weight: float = 0.0
    description: str = ""


@dataclass(frozen=True)
class Link:
    """A weighted, undirected-in-effect link between two node ids."""

    source_id: str
    target_id: str
    weight: float = 0.0


@dataclass(frozen=True)
class GraphModel:
    """
    Nodes and links as supplied by the caller.

    Node order is preserved and defines the order of every snapshot.

    Raises:
        InvalidGraph: If a node id is duplicated or a weight is negative.
    """

    nodes: tuple[Node, ...] = ()
    links: tuple[Link, ...] = ()
    _index: dict[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "links", tuple(self.links))

        index: dict[str, int] = {}
        for i, node in enumerate(self.nodes):
            if node.id in index:
                raise InvalidGraph(f"Duplicate node id: {node.id!r}")
            if node.weight < 0:
                raise InvalidGraph(f"Node {node.id!r} has negative weight {node.weight}")
            index[node.id] = i

        for link in self.links:
            if link.weight < 0:
                raise InvalidGraph(
                    f"Link {link.source_id!r}->{link.target_id!r} has negative weight {link.weight}"
                )

        object.__setattr__(self, "_index", index)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def node_index(self) -> dict[str, int]:
        """Mapping from node id to its position in `nodes`."""
        return dict(self._index)

    def index_of(self, node_id: str) -> int | None:
        """Ordinal of a node id, or None if the id is unknown."""
        return self._index.get(node_id)

    def get_node(self, node_id: str) -> Node | None:
        i = self._index.get(node_id)
        return None if i is None else self.nodes[i]

    def resolved_links(self) -> Iterator[tuple[int, int, float]]:
        """
        Yield (source_index, target_index, weight) for usable links.

        Links with an unknown endpoint are dropped silently.
        """
        for link in self.links:
            s = self._index.get(link.source_id)
            t = self._index.get(link.target_id)
            if s is None or t is None:
                continue
            yield s, t, link.weight


def build_graph(
    nodes: Iterable[Node],
    links: Iterable[Link] = (),
) -> GraphModel:
    """Convenience constructor accepting any iterables."""
    return GraphModel(nodes=tuple(nodes), links=tuple(links))


def graph_from_book_analysis(data: dict) -> GraphModel:
    """
    Build a graph from a book analysis payload.

    Each character becomes a node (id and name = character name, weight =
    mention count). Each character interaction becomes a link weighted by
    its interaction count.

    Args:
        data: Dict with "characters" and "interactions" lists

    Returns:
        GraphModel
    """
    nodes = []
    for character in data.get("characters") or []:
        mentions = character.get("mentions", 0)
        description = character.get("description")
        if description is None:
            description = f"Mentioned {mentions} times in the book."
        nodes.append(
            Node(
                id=character["name"],
                name=character["name"],
                weight=float(mentions),
                description=description,
            )
        )

    links = [
        Link(
            source_id=interaction["character1"],
            target_id=interaction["character2"],
            weight=float(interaction.get("interaction_count", 0)),
        )
        for interaction in data.get("interactions") or []
    ]

    return GraphModel(nodes=tuple(nodes), links=tuple(links))


def load_book_analysis(path: str | Path) -> GraphModel:
    """Read a book analysis JSON file and convert it to a graph."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return graph_from_book_analysis(data)
