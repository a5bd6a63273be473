"""Unit tests for the graph model."""

import json

import pytest

from forcelayout.core.graph import (
    GraphModel,
    InvalidGraph,
    Link,
    Node,
    build_graph,
    graph_from_book_analysis,
    load_book_analysis,
)


class TestGraphModel:
    """Tests for GraphModel construction."""

    def test_creation(self, two_node_graph):
        assert len(two_node_graph) == 2
        assert [n.id for n in two_node_graph.nodes] == ["A", "B"]
        assert two_node_graph.links[0].weight == 5

    def test_empty_graph(self):
        graph = GraphModel()
        assert len(graph) == 0
        assert list(graph.resolved_links()) == []

    def test_duplicate_id_rejected(self):
        with pytest.raises(InvalidGraph, match="Duplicate node id"):
            GraphModel(nodes=(Node("x", "One"), Node("x", "Two")))

    def test_invalid_graph_is_value_error(self):
        with pytest.raises(ValueError):
            GraphModel(nodes=(Node("x", "One"), Node("x", "One")))

    def test_duplicate_names_allowed(self):
        graph = GraphModel(nodes=(Node("1", "Smith"), Node("2", "Smith")))
        assert len(graph) == 2

    def test_negative_node_weight_rejected(self):
        with pytest.raises(InvalidGraph):
            GraphModel(nodes=(Node("x", "X", weight=-1),))

    def test_negative_link_weight_rejected(self):
        with pytest.raises(InvalidGraph):
            GraphModel(
                nodes=(Node("x", "X"), Node("y", "Y")),
                links=(Link("x", "y", weight=-2),),
            )

    def test_dangling_link_accepted(self):
        graph = GraphModel(
            nodes=(Node("x", "X"),),
            links=(Link("x", "ghost", 3),),
        )
        assert len(graph.links) == 1

    def test_lists_are_frozen_to_tuples(self):
        graph = GraphModel(nodes=[Node("x", "X")], links=[])
        assert isinstance(graph.nodes, tuple)
        assert isinstance(graph.links, tuple)

    def test_build_graph_from_generators(self):
        graph = build_graph((Node(str(i), f"N{i}") for i in range(3)))
        assert len(graph) == 3


class TestLookup:
    """Tests for id lookup and link resolution."""

    def test_node_index(self, small_graph):
        index = small_graph.node_index
        assert index["a"] == 0
        assert index["f"] == 5

    def test_node_index_is_a_copy(self, small_graph):
        small_graph.node_index["zzz"] = 99
        assert small_graph.index_of("zzz") is None

    def test_get_node(self, small_graph):
        assert small_graph.get_node("c").name == "Cat"
        assert small_graph.get_node("missing") is None

    def test_resolved_links(self, small_graph):
        resolved = list(small_graph.resolved_links())
        assert resolved[0] == (0, 1, 3)
        assert len(resolved) == 5

    def test_resolved_links_skip_unknown_endpoints(self):
        graph = GraphModel(
            nodes=(Node("x", "X"), Node("y", "Y")),
            links=(Link("x", "y", 1), Link("x", "ghost", 2), Link("ghost", "y", 3)),
        )
        assert list(graph.resolved_links()) == [(0, 1, 1)]


class TestBookAnalysis:
    """Tests for conversion of book analysis payloads."""

    PAYLOAD = {
        "book_id": 7,
        "status": "complete",
        "title": "Test Book",
        "characters": [
            {"name": "Holmes", "mentions": 120, "description": "Consulting detective"},
            {"name": "Watson", "mentions": 80},
        ],
        "interactions": [
            {"character1": "Holmes", "character2": "Watson", "interaction_count": 45},
        ],
    }

    def test_characters_become_nodes(self):
        graph = graph_from_book_analysis(self.PAYLOAD)
        holmes = graph.get_node("Holmes")
        assert holmes.name == "Holmes"
        assert holmes.weight == 120
        assert holmes.description == "Consulting detective"

    def test_default_description(self):
        graph = graph_from_book_analysis(self.PAYLOAD)
        assert graph.get_node("Watson").description == "Mentioned 80 times in the book."

    def test_interactions_become_links(self):
        graph = graph_from_book_analysis(self.PAYLOAD)
        link = graph.links[0]
        assert (link.source_id, link.target_id, link.weight) == ("Holmes", "Watson", 45)

    def test_missing_sections(self):
        graph = graph_from_book_analysis({"book_id": 1, "status": "pending"})
        assert len(graph) == 0
        assert graph.links == ()

    def test_duplicate_character_rejected(self):
        payload = {"characters": [{"name": "A", "mentions": 1}, {"name": "A", "mentions": 2}]}
        with pytest.raises(InvalidGraph):
            graph_from_book_analysis(payload)

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "book.json"
        path.write_text(json.dumps(self.PAYLOAD), encoding="utf-8")

        graph = load_book_analysis(path)
        assert [n.id for n in graph.nodes] == ["Holmes", "Watson"]
