# tests/unit/louvain/test_unit_aggregation.py — v1
"""Tests for louvain/aggregation.py — graph coarsening and label composition."""

from __future__ import annotations

import pytest

from louvainkit.graph.adapter import NodeNotFoundError
from louvainkit.graph.working_graph import WorkingGraph
from louvainkit.louvain.aggregation import aggregate, renumber_communities


@pytest.fixture
def settled() -> WorkingGraph:
    """Two triangles with communities already settled to 4 and 1."""
    graph = WorkingGraph.build(
        range(6),
        [
            (0, 1, 1.0), (1, 2, 1.0), (0, 2, 1.0),
            (3, 4, 1.0), (4, 5, 1.0), (3, 5, 1.0),
            (2, 3, 0.1), (5, 5, 0.5),
        ],
    )
    for node in (0, 1, 2):
        graph.set_community(node, 4)
    for node in (3, 4, 5):
        graph.set_community(node, 1)
    return graph


class TestRenumber:
    def test_order_of_discovery(self, settled):
        assert renumber_communities(settled) == {4: 0, 1: 1}

    def test_singletons_identity(self):
        graph = WorkingGraph.build(range(3), [])
        assert renumber_communities(graph) == {0: 0, 1: 1, 2: 2}


class TestAggregate:
    def test_nodes_are_communities(self, settled):
        result = aggregate(settled, {n: n for n in range(6)})
        assert result.graph.nodes() == [0, 1]
        assert result.graph.communities() == {0: 0, 1: 1}

    def test_intra_weight_becomes_self_loop(self, settled):
        result = aggregate(settled, {n: n for n in range(6)})
        assert result.graph.self_loop(0) == pytest.approx(3.0)
        assert result.graph.self_loop(1) == pytest.approx(3.5)
        assert dict(result.graph.neighbors(0)) == {1: pytest.approx(0.1)}

    def test_weight_conserved(self, settled):
        result = aggregate(settled, {n: n for n in range(6)})
        assert result.graph.total_edge_weight() == pytest.approx(
            settled.total_edge_weight()
        )

    def test_degrees_conserved(self, settled):
        result = aggregate(settled, {n: n for n in range(6)})
        assert result.graph.weighted_degree(0) == pytest.approx(
            sum(settled.weighted_degree(n) for n in (0, 1, 2))
        )

    def test_composition_updated(self, settled):
        composition = {"a": 0, "b": 2, "c": 5}
        result = aggregate(settled, composition)
        assert result.composition == {"a": 0, "b": 0, "c": 1}
        assert result.renumbering == {4: 0, 1: 1}

    def test_composition_across_two_levels(self, settled):
        first = aggregate(settled, {n: n for n in range(6)})
        first.graph.set_community(1, 0)
        second = aggregate(first.graph, first.composition)
        assert set(second.composition.values()) == {0}
        assert second.graph.nodes() == [0]
        assert second.graph.total_edge_weight() == pytest.approx(6.6)

    def test_isolated_community_kept(self):
        graph = WorkingGraph.build(range(3), [(0, 1, 1.0)])
        graph.set_community(1, 0)
        result = aggregate(graph, {n: n for n in range(3)})
        assert result.graph.nodes() == [0, 1]
        assert result.graph.neighbors(1) == []

    def test_composition_pointing_outside_graph(self, settled):
        with pytest.raises(NodeNotFoundError):
            aggregate(settled, {"x": 42})
