# src/graph/working_graph.py — v1
"""Per-level working graph of the Louvain engine.

Nodes are dense integer ids. Each node carries two attributes:
``anchor`` (its id at this level) and ``community`` (the community it
currently belongs to). A freshly built level puts every node in its own
singleton community.
"""

from __future__ import annotations

from collections.abc import Iterable

from louvainkit.graph.adapter import GraphAdapter, graph_from_edges

ANCHOR_ATTR = "anchor"
COMMUNITY_ATTR = "community"
WEIGHT_ATTR = "weight"


class WorkingGraph(GraphAdapter):
    """GraphAdapter over an integer-keyed nx.Graph with anchor/community records."""

    @classmethod
    def build(
        cls,
        node_ids: Iterable[int],
        edges: Iterable[tuple[int, int, float]],
    ) -> WorkingGraph:
        """Create a level graph with every node in its own community.

        Isolated nodes must be listed in ``node_ids``; edges between the
        same pair are summed.
        """
        graph = graph_from_edges(edges, node_ids, WEIGHT_ATTR)
        for node, data in graph.nodes(data=True):
            data[ANCHOR_ATTR] = node
            data[COMMUNITY_ATTR] = node
        return cls(graph, weight=WEIGHT_ATTR, community_attr=COMMUNITY_ATTR)

    def anchor(self, node: int) -> int:
        return self._node_data(node)[ANCHOR_ATTR]

    def community(self, node: int) -> int:
        return self.get_community(node)

    def communities(self) -> dict[int, int]:
        """Snapshot of node -> community for every node."""
        return {node: self.get_community(node) for node in self.graph.nodes}

    def number_of_edges(self) -> int:
        return self.graph.number_of_edges()

    def total_edge_weight(self) -> float:
        """Sum of edge weights, each undirected edge (or self-loop) once."""
        return sum(w for _u, _v, w in self.edges())
