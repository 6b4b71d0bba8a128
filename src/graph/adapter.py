# src/graph/adapter.py — v1
"""Capability view over a NetworkX graph for the Louvain engine.

The engine never touches NetworkX directly: it enumerates nodes and
edges, reads weight-aggregated neighbor lists and gets/sets node labels
through GraphAdapter. Parallel edges (MultiGraph) are summed and
self-loops are kept apart from the neighbor list, but folded into the
node's weighted degree (counted twice).
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator
from typing import Any

import networkx as nx


class NodeNotFoundError(KeyError):
    """Raised when an operation references a node absent from the graph."""

    def __init__(self, node: Any) -> None:
        super().__init__(node)
        self.node = node

    def __str__(self) -> str:
        return f"Node not found in graph: {self.node!r}"


class UnsupportedGraphError(ValueError):
    """Raised when the wrapped graph cannot be treated as undirected."""


class GraphAdapter:
    """Weighted undirected graph view backed by networkx.Graph / MultiGraph.

    Args:
        graph: Undirected NetworkX graph. Multi-edges are allowed.
        weight: Edge attribute holding the weight (missing = 1.0).
        label_attr: Node attribute holding the opaque label payload.
        community_attr: Node attribute holding the community id.
    """

    def __init__(
        self,
        graph: nx.Graph,
        weight: str = "weight",
        label_attr: str = "label",
        community_attr: str = "community",
    ) -> None:
        if graph.is_directed():
            raise UnsupportedGraphError(
                "Louvain community detection requires an undirected graph"
            )
        self.graph = graph
        self.weight = weight
        self.label_attr = label_attr
        self.community_attr = community_attr

    # --- Enumeration ---

    def nodes(self) -> list[Hashable]:
        """Node ids in the graph's insertion order."""
        return list(self.graph.nodes)

    def number_of_nodes(self) -> int:
        return self.graph.number_of_nodes()

    def __contains__(self, node: object) -> bool:
        return node in self.graph

    def edges(self) -> Iterator[tuple[Hashable, Hashable, float]]:
        """Yield every undirected edge once, parallel copies summed."""
        if not self.graph.is_multigraph():
            for u, v, w in self.graph.edges(data=self.weight, default=1.0):
                yield u, v, float(w)
            return

        summed: dict[frozenset, list[Any]] = {}
        for u, v, w in self.graph.edges(data=self.weight, default=1.0):
            key = frozenset((u, v))
            if key in summed:
                summed[key][2] += float(w)
            else:
                summed[key] = [u, v, float(w)]
        for u, v, w in summed.values():
            yield u, v, w

    # --- Neighborhood ---

    def neighbors(self, node: Hashable) -> list[tuple[Hashable, float]]:
        """Weight-aggregated (neighbor, weight) pairs, self-loop excluded."""
        return [
            (nbr, w)
            for nbr, w in self._aggregated_adjacency(node).items()
            if nbr != node
        ]

    def self_loop(self, node: Hashable) -> float:
        """Summed weight of the node's self-loops (0.0 if none)."""
        return self._aggregated_adjacency(node).get(node, 0.0)

    def weighted_degree(self, node: Hashable) -> float:
        """Sum of incident edge weights, a self-loop counting twice."""
        degree = 0.0
        for nbr, w in self._aggregated_adjacency(node).items():
            degree += 2.0 * w if nbr == node else w
        return degree

    def _aggregated_adjacency(self, node: Hashable) -> dict[Hashable, float]:
        try:
            adjacency = self.graph.adj[node]
        except KeyError:
            raise NodeNotFoundError(node) from None

        weights: dict[Hashable, float] = {}
        if self.graph.is_multigraph():
            for nbr, keyed in adjacency.items():
                weights[nbr] = sum(
                    float(attrs.get(self.weight, 1.0)) for attrs in keyed.values()
                )
        else:
            for nbr, attrs in adjacency.items():
                weights[nbr] = float(attrs.get(self.weight, 1.0))
        return weights

    # --- Labels ---

    def get_label(self, node: Hashable) -> Any:
        return self._node_data(node).get(self.label_attr)

    def set_label(self, node: Hashable, value: Any) -> None:
        self._node_data(node)[self.label_attr] = value

    def get_community(self, node: Hashable) -> int:
        data = self._node_data(node)
        if self.community_attr not in data:
            raise KeyError(f"Node {node!r} has no {self.community_attr!r} attribute")
        return data[self.community_attr]

    def set_community(self, node: Hashable, community: int) -> None:
        self._node_data(node)[self.community_attr] = community

    def _node_data(self, node: Hashable) -> dict[str, Any]:
        try:
            return self.graph.nodes[node]
        except KeyError:
            raise NodeNotFoundError(node) from None

    # --- Construction ---

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[Hashable, Hashable, float]],
        nodes: Iterable[Hashable] = (),
        weight: str = "weight",
    ) -> GraphAdapter:
        """Build an adapter over a fresh nx.Graph, summing repeated pairs."""
        return cls(graph_from_edges(edges, nodes, weight), weight=weight)


def graph_from_edges(
    edges: Iterable[tuple[Hashable, Hashable, float]],
    nodes: Iterable[Hashable],
    weight: str,
) -> nx.Graph:
    graph = nx.Graph()
    graph.add_nodes_from(nodes)
    for u, v, w in edges:
        if graph.has_edge(u, v):
            graph[u][v][weight] += w
        else:
            graph.add_edge(u, v, **{weight: w})
    return graph
