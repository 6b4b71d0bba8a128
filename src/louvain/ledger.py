# src/louvain/ledger.py — v1
"""Community ledger: per-community weighted degree and internal weight.

Internal weight counts every intra-community edge from both endpoints, so
a self-loop of weight w contributes 2w, the same as it does to its node's
weighted degree. With that convention sum(total) equals the total graph
weight and internal(c) <= total(c) holds for every community.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from louvainkit.graph.adapter import GraphAdapter
    from louvainkit.graph.working_graph import WorkingGraph


class UnknownCommunityError(KeyError):
    """Raised when the ledger is asked for a community it does not track."""

    def __init__(self, community: Hashable) -> None:
        super().__init__(community)
        self.community = community

    def __str__(self) -> str:
        return f"Unknown community in ledger: {self.community!r}"


@dataclass
class CommunityStats:
    """Running totals for one community."""

    total: float = 0.0
    internal: float = 0.0


class CommunityLedger:
    """Mapping community id -> CommunityStats, updated in place on node moves."""

    def __init__(self, entries: dict[Hashable, CommunityStats] | None = None) -> None:
        self._entries: dict[Hashable, CommunityStats] = entries or {}

    @classmethod
    def initialize(cls, graph: WorkingGraph) -> CommunityLedger:
        """One entry per node, keyed by the node's community label.

        On a freshly built level every node is its own community, so each
        entry holds that node's degree and twice its self-loop weight.
        """
        ledger = cls()
        for node in graph.nodes():
            stats = ledger._entries.setdefault(graph.community(node), CommunityStats())
            stats.total += graph.weighted_degree(node)
            stats.internal += 2.0 * graph.self_loop(node)
        return ledger

    @classmethod
    def from_partition(
        cls,
        adapter: GraphAdapter,
        partition: Mapping[Hashable, Hashable],
    ) -> CommunityLedger:
        """Build a ledger for an arbitrary partition of any graph.

        Partition entries for nodes outside the graph are ignored.

        Raises:
            KeyError: If a graph node is missing from the partition.
        """
        ledger = cls()
        for node in adapter.nodes():
            community = partition[node]
            stats = ledger._entries.setdefault(community, CommunityStats())
            stats.total += adapter.weighted_degree(node)
            stats.internal += 2.0 * adapter.self_loop(node)
            for nbr, w in adapter.neighbors(node):
                if partition[nbr] == community:
                    # Visited again from nbr, which adds the second half.
                    stats.internal += w
        return ledger

    # --- Lookup ---

    def get(self, community: Hashable) -> CommunityStats:
        try:
            return self._entries[community]
        except KeyError:
            raise UnknownCommunityError(community) from None

    def __contains__(self, community: object) -> bool:
        return community in self._entries

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> Iterator[tuple[Hashable, CommunityStats]]:
        return iter(self._entries.items())

    def total_weight(self) -> float:
        return sum(stats.total for stats in self._entries.values())

    # --- Incremental updates ---

    def depart(
        self,
        community: Hashable,
        weight_to_community: float,
        self_loop: float,
        node_degree: float,
    ) -> None:
        """Remove a node's contribution from ``community``.

        Args:
            community: Community the node is leaving.
            weight_to_community: Summed edge weight from the node to the
                other members of ``community``.
            self_loop: The node's own self-loop weight.
            node_degree: The node's weighted degree.
        """
        stats = self.get(community)
        stats.total -= node_degree
        stats.internal -= 2.0 * (weight_to_community + self_loop)

    def arrive(
        self,
        community: Hashable,
        weight_to_community: float,
        self_loop: float,
        node_degree: float,
    ) -> None:
        """Add a node's contribution to ``community`` (inverse of depart)."""
        stats = self.get(community)
        stats.total += node_degree
        stats.internal += 2.0 * (weight_to_community + self_loop)
