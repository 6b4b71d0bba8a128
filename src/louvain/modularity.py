# src/louvain/modularity.py — v1
"""Modularity of a partition, computed from a CommunityLedger.

Q(resolution) = sum over communities c of
    resolution * (internal(c) / 2) / (total_weight / 2) - (total(c) / total_weight) ** 2

where total_weight is the sum of all node weighted degrees. Resolution 1
gives classic Newman modularity. Larger values weigh internal edges more
heavily, so communities merge more readily and fewer of them remain.
Communities emptied by node moves (total <= 0) do not contribute.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import TYPE_CHECKING

from louvainkit.louvain.ledger import CommunityLedger

if TYPE_CHECKING:
    from louvainkit.graph.adapter import GraphAdapter


def modularity(
    ledger: CommunityLedger,
    total_weight: float,
    resolution: float = 1.0,
) -> float:
    """Global modularity Q of the ledger's partition."""
    if total_weight <= 0.0:
        return 0.0
    q = 0.0
    for _community, stats in ledger.items():
        if stats.total > 0.0:
            q += resolution * (stats.internal / 2.0) / (total_weight / 2.0) - (
                stats.total / total_weight
            ) ** 2
    return q


def normalized_modularity(ledger: CommunityLedger, total_weight: float) -> float:
    """Resolution-free variant: sum(internal - total**2 / W) / W."""
    if total_weight <= 0.0:
        return 0.0
    q = 0.0
    for _community, stats in ledger.items():
        if stats.total > 0.0:
            q += stats.internal - (stats.total * stats.total) / total_weight
    return q / total_weight


def partition_modularity(
    adapter: GraphAdapter,
    partition: Mapping[Hashable, Hashable],
    resolution: float = 1.0,
) -> float:
    """Modularity of ``partition`` (node -> community) on any adapted graph."""
    ledger = CommunityLedger.from_partition(adapter, partition)
    return modularity(ledger, ledger.total_weight(), resolution)
