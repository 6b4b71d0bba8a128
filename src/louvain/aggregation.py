# src/louvain/aggregation.py — v1
"""Aggregation phase: coarsen a settled working graph.

Communities become the nodes of the next level, renumbered densely from 0
in order of discovery. Edge weights are summed per unordered community
pair; pairs inside one community become self-loops. The running
composition (original node -> working node) is rewritten to point at the
new level, so it always reflects the deepest accepted level.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from dataclasses import dataclass

from louvainkit.graph.working_graph import WorkingGraph

logger = logging.getLogger(__name__)


@dataclass
class AggregationResult:
    """Next-level graph and the composition that maps onto it."""

    graph: WorkingGraph
    composition: dict[Hashable, int]
    renumbering: dict[int, int]


def renumber_communities(graph: WorkingGraph) -> dict[int, int]:
    """Map each distinct community id to a dense id, in node order."""
    renumbering: dict[int, int] = {}
    for node in graph.nodes():
        community = graph.community(node)
        if community not in renumbering:
            renumbering[community] = len(renumbering)
    return renumbering


def aggregate(
    graph: WorkingGraph,
    composition: dict[Hashable, int],
) -> AggregationResult:
    """Coarsen ``graph`` by community and re-map ``composition``.

    Args:
        graph: Working graph after its local move phase.
        composition: Original node -> node id of ``graph``.

    Returns:
        AggregationResult with the singleton-partition graph of the next
        level and the updated composition.

    Raises:
        NodeNotFoundError: If the composition points at a node that is not
            part of ``graph``.
    """
    renumbering = renumber_communities(graph)
    node_to_new = {
        node: renumbering[graph.community(node)] for node in graph.nodes()
    }

    pair_weights: dict[tuple[int, int], float] = {}
    for u, v, w in graph.edges():
        a, b = node_to_new[u], node_to_new[v]
        key = (a, b) if a <= b else (b, a)
        pair_weights[key] = pair_weights.get(key, 0.0) + w

    next_graph = WorkingGraph.build(
        range(len(renumbering)),
        ((a, b, w) for (a, b), w in pair_weights.items()),
    )

    next_composition = {
        original: renumbering[graph.community(current)]
        for original, current in composition.items()
    }

    logger.debug(
        "Aggregated %d nodes into %d communities (%d edges)",
        graph.number_of_nodes(), len(renumbering), next_graph.number_of_edges(),
    )
    return AggregationResult(
        graph=next_graph,
        composition=next_composition,
        renumbering=renumbering,
    )
