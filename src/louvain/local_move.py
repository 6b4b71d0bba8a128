# src/louvain/local_move.py — v1
"""Local move phase: greedy per-node community reassignment.

Each pass visits every node once (natural order, or shuffled by an
injected random source) and moves it to the neighboring community with
the largest modularity gain:

    gain(c) = resolution * w_c - total(c) * degree / total_weight

where w_c is the node's summed edge weight into c and total(c) is read
after the node has been detached. Equal gains resolve to the lowest
community id. Passes repeat until one makes no move or modularity rises
by no more than the threshold.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from louvainkit.graph.working_graph import WorkingGraph
from louvainkit.louvain.ledger import CommunityLedger
from louvainkit.louvain.modularity import modularity

logger = logging.getLogger(__name__)


@dataclass
class NodeView:
    """Topology of one working node, fixed for the whole level."""

    node: int
    neighbors: list[tuple[int, float]]
    self_loop: float
    degree: float


@dataclass
class LocalMoveResult:
    """Outcome of a converged local move phase."""

    moves: int
    passes: int
    graph: WorkingGraph
    modularity: float
    trace: list[float] = field(default_factory=list)


def run_local_moves(
    graph: WorkingGraph,
    ledger: CommunityLedger,
    threshold: float,
    resolution: float = 1.0,
    rng: random.Random | None = None,
) -> LocalMoveResult:
    """Run passes over ``graph`` until convergence, mutating graph and ledger.

    Args:
        graph: Working graph whose community labels are updated in place.
        ledger: Ledger built from ``graph``; updated in place.
        threshold: Minimal modularity increase for another pass.
        resolution: Resolution parameter (>= 1).
        rng: Random source for the visiting order. None = natural order.

    Returns:
        LocalMoveResult with the total node moves over all passes.
    """
    views = node_views(graph)
    total_weight = sum(view.degree for view in views)
    quality = modularity(ledger, total_weight, resolution)
    trace = [quality]

    if total_weight <= 0.0:
        return LocalMoveResult(moves=0, passes=0, graph=graph, modularity=quality, trace=trace)

    total_moves = 0
    passes = 0
    while True:
        moved = _one_pass(graph, ledger, views, total_weight, resolution, rng)
        passes += 1
        total_moves += moved
        new_quality = modularity(ledger, total_weight, resolution)
        trace.append(new_quality)
        logger.debug(
            "Pass %d: moves=%d, modularity=%.6f (delta %.6g)",
            passes, moved, new_quality, new_quality - quality,
        )
        improvement = new_quality - quality
        quality = new_quality
        if moved == 0 or improvement <= threshold:
            break

    return LocalMoveResult(
        moves=total_moves,
        passes=passes,
        graph=graph,
        modularity=quality,
        trace=trace,
    )


def node_views(graph: WorkingGraph) -> list[NodeView]:
    """Snapshot neighbors, self-loop and degree of every node, in node order."""
    views = []
    for node in graph.nodes():
        neighbors = graph.neighbors(node)
        self_loop = graph.self_loop(node)
        degree = sum(w for _nbr, w in neighbors) + 2.0 * self_loop
        views.append(NodeView(node, neighbors, self_loop, degree))
    return views


def _one_pass(
    graph: WorkingGraph,
    ledger: CommunityLedger,
    views: list[NodeView],
    total_weight: float,
    resolution: float,
    rng: random.Random | None,
) -> int:
    """Visit every node once; return how many changed community."""
    order = list(range(len(views)))
    if rng is not None:
        rng.shuffle(order)

    moves = 0
    for index in order:
        view = views[index]
        # Isolated nodes keep their singleton community.
        if not view.neighbors:
            continue

        original = graph.community(view.node)
        weights = community_weights(graph, view)
        weights.setdefault(original, 0.0)

        ledger.depart(original, weights[original], view.self_loop, view.degree)

        best, best_gain = best_community(
            ledger, weights, view.degree, total_weight, resolution
        )
        target = original if best_gain < 0.0 else best

        ledger.arrive(target, weights[target], view.self_loop, view.degree)
        if target != original:
            graph.set_community(view.node, target)
            moves += 1
    return moves


def community_weights(graph: WorkingGraph, view: NodeView) -> dict[int, float]:
    """Sum the node's edge weight per neighboring community."""
    weights: dict[int, float] = {}
    for nbr, w in view.neighbors:
        community = graph.community(nbr)
        weights[community] = weights.get(community, 0.0) + w
    return weights


def best_community(
    ledger: CommunityLedger,
    weights: dict[int, float],
    degree: float,
    total_weight: float,
    resolution: float,
) -> tuple[int, float]:
    """Candidate with maximal gain; ties go to the lowest community id."""
    best: int | None = None
    best_gain = 0.0
    for community in sorted(weights):
        gain = resolution * weights[community] - (
            ledger.get(community).total * degree / total_weight
        )
        if best is None or gain > best_gain:
            best, best_gain = community, gain
    if best is None:
        raise ValueError("best_community() needs at least one candidate")
    return best, best_gain
