# src/louvain/outer_loop.py — v1
"""Outer loop: alternate local moves and aggregation across levels.

A level is accepted, and aggregated into the next one, only if its local
move phase moved at least two nodes and, past level 0, did not lower
modularity below the previous level's. The first rejected level ends the
run; its moves are discarded and the composition accumulated so far is
the result. The number of communities never grows, so the loop ends
without an explicit cap.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Hashable
from dataclasses import dataclass, field

from louvainkit.core.models import LevelStats, LouvainParameters
from louvainkit.graph.adapter import GraphAdapter
from louvainkit.graph.working_graph import WorkingGraph
from louvainkit.logging.context import set_level_context
from louvainkit.louvain.aggregation import aggregate, renumber_communities
from louvainkit.louvain.ledger import CommunityLedger
from louvainkit.louvain.local_move import run_local_moves

logger = logging.getLogger(__name__)

MIN_MOVES_PER_LEVEL = 2


@dataclass
class RunState:
    """Mutable state of one run, owned by run_louvain() for its duration."""

    graph: WorkingGraph
    composition: dict[Hashable, int]
    level: int = 0
    previous_modularity: float = 0.0
    levels: list[LevelStats] = field(default_factory=list)

    @classmethod
    def start(cls, adapter: GraphAdapter) -> RunState:
        """Level 0: one working node per original node, singleton communities."""
        index = {node: i for i, node in enumerate(adapter.nodes())}
        edges = ((index[u], index[v], w) for u, v, w in adapter.edges())
        graph = WorkingGraph.build(range(len(index)), edges)
        return cls(graph=graph, composition=index)

    @property
    def accepted_levels(self) -> int:
        return sum(1 for stats in self.levels if stats.accepted)


def should_stop(moves: int, level: int, quality: float, previous: float) -> bool:
    """True when a level's result must not be aggregated."""
    if moves < MIN_MOVES_PER_LEVEL:
        return True
    return level > 0 and quality < previous


def run_louvain(
    adapter: GraphAdapter,
    parameters: LouvainParameters,
    rng: random.Random | None = None,
) -> RunState:
    """Run Louvain levels until convergence.

    Args:
        adapter: The input graph.
        parameters: Validated run parameters.
        rng: Random source for randomized runs. When None and
            ``parameters.randomized`` is set, one ``random.Random(seed)``
            is created and shared by every level.

    Returns:
        Final RunState; ``composition`` maps each original node to its
        community id.
    """
    if parameters.randomized and rng is None:
        rng = random.Random(parameters.seed)
    order_rng = rng if parameters.randomized else None

    state = RunState.start(adapter)

    while True:
        set_level_context(state.level, "local_move")
        ledger = CommunityLedger.initialize(state.graph)
        result = run_local_moves(
            state.graph,
            ledger,
            threshold=parameters.modularity_increase_threshold,
            resolution=parameters.resolution,
            rng=order_rng,
        )
        stop = should_stop(
            result.moves, state.level, result.modularity, state.previous_modularity
        )
        stats = LevelStats(
            level=state.level,
            node_count=result.graph.number_of_nodes(),
            edge_count=result.graph.number_of_edges(),
            moves=result.moves,
            passes=result.passes,
            modularity=result.modularity,
            modularity_trace=result.trace,
            community_count=len(renumber_communities(result.graph)),
            accepted=not stop,
        )
        state.levels.append(stats)
        logger.info(
            "Level %d: nodes=%d, moves=%d, passes=%d, communities=%d, modularity=%.6f%s",
            stats.level, stats.node_count, stats.moves, stats.passes,
            stats.community_count, stats.modularity,
            "" if stats.accepted else " (converged)",
        )
        if stop:
            return state

        set_level_context(state.level, "aggregation")
        aggregated = aggregate(result.graph, state.composition)
        state.graph = aggregated.graph
        state.composition = aggregated.composition
        state.previous_modularity = result.modularity
        state.level += 1
