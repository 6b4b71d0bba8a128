# src/api/facade.py — v1
"""Public API facade: single entry point for community detection.

Usage:
    from louvainkit.api.facade import detect_communities
    result = detect_communities(graph, resolution=1.0)

The input graph is never modified. The returned graph is a copy whose
node labels are extended to ``(original label, community id)``.
"""

from __future__ import annotations

import logging
import random
import uuid
from collections.abc import Hashable
from datetime import datetime, timezone

import networkx as nx

from louvainkit.api.models import LouvainResult
from louvainkit.config.settings import Settings
from louvainkit.core.models import Community, LouvainParameters
from louvainkit.graph.adapter import GraphAdapter
from louvainkit.logging.context import clear_context, set_run_context
from louvainkit.louvain.ledger import CommunityLedger
from louvainkit.louvain.modularity import modularity, normalized_modularity
from louvainkit.louvain.outer_loop import run_louvain

logger = logging.getLogger(__name__)


def detect_communities(
    graph: nx.Graph,
    *,
    randomized: bool | None = None,
    modularity_increase_threshold: float | None = None,
    resolution: float | None = None,
    seed: int | None = None,
    rng: random.Random | None = None,
    settings: Settings | None = None,
) -> LouvainResult:
    """Detect communities in ``graph`` with the Louvain method.

    Explicit arguments override the louvain_* fields of ``settings``.

    Args:
        graph: Undirected NetworkX graph (Graph or MultiGraph).
        randomized: Shuffle the node visiting order on every pass.
        modularity_increase_threshold: Minimal modularity increase, in (0, 1],
            for another local move pass.
        resolution: Resolution parameter (>= 1, 1 = classic modularity).
        seed: Seed of the run's random source (randomized runs only).
        rng: Random source to use instead of a seeded one.
        settings: Global settings. Loaded from .env if None.

    Returns:
        LouvainResult with the labelled graph, partition and statistics.

    Raises:
        InvalidParameterError: If a parameter is out of range.
        UnsupportedGraphError: If ``graph`` is directed.
    """
    settings = settings or Settings()
    parameters = _resolve_parameters(
        settings, randomized, modularity_increase_threshold, resolution, seed
    )
    adapter = GraphAdapter(
        graph,
        weight=settings.graph_weight_attr,
        label_attr=settings.graph_label_attr,
    )

    run_id = _generate_run_id()
    set_run_context(run_id)
    try:
        logger.info(
            "Starting Louvain run: nodes=%d, edges=%d, randomized=%s, "
            "threshold=%g, resolution=%g",
            graph.number_of_nodes(), graph.number_of_edges(),
            parameters.randomized, parameters.modularity_increase_threshold,
            parameters.resolution,
        )

        state = run_louvain(adapter, parameters, rng=rng)
        partition = dict(state.composition)

        ledger = CommunityLedger.from_partition(adapter, partition)
        total_weight = ledger.total_weight()
        singletons = CommunityLedger.from_partition(
            adapter, {node: i for i, node in enumerate(partition)}
        )

        result = LouvainResult(
            run_id=run_id,
            graph=label_graph(graph, partition, settings.graph_label_attr),
            partition=partition,
            communities=_group_communities(partition, ledger),
            modularity=modularity(ledger, total_weight, parameters.resolution),
            normalized_modularity=normalized_modularity(ledger, total_weight),
            initial_modularity=modularity(
                singletons, total_weight, parameters.resolution
            ),
            num_levels=state.accepted_levels,
            levels=state.levels,
            parameters=parameters,
        )

        logger.info(
            "Louvain run complete: communities=%d, levels=%d, modularity=%.6f",
            result.community_count, result.num_levels, result.modularity,
        )
        return result
    finally:
        clear_context()


def louvain_resolution(
    graph: nx.Graph,
    randomized: bool,
    modularity_increase_threshold: float,
    resolution: float,
    *,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> nx.Graph:
    """Labelled copy of ``graph``: each label becomes (label, community id)."""
    return detect_communities(
        graph,
        randomized=randomized,
        modularity_increase_threshold=modularity_increase_threshold,
        resolution=resolution,
        seed=seed,
        rng=rng,
    ).graph


def louvain(graph: nx.Graph, modularity_increase_threshold: float) -> nx.Graph:
    """Classic Louvain: natural visiting order, resolution 1."""
    return louvain_resolution(graph, False, modularity_increase_threshold, 1.0)


def louvain_random(
    graph: nx.Graph,
    modularity_increase_threshold: float,
    *,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> nx.Graph:
    """Louvain with a shuffled visiting order on every pass, resolution 1."""
    return louvain_resolution(
        graph, True, modularity_increase_threshold, 1.0, seed=seed, rng=rng
    )


def label_graph(
    graph: nx.Graph,
    partition: dict[Hashable, int],
    label_attr: str = "label",
) -> nx.Graph:
    """Copy ``graph`` and extend every node label with its community id."""
    labelled = graph.copy()
    for node, data in labelled.nodes(data=True):
        data[label_attr] = (data.get(label_attr), partition[node])
    return labelled


def _resolve_parameters(
    settings: Settings,
    randomized: bool | None,
    threshold: float | None,
    resolution: float | None,
    seed: int | None,
) -> LouvainParameters:
    """Merge explicit arguments over the settings defaults, then validate."""
    defaults = settings.louvain_parameters()
    overrides = {
        "randomized": randomized,
        "modularity_increase_threshold": threshold,
        "resolution": resolution,
        "seed": seed,
    }
    current = defaults.model_dump()
    current.update({k: v for k, v in overrides.items() if v is not None})
    return LouvainParameters(**current)


def _group_communities(
    partition: dict[Hashable, int],
    ledger: CommunityLedger,
) -> list[Community]:
    members: dict[int, list[Hashable]] = {}
    for node, community in partition.items():
        members.setdefault(community, []).append(node)
    communities = []
    for community_id in sorted(members):
        stats = ledger.get(community_id)
        communities.append(Community(
            community_id=community_id,
            members=members[community_id],
            size=len(members[community_id]),
            total_degree=stats.total,
            internal_weight=stats.internal,
        ))
    return communities


def _generate_run_id() -> str:
    """Generate run_id: {YYYYMMDD_HHMMSS}_{uuid8}."""
    now = datetime.now(timezone.utc)
    return f"{now.strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"
