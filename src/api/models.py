# src/api/models.py — v1
"""API-level models: LouvainResult returned by facade.detect_communities()."""

from __future__ import annotations

from typing import Any

import networkx as nx
from pydantic import BaseModel, ConfigDict, Field

from louvainkit.core.models import Community, LevelStats, LouvainParameters


class LouvainResult(BaseModel):
    """Return value of facade.detect_communities(): API-level result."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    run_id: str
    graph: nx.Graph
    partition: dict[Any, int] = Field(default_factory=dict)
    communities: list[Community] = Field(default_factory=list)
    modularity: float = 0.0
    normalized_modularity: float = 0.0
    initial_modularity: float = 0.0
    num_levels: int = 0
    levels: list[LevelStats] = Field(default_factory=list)
    parameters: LouvainParameters

    @property
    def community_count(self) -> int:
        return len(self.communities)

    def community_of(self, node: Any) -> int:
        """Final community id of an original node."""
        return self.partition[node]
