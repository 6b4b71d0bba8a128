# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

No module redefines these types: run parameters, per-level statistics
and detected communities are all imported from core.models.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class InvalidParameterError(Exception):
    """Raised when Louvain parameters fall outside their documented ranges."""


# === RUN PARAMETERS ===


class LouvainParameters(BaseModel):
    """The knobs of a single Louvain run, validated at the public entry point."""

    randomized: bool = False
    modularity_increase_threshold: float = 1e-6
    resolution: float = 1.0
    seed: int | None = None

    @model_validator(mode="after")
    def validate_ranges(self) -> LouvainParameters:
        errors: list[str] = []
        if not 0.0 < self.modularity_increase_threshold <= 1.0:
            errors.append(
                "modularity_increase_threshold must be in (0, 1], "
                f"got {self.modularity_increase_threshold}"
            )
        if self.resolution < 1.0:
            errors.append(f"resolution must be >= 1, got {self.resolution}")
        if errors:
            raise InvalidParameterError("; ".join(errors))
        return self


# === RUN STATISTICS ===


class LevelStats(BaseModel):
    """Outcome of the local move phase at one aggregation level."""

    level: int
    node_count: int
    edge_count: int
    moves: int
    passes: int
    modularity: float
    modularity_trace: list[float] = Field(default_factory=list)
    community_count: int = 0
    accepted: bool = False


# === COMMUNITIES ===


class Community(BaseModel):
    """Single community of the final partition, over original node ids."""

    community_id: int
    members: list[Any] = Field(default_factory=list)
    size: int = 0
    total_degree: float = 0.0
    internal_weight: float = 0.0
