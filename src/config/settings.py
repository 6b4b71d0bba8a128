# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for default run parameters, graph attribute names
and logging configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from louvainkit.core.models import LouvainParameters


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Louvain ===
    louvain_randomized: bool = False
    louvain_modularity_increase_threshold: float = 1e-6
    louvain_resolution: float = 1.0
    louvain_seed: int | None = 42

    # === Graph attributes ===
    graph_weight_attr: str = "weight"
    graph_label_attr: str = "label"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("log_retention")
    @classmethod
    def validate_log_retention(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("log_retention must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate parameter ranges and cross-field rules."""
        errors: list[str] = []

        if not 0.0 < self.louvain_modularity_increase_threshold <= 1.0:
            errors.append("LOUVAIN_MODULARITY_INCREASE_THRESHOLD must be in (0, 1]")

        if self.louvain_resolution < 1.0:
            errors.append("LOUVAIN_RESOLUTION must be >= 1")

        if self.graph_weight_attr == self.graph_label_attr:
            errors.append("GRAPH_WEIGHT_ATTR and GRAPH_LABEL_ATTR must differ")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    def louvain_parameters(self) -> LouvainParameters:
        """Build validated run parameters from the louvain_* fields."""
        return LouvainParameters(
            randomized=self.louvain_randomized,
            modularity_increase_threshold=self.louvain_modularity_increase_threshold,
            resolution=self.louvain_resolution,
            seed=self.louvain_seed,
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-run config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
