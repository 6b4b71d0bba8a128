# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides small weighted graphs with known community structure. No I/O.
"""

from __future__ import annotations

import networkx as nx
import pytest

from louvainkit.config.settings import Settings


def build_two_triangles(bridge_weight: float = 0.1) -> nx.Graph:
    """Two unit-weight triangles joined by one low-weight bridge (2-3)."""
    g = nx.Graph()
    for n in range(6):
        g.add_node(n, label=f"n{n}")
    g.add_edge(0, 1, weight=1.0)
    g.add_edge(1, 2, weight=1.0)
    g.add_edge(0, 2, weight=1.0)
    g.add_edge(3, 4, weight=1.0)
    g.add_edge(4, 5, weight=1.0)
    g.add_edge(3, 5, weight=1.0)
    g.add_edge(2, 3, weight=bridge_weight)
    return g


def build_ring_of_cliques(num_cliques: int = 4, clique_size: int = 5) -> nx.Graph:
    """Cliques connected in a ring by single edges."""
    return nx.ring_of_cliques(num_cliques, clique_size)


# === FIXTURES: Sample graphs ===


@pytest.fixture
def two_triangles() -> nx.Graph:
    return build_two_triangles()


@pytest.fixture
def ring_of_cliques() -> nx.Graph:
    return build_ring_of_cliques()


@pytest.fixture
def karate() -> nx.Graph:
    return nx.karate_club_graph()


@pytest.fixture
def edgeless_graph() -> nx.Graph:
    g = nx.Graph()
    g.add_nodes_from(["a", "b", "c"])
    return g


@pytest.fixture
def multigraph_with_loops() -> nx.MultiGraph:
    """Parallel a-b edges (1 + 2), a self-loop on a (0.5), and b-c (1)."""
    g = nx.MultiGraph()
    g.add_edge("a", "b", weight=1.0)
    g.add_edge("a", "b", weight=2.0)
    g.add_edge("a", "a", weight=0.5)
    g.add_edge("b", "c", weight=1.0)
    return g


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None)
