# tests/unit/api/test_models.py — v1
"""Tests for api.models — LouvainResult."""

from __future__ import annotations

import networkx as nx
import pytest
from pydantic import ValidationError

from louvainkit.api.models import LouvainResult
from louvainkit.core.models import Community, LouvainParameters


def _result(**kwargs) -> LouvainResult:
    defaults = {
        "run_id": "20260101_000000_abcdef12",
        "graph": nx.Graph(),
        "parameters": LouvainParameters(),
    }
    defaults.update(kwargs)
    return LouvainResult(**defaults)


class TestLouvainResult:
    def test_defaults(self):
        r = _result()
        assert r.partition == {}
        assert r.community_count == 0
        assert r.num_levels == 0

    def test_community_of(self):
        r = _result(
            partition={"a": 0, "b": 1},
            communities=[
                Community(community_id=0, members=["a"], size=1),
                Community(community_id=1, members=["b"], size=1),
            ],
        )
        assert r.community_of("b") == 1
        assert r.community_count == 2

    def test_community_of_unknown_node(self):
        with pytest.raises(KeyError):
            _result().community_of("zzz")

    def test_accepts_multigraph(self):
        r = _result(graph=nx.MultiGraph())
        assert r.graph.is_multigraph()

    def test_rejects_non_graph(self):
        with pytest.raises(ValidationError):
            _result(graph={"not": "a graph"})
