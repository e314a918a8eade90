"""Tests for weighted shortest paths and the patch radius."""

from __future__ import annotations

import math

import networkx as nx
import pytest

from netguard.errors import UnknownNodeError, ValidationError
from netguard.graph import Graph
from netguard.network_builder import build_random_network
from netguard.pathfinding.dijkstra import dijkstra, format_distance, patch_radius, reconstruct_path

from tests.conftest import CAMPUS, SCENARIO_B, SCENARIO_C


class TestDijkstra:
    def test_effective_costs_and_routes(self, make_graph) -> None:
        g = make_graph(CAMPUS)
        dist, parent = dijkstra(g, "srv1")
        assert dist["v1"] == pytest.approx(2.0)
        assert dist["gw"] == pytest.approx(2.5)
        assert dist["v3"] == pytest.approx(3.0)
        assert dist["v2"] == pytest.approx(3.2)
        assert dist["v4"] == pytest.approx(7.0)
        assert reconstruct_path(parent, "v4") == ["srv1", "v1", "gw", "v3", "v4"]

    def test_unreachable_is_inf(self, make_graph) -> None:
        dist, parent = dijkstra(make_graph(SCENARIO_C), "S")
        assert math.isinf(dist["V"])
        assert reconstruct_path(parent, "V") is None

    def test_unknown_source(self, make_graph) -> None:
        with pytest.raises(UnknownNodeError):
            dijkstra(make_graph(SCENARIO_B), "X")

    def test_tiny_improvement_is_ignored(self) -> None:
        g = Graph()
        for n in ("S", "A", "B"):
            g.add_node(n, n != "S")
        g.add_edge("S", "A", 1.0, 3, directed=True)
        g.add_edge("S", "B", 0.5, 3, directed=True)
        g.add_edge("B", "A", 0.4999999999999, 3, directed=True)

        dist, parent = dijkstra(g, "S")
        assert dist["A"] == 1.0
        assert parent["A"] == "S"

        dist, parent = dijkstra(g, "S", epsilon=1e-15)
        assert dist["A"] < 1.0
        assert parent["A"] == "B"

    def test_negative_cost_rejected(self) -> None:
        g = Graph(allow_negative_latency=True)
        g.add_node("S", False)
        g.add_node("V", True)
        g.add_edge("S", "V", -1.0, 3, directed=False)
        with pytest.raises(ValidationError, match="Negative"):
            dijkstra(g, "S")

    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_agrees_with_networkx(self, seed: int) -> None:
        g = build_random_network(n_nodes=25, edge_prob=0.15, seed=seed, directed=True)
        dist, _ = dijkstra(g, "s1")
        expected = nx.single_source_dijkstra_path_length(g.to_networkx(), "s1", weight="weight")
        for node in g:
            if node in expected:
                assert dist[node] == pytest.approx(expected[node])
            else:
                assert math.isinf(dist[node])


class TestPatchRadius:
    def test_scenario_b(self, make_graph) -> None:
        assert patch_radius(make_graph(SCENARIO_B), "S") == "12.0"

    def test_scenario_c(self, make_graph) -> None:
        assert patch_radius(make_graph(SCENARIO_C), "S") == "INF"

    def test_campus(self, make_graph) -> None:
        g = make_graph(CAMPUS)
        assert patch_radius(g, "srv1") == "7.0"
        assert patch_radius(g, "srv2") == "6.1"
        assert patch_radius(g, "gw") == "4.5"

    def test_directed_unreachable(self, make_graph) -> None:
        g = make_graph(CAMPUS, directed=True)
        assert patch_radius(g, "srv1") == "7.0"
        assert patch_radius(g, "srv2") == "INF"

    def test_one_unreachable_wins_over_reachable(self, make_graph) -> None:
        g = make_graph("3\nS false\nV true\nW true\nS V 1.0 3\n")
        assert patch_radius(g, "S") == "INF"

    def test_no_vulnerable_nodes(self, make_graph) -> None:
        g = make_graph("2\nS false\nT false\nS T 3.0 1\n")
        assert patch_radius(g, "S") == "0.0"

    def test_vulnerable_server(self, make_graph) -> None:
        with pytest.raises(ValidationError, match="must not be vulnerable"):
            patch_radius(make_graph(SCENARIO_B), "V")

    def test_unknown_server(self, make_graph) -> None:
        with pytest.raises(UnknownNodeError):
            patch_radius(make_graph(SCENARIO_B), "X")

    @pytest.mark.parametrize("seed", range(10))
    def test_inf_iff_unreachable_vulnerable(self, seed: int) -> None:
        G = nx.gnp_random_graph(10, 0.15, seed=seed, directed=True)
        g = Graph()
        for n in G.nodes():
            g.add_node(str(n), n % 3 != 0)
        for u, v in G.edges():
            g.add_edge(str(u), str(v), 1.0 + u, 1 + v % 3, directed=True)

        reachable = nx.descendants(G, 0) | {0}
        cut_off = [n for n in G.nodes() if n % 3 != 0 and n not in reachable]
        assert (patch_radius(g, "0") == "INF") == bool(cut_off)


class TestFormatDistance:
    @pytest.mark.parametrize(
        ("value", "text"),
        [
            (0.0, "0.0"),
            (12.0, "12.0"),
            (0.25, "0.3"),
            (0.35, "0.4"),
            (2.04, "2.0"),
            (6.1000000000000005, "6.1"),
            (1e20, "100000000000000000000.0"),
            (math.inf, "INF"),
        ],
    )
    def test_format(self, value: float, text: str) -> None:
        assert format_distance(value) == text
