#!/usr/bin/env python3
"""
RouteGraph Tests
================

Construction policy (dropped unknown ids, rejected distances, duplicate ids)
and the neighbor / shortest-path queries.

Usage:
    pytest airnet/test/test_graph.py -v
"""

import math

import numpy as np
import pytest

from airnet.test.helpers import make_graph, scenario_graph, directed_path
from airnet.lib.core.graph import ConstructionError, RouteGraph, build_graph
from airnet.lib.core.graph_types import Airport, Route


# =============================================================================
# Construction
# =============================================================================

def test_index_map_is_dense_bijection():
    airports = [{"id": "JFK"}, {"id": "LAX"}, {"id": "SFO"}]
    graph = RouteGraph.build(airports, [])
    assert [graph.index_of(a["id"]) for a in airports] == [0, 1, 2]
    assert [a.index for a in graph.airports] == [0, 1, 2]
    assert graph.index_of("ORD") is None


def test_accepts_dataclasses_and_original_field_names():
    airports = [Airport(id=1, name="One", country="Spain"), {"id": 2, "nombre": "Two", "pais": "Chile"}]
    routes = [{"origen": 1, "destino": 2, "distancia": 800.0, "aerolinea": "IB"}]
    graph = build_graph(airports, routes)

    assert graph.airport(1).name == "Two"
    assert graph.airport(1).country == "Chile"
    (nb,) = graph.neighbors(0)
    assert nb.target == 1
    assert nb.distance == 800.0
    assert nb.route.airline == "IB"


def test_unknown_airport_routes_are_dropped():
    graph = make_graph(2, [(0, 1), (0, 7), (9, 1)])
    assert graph.num_edges == 1
    assert graph.dropped_routes == 2


def test_duplicate_airport_id_rejected():
    with pytest.raises(ConstructionError, match="Duplicate"):
        RouteGraph.build([{"id": 1}, {"id": 1}], [])


def test_airport_without_id_rejected():
    with pytest.raises(ConstructionError):
        RouteGraph.build([{"name": "nowhere"}], [])


@pytest.mark.parametrize("distance", [0, -5, float("nan"), float("inf"), "100", None, True])
def test_invalid_distance_rejected(distance):
    with pytest.raises(ConstructionError):
        RouteGraph.build([{"id": 0}, {"id": 1}],
                         [{"source": 0, "target": 1, "distance": distance}])


@pytest.mark.parametrize("distance", [975, 975.0, np.int64(975), np.float32(975.0), np.float64(975.0)])
def test_numeric_distance_types_accepted(distance):
    graph = RouteGraph.build([{"id": 0}, {"id": 1}],
                             [{"source": 0, "target": 1, "distance": distance}])
    (nb,) = graph.neighbors(0)
    assert nb.distance == pytest.approx(975.0)
    assert type(nb.distance) is float


def test_parallel_edges_and_self_loops_kept():
    graph = make_graph(2, [(0, 1), (0, 1), (1, 1)])
    assert graph.num_edges == 3
    assert graph.out_degree(0) == 2
    assert graph.in_degree(1) == 3
    assert graph.predecessors(1) == (0, 0, 1)


def test_route_objects_use_airport_ids():
    graph = RouteGraph.build([{"id": "a"}, {"id": "b"}],
                             [Route(source="a", target="b", distance=10.0)])
    assert [r.target for r in graph.routes()] == [1]


# =============================================================================
# Queries
# =============================================================================

def test_numpy_indices_address_airports():
    graph = scenario_graph()
    assert graph.neighbors(np.int64(0)) == graph.neighbors(0)
    assert graph.predecessors(np.int32(2)) == (0, 1)
    assert graph.out_degree(np.int64(0)) == 2

    path, distance = graph.shortest_path(np.int64(0), np.int64(3))
    assert path == [0, 1, 2, 3]
    assert all(type(i) is int for i in path)
    assert distance == pytest.approx(250.0)


def test_neighbors_out_of_range_is_empty():
    graph = directed_path(3)
    assert graph.neighbors(2) == ()
    assert graph.neighbors(3) == ()
    assert graph.neighbors(-1) == ()
    assert graph.predecessors(99) == ()


def test_shortest_path_prefers_cheaper_connection():
    graph = scenario_graph()
    path, distance = graph.shortest_path(0, 2)
    assert path == [0, 1, 2]
    assert distance == pytest.approx(200.0)

    path, distance = graph.shortest_path(0, 3)
    assert path == [0, 1, 2, 3]
    assert distance == pytest.approx(250.0)


def test_shortest_path_to_self_is_zero():
    graph = scenario_graph()
    for a in range(graph.num_nodes):
        assert graph.shortest_path(a, a) == ([a], 0.0)


def test_shortest_path_unreachable():
    graph = scenario_graph()
    path, distance = graph.shortest_path(3, 0)
    assert path == []
    assert math.isinf(distance)

    assert graph.shortest_path(0, 42) == ([], math.inf)


def test_graph_is_not_mutated_by_queries():
    graph = scenario_graph()
    before = [tuple(graph.neighbors(i)) for i in range(graph.num_nodes)]
    graph.shortest_path(0, 3)
    graph.neighbors(1)
    assert [tuple(graph.neighbors(i)) for i in range(graph.num_nodes)] == before
