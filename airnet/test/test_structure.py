#!/usr/bin/env python3
"""
Structural Metric Tests
=======================

Degree sums, density bounds and weakly connected components.

Usage:
    pytest airnet/test/test_structure.py -v
"""

import pytest

from airnet.test.helpers import make_graph, scenario_graph, two_triangles, star
from airnet.lib.analysis.structure import (
    compute_basic_stats,
    compute_degrees,
    compute_density,
    find_components,
)

GRAPHS = {
    "scenario": scenario_graph,
    "triangles": two_triangles,
    "star": star,
    "multi": lambda: make_graph(3, [(0, 1), (0, 1), (1, 1), (2, 0)]),
    "isolated": lambda: make_graph(3, []),
}


@pytest.mark.parametrize("name", sorted(GRAPHS))
def test_degree_sums_match_edge_count(name):
    graph = GRAPHS[name]()
    degrees = compute_degrees(graph)
    assert sum(degrees.out_degree) == graph.num_edges
    assert sum(degrees.in_degree) == graph.num_edges
    assert degrees.total == [o + i for o, i in zip(degrees.out_degree, degrees.in_degree)]


@pytest.mark.parametrize("name", sorted(GRAPHS))
def test_density_in_unit_interval(name):
    graph = GRAPHS[name]()
    density = compute_density(graph.num_nodes, graph.num_edges)
    assert 0.0 <= density <= 1.0


def test_density_small_graphs():
    assert compute_density(0, 0) == 0.0
    assert compute_density(1, 5) == 0.0
    assert compute_density(4, 4) == pytest.approx(4 / 12)


def test_degree_summary():
    degrees = compute_degrees(star(3))
    assert degrees.total == [6, 2, 2, 2]
    assert degrees.maximum == 6
    assert degrees.minimum == 2
    assert degrees.average == pytest.approx(3.0)
    assert degrees.distribution == {2: 3, 6: 1}


def test_two_triangles_have_two_components():
    count, largest, components = find_components(two_triangles())
    assert count == 2
    assert largest == 3
    assert [sorted(c) for c in components] == [[0, 1, 2], [3, 4, 5]]


def test_components_use_weak_connectivity():
    # 0 -> 1 <- 2 is one weak component even though 0 and 2 cannot reach each other
    count, largest, _ = find_components(make_graph(4, [(0, 1), (2, 1)]))
    assert count == 2
    assert largest == 3


def test_basic_stats_section():
    basic, degrees = compute_basic_stats(scenario_graph())
    assert basic.nodes == 4
    assert basic.edges == 4
    assert basic.density == pytest.approx(4 / 12)
    assert basic.components == 1
    assert basic.largest_component == 4
    assert basic.is_directed
    assert basic.max_degree == degrees.maximum == 3
    assert sum(basic.degree_distribution.values()) == 4


def test_empty_graph():
    basic, degrees = compute_basic_stats(make_graph(0, []))
    assert basic.nodes == 0
    assert basic.components == 0
    assert basic.density == 0.0
    assert degrees.total == []
