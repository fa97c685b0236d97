#!/usr/bin/env python3
"""
Route Metric Tests
==================

Validates:
1. Hub score weights and ranking order
2. Route efficiency (shortest / direct, never above 1)
3. Regional grouping of airports and routes
4. Redundancy via the exclusion overlay

Usage:
    pytest airnet/test/test_routes.py -v
"""

import pytest

from airnet.test.helpers import (
    make_graph,
    bidirectional_ring,
    directed_path,
    directed_ring,
    scenario_graph,
    star,
)
from airnet.lib.analysis.centrality import compute_centralities
from airnet.lib.analysis.routes import (
    compute_route_metrics,
    hub_score,
    rank_hubs,
    redundancy_estimate,
    region_for,
    regional_connectivity,
    route_efficiency,
)
from airnet.lib.analysis.structure import compute_degrees
from airnet.lib.core.graph_types import AnalysisConfig


def ranking_for(graph):
    degrees = compute_degrees(graph)
    return rank_hubs(graph, degrees, compute_centralities(graph, degrees))


# =============================================================================
# Hubs
# =============================================================================

def test_hub_score_weights():
    assert hub_score(10, 1.0, 0.5) == pytest.approx(4.0 + 30.0 + 15.0)
    assert hub_score(0, 0.0, 0.0) == 0.0


def test_star_hub_ranks_first():
    ranking = ranking_for(star(4))
    assert ranking.top10[0].index == 0
    assert ranking.top10[0].total_degree == 8
    assert ranking.top10[0].degree_centrality == pytest.approx(1.0)
    assert len(ranking.ranking) == 5


def test_ranking_sorted_and_stable():
    ranking = ranking_for(directed_ring(4))
    scores = [e.score for e in ranking.ranking]
    assert scores == sorted(scores, reverse=True)
    # identical scores keep index order
    assert [e.index for e in ranking.ranking] == [0, 1, 2, 3]


def test_top_lists_are_prefixes():
    ranking = ranking_for(directed_ring(12))
    assert len(ranking.top10) == 10
    assert len(ranking.top50) == 12
    assert ranking.top10 == ranking.ranking[:10]


# =============================================================================
# Efficiency
# =============================================================================

def test_efficiency_of_detoured_route():
    graph = make_graph(3, [(0, 1, 100), (1, 2, 100), (0, 2, 300)])
    efficiency, samples = route_efficiency(graph, max_sources=1)
    # 0 -> 1 is direct (1.0); 0 -> 2 is beaten by 200 km via 1
    assert samples == 2
    assert efficiency == pytest.approx((1.0 + 200 / 300) / 2)


def test_efficiency_scenario():
    efficiency, samples = route_efficiency(scenario_graph())
    assert samples == 4
    assert efficiency == pytest.approx((1.0 + 200 / 300 + 1.0 + 1.0) / 4)
    assert efficiency <= 1.0


def test_efficiency_skips_self_loops():
    assert route_efficiency(make_graph(1, [(0, 0)])) == (0.0, 0)


def test_efficiency_without_routes():
    assert route_efficiency(make_graph(3, [])) == (0.0, 0)


# =============================================================================
# Regions
# =============================================================================

@pytest.mark.parametrize("country,region", [
    ("United States", "North America"),
    ("Germany", "Europe"),
    ("Japan", "Asia"),
    ("Chile", "South America"),
    ("New Zealand", "Oceania"),
    ("Atlantis", "Other"),
    ("", "Other"),
])
def test_region_for(country, region):
    assert region_for(country) == region


def test_regional_connectivity():
    graph = make_graph(3, [(0, 1), (0, 2), (2, 0)],
                       countries=["United States", "Canada", "Germany"])
    regions = regional_connectivity(graph)
    assert sorted(regions) == ["Europe", "North America"]
    assert regions["North America"].airports == [0, 1]
    assert regions["North America"].internal_routes == 1
    assert regions["North America"].external_routes == 1
    assert regions["Europe"].internal_routes == 0
    assert regions["Europe"].external_routes == 1


# =============================================================================
# Redundancy
# =============================================================================

def test_redundancy_scenario():
    # only 0 -> 2 survives removal (via 1)
    redundancy, tested = redundancy_estimate(scenario_graph())
    assert tested == 4
    assert redundancy == pytest.approx(0.25)


@pytest.mark.parametrize("builder,expected", [
    (directed_path, 0.0),
    (directed_ring, 0.0),
    (bidirectional_ring, 1.0),
])
def test_redundancy_shapes(builder, expected):
    redundancy, _ = redundancy_estimate(builder())
    assert redundancy == pytest.approx(expected)


def test_redundancy_masks_parallel_routes_together():
    graph = make_graph(2, [(0, 1), (0, 1)])
    redundancy, tested = redundancy_estimate(graph)
    assert tested == 2
    assert redundancy == 0.0


def test_redundancy_leaves_graph_intact():
    graph = scenario_graph()
    redundancy_estimate(graph)
    assert graph.num_edges == 4
    assert graph.shortest_path(0, 2)[1] == pytest.approx(200.0)


def test_redundancy_sampling_cap():
    _, tested = redundancy_estimate(scenario_graph(), max_sources=1)
    assert tested == 2


# =============================================================================
# Section
# =============================================================================

def test_compute_route_metrics_section():
    metrics = compute_route_metrics(scenario_graph(), AnalysisConfig())
    assert metrics.efficiency == pytest.approx(11 / 12)
    assert metrics.efficiency_samples == 4
    assert metrics.redundancy == pytest.approx(0.25)
    assert metrics.redundancy_samples == 4
    assert list(metrics.regions) == ["Other"]
