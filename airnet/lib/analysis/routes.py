"""
Airline-oriented metrics built on top of the structural and centrality
results.

This module provides:
- Hub ranking (composite of raw degree, degree centrality and PageRank)
- Route efficiency: shortest distance vs. direct distance between the same
  airports
- Regional connectivity: routes internal/external to each region
- Redundancy estimate: share of routes whose endpoints stay connected when
  the route is taken out
"""

import math
from typing import Dict, Optional, Tuple

from ..core.graph import RouteGraph
from ..core.graph_types import (
    AnalysisConfig,
    Centralities,
    DegreeStats,
    HubEntry,
    HubRanking,
    RegionStats,
    RouteMetrics,
)
from ..core.utils import (
    COUNTRY_REGIONS,
    EFFICIENCY_MAX_SOURCES,
    HUB_TOP_LARGE,
    HUB_TOP_SMALL,
    HUB_WEIGHT_CENTRALITY,
    HUB_WEIGHT_DEGREE,
    HUB_WEIGHT_PAGERANK,
    REDUNDANCY_MAX_SOURCES,
    REGION_OTHER,
)
from .traversal import dijkstra_distances, is_reachable


# =============================================================================
# Hubs
# =============================================================================

def hub_score(total_degree: int, degree_normalized: float, pagerank_normalized: float) -> float:
    return (total_degree * HUB_WEIGHT_DEGREE
            + degree_normalized * 100 * HUB_WEIGHT_CENTRALITY
            + pagerank_normalized * 100 * HUB_WEIGHT_PAGERANK)


def rank_hubs(graph: RouteGraph, degrees: DegreeStats, centralities: Centralities) -> HubRanking:
    """
    Rank every airport by hub score, highest first.

    Ties keep index order. Requires the degree and PageRank centralities
    of the same run.
    """
    entries = []
    for i in range(graph.num_nodes):
        degree_norm = centralities.degree[i].normalized
        pagerank_norm = centralities.pagerank[i].normalized
        entries.append(HubEntry(
            index=i,
            airport=graph.airport(i),
            total_degree=degrees.total[i],
            out_degree=degrees.out_degree[i],
            in_degree=degrees.in_degree[i],
            degree_centrality=degree_norm,
            pagerank=pagerank_norm,
            score=hub_score(degrees.total[i], degree_norm, pagerank_norm),
        ))

    entries.sort(key=lambda e: e.score, reverse=True)
    return HubRanking(
        top10=entries[:HUB_TOP_SMALL],
        top50=entries[:HUB_TOP_LARGE],
        ranking=entries,
    )


# =============================================================================
# Route Efficiency
# =============================================================================

def route_efficiency(graph: RouteGraph, max_sources: int = EFFICIENCY_MAX_SOURCES) -> Tuple[float, int]:
    """
    Mean of shortest / direct distance over the routes of the first
    ``max_sources`` airports.

    Each ratio is at most 1 and equals 1 when the direct route is itself a
    shortest path; a 300 km route beaten by a 200 km connection scores
    0.667. One Dijkstra run per source airport serves all of its routes.
    Self-loops are skipped.

    Returns:
        (mean efficiency, number of routes averaged)
    """
    total = 0.0
    samples = 0
    for source in range(min(graph.num_nodes, max_sources)):
        neighbors = graph.neighbors(source)
        if not neighbors:
            continue
        dist = dijkstra_distances(graph, source)
        for nb in neighbors:
            if nb.target == source:
                continue
            shortest = dist[nb.target]
            if shortest == math.inf or shortest <= 0:
                continue
            total += shortest / nb.distance
            samples += 1
    return (total / samples if samples else 0.0), samples


# =============================================================================
# Regional Connectivity
# =============================================================================

def region_for(country: str) -> str:
    """Region of a country, ``"Other"`` for anything outside the table."""
    return COUNTRY_REGIONS.get(country, REGION_OTHER)


def regional_connectivity(graph: RouteGraph) -> Dict[str, RegionStats]:
    """
    Airports per region and how many of their routes stay inside it.

    A route counts toward its source airport's region: internal when the
    destination is in the same region, external otherwise.
    """
    region_of = [region_for(a.country) for a in graph.airports]
    regions: Dict[str, RegionStats] = {}
    for index, region in enumerate(region_of):
        regions.setdefault(region, RegionStats()).airports.append(index)

    for route in graph.routes():
        stats = regions[region_of[route.source]]
        if region_of[route.target] == region_of[route.source]:
            stats.internal_routes += 1
        else:
            stats.external_routes += 1
    return regions


# =============================================================================
# Redundancy
# =============================================================================

def redundancy_estimate(graph: RouteGraph, max_sources: int = REDUNDANCY_MAX_SOURCES) -> Tuple[float, int]:
    """
    Fraction of sampled routes whose endpoints remain connected without them.

    For each route leaving the first ``max_sources`` airports, all routes
    between the same ordered pair are masked with an exclusion overlay and
    reachability is re-tested. The graph itself is never modified.

    Returns:
        (redundancy fraction, number of routes tested)
    """
    redundant = 0
    tested = 0
    for source in range(min(graph.num_nodes, max_sources)):
        for nb in graph.neighbors(source):
            excluded = {(source, nb.target)}
            if is_reachable(graph, source, nb.target, excluded):
                redundant += 1
            tested += 1
    return (redundant / tested if tested else 0.0), tested


# =============================================================================
# Section
# =============================================================================

def compute_route_metrics(graph: RouteGraph,
                          config: Optional[AnalysisConfig] = None) -> RouteMetrics:
    """Route-metrics section of the analysis."""
    config = config or AnalysisConfig()
    efficiency, efficiency_samples = route_efficiency(graph, config.efficiency_sources)
    redundancy, redundancy_samples = redundancy_estimate(graph, config.redundancy_sources)
    return RouteMetrics(
        efficiency=efficiency,
        efficiency_samples=efficiency_samples,
        regions=regional_connectivity(graph),
        redundancy=redundancy,
        redundancy_samples=redundancy_samples,
    )


__all__ = [
    "hub_score",
    "rank_hubs",
    "route_efficiency",
    "region_for",
    "regional_connectivity",
    "redundancy_estimate",
    "compute_route_metrics",
]
