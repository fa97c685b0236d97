"""
Connectivity metrics: clustering coefficient, sampled diameter and degree
assortativity.
"""

import math
from typing import List, Optional, Sequence

import numpy as np

from ..core.graph import RouteGraph
from ..core.graph_types import AnalysisConfig, ConnectivityStats, DegreeStats
from ..core.utils import DIAMETER_MAX_SOURCES
from .traversal import dijkstra_distances

# Denominators below this are treated as zero variance
_EPSILON = 1e-12


def local_clustering(graph: RouteGraph) -> List[Optional[float]]:
    """
    Local clustering coefficient per airport.

    The neighborhood of an airport is the set of distinct destinations it
    serves (itself excluded). A pair of neighbors is closed when a route
    exists between them in either direction. Airports with fewer than two
    neighbors get ``None``.
    """
    out_sets = [
        {nb.target for nb in graph.neighbors(u) if nb.target != u}
        for u in range(graph.num_nodes)
    ]

    coefficients: List[Optional[float]] = []
    for u, neighbors in enumerate(out_sets):
        k = len(neighbors)
        if k < 2:
            coefficients.append(None)
            continue
        ordered = sorted(neighbors)
        closed = 0
        for i, a in enumerate(ordered):
            for b in ordered[i + 1:]:
                if b in out_sets[a] or a in out_sets[b]:
                    closed += 1
        coefficients.append(closed / (k * (k - 1) / 2))
    return coefficients


def clustering_coefficient(graph: RouteGraph) -> float:
    """Mean local clustering over airports with at least two neighbors."""
    values = [c for c in local_clustering(graph) if c is not None]
    return sum(values) / len(values) if values else 0.0


def estimate_diameter(graph: RouteGraph, max_sources: int = DIAMETER_MAX_SOURCES) -> float:
    """
    Largest finite shortest-path distance seen from the first
    ``max_sources`` airports.

    A lower bound on the true diameter whenever the graph has more airports
    than the cap.
    """
    diameter = 0.0
    for source in range(min(graph.num_nodes, max_sources)):
        farthest = max((d for d in dijkstra_distances(graph, source) if d != math.inf),
                       default=0.0)
        diameter = max(diameter, farthest)
    return diameter


def degree_assortativity(graph: RouteGraph, total_degrees: Sequence[int]) -> float:
    """
    Newman degree assortativity over all directed routes.

    Uses the total degree of both endpoints of every route:

        r = (<k_i k_j> - <(k_i + k_j)/2>^2) / (<(k_i^2 + k_j^2)/2> - <(k_i + k_j)/2>^2)

    Returns 0 with no routes or when the denominator vanishes.
    """
    if graph.num_edges == 0:
        return 0.0

    degrees = np.asarray(total_degrees, dtype=np.float64)
    sources = np.fromiter((r.source for r in graph.routes()), dtype=np.int64,
                          count=graph.num_edges)
    targets = np.fromiter((r.target for r in graph.routes()), dtype=np.int64,
                          count=graph.num_edges)
    ki = degrees[sources]
    kj = degrees[targets]

    product = float(np.mean(ki * kj))
    mean_sq = float(np.mean((ki + kj) / 2.0)) ** 2
    second = float(np.mean((ki * ki + kj * kj) / 2.0))

    denominator = second - mean_sq
    if abs(denominator) < _EPSILON:
        return 0.0
    return (product - mean_sq) / denominator


def compute_connectivity(graph: RouteGraph, degrees: DegreeStats,
                         config: Optional[AnalysisConfig] = None) -> ConnectivityStats:
    """Connectivity section of the analysis."""
    config = config or AnalysisConfig()
    return ConnectivityStats(
        clustering_coefficient=clustering_coefficient(graph),
        diameter=estimate_diameter(graph, config.diameter_sources),
        diameter_sources=min(graph.num_nodes, config.diameter_sources),
        assortativity=degree_assortativity(graph, degrees.total),
    )


__all__ = [
    "local_clustering",
    "clustering_coefficient",
    "estimate_diameter",
    "degree_assortativity",
    "compute_connectivity",
]
