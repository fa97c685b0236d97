"""
Centrality suite: degree, betweenness, closeness and PageRank.

Betweenness and closeness are sampled: they start from the first N airports
by index (``AnalysisConfig.betweenness_sources`` / ``closeness_sources``).
On graphs with more airports than the cap, the scores are approximations and
``Centralities.approximate`` is set. All four measures are reported as raw
value plus value divided by the maximum observed.

Usage:
    from airnet.lib.analysis.centrality import compute_centralities
    centralities = compute_centralities(graph, degrees, config)
"""

import math
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

import numpy as np

from ..core.graph import RouteGraph
from ..core.graph_types import AnalysisConfig, CentralityScore, Centralities, DegreeStats
from ..core.utils import (
    BETWEENNESS_MAX_SOURCES,
    CLOSENESS_MAX_SOURCES,
    PAGERANK_DAMPING,
    PAGERANK_ITERATIONS,
    Logger,
)
from .traversal import brandes_single_source, dijkstra_distances

log = Logger()


def normalize_scores(values: Sequence[float]) -> List[CentralityScore]:
    """Pair each value with value / max (0 when the max is not positive)."""
    peak = max(values, default=0.0)
    if peak > 0:
        return [CentralityScore(value=v, normalized=v / peak) for v in values]
    return [CentralityScore(value=v, normalized=0.0) for v in values]


def degree_centrality(degrees: DegreeStats) -> List[CentralityScore]:
    """Total degree, normalized by the busiest airport."""
    return normalize_scores(degrees.total)


def betweenness_centrality(graph: RouteGraph,
                           max_sources: int = BETWEENNESS_MAX_SOURCES) -> List[CentralityScore]:
    """
    Brandes betweenness over hop-count shortest paths.

    Only the first ``max_sources`` airports act as sources, so above that
    size the result is a sampled approximation, not exact betweenness.
    """
    n = graph.num_nodes
    scores = [0.0] * n
    for source in range(min(n, max_sources)):
        delta = brandes_single_source(graph, source)
        for node, dependency in enumerate(delta):
            if node != source:
                scores[node] += dependency
    return normalize_scores(scores)


def closeness_centrality(graph: RouteGraph,
                         max_sources: int = CLOSENESS_MAX_SOURCES) -> List[CentralityScore]:
    """
    Closeness from Dijkstra distances: (reachable - 1) / sum of distances.

    Airports beyond the first ``max_sources`` are not evaluated and score 0.
    """
    n = graph.num_nodes
    scores = [0.0] * n
    for source in range(min(n, max_sources)):
        finite = [d for d in dijkstra_distances(graph, source) if d != math.inf]
        reachable = len(finite) - 1
        total = sum(finite)
        scores[source] = reachable / total if reachable > 0 and total > 0 else 0.0
    return normalize_scores(scores)


def pagerank(graph: RouteGraph, iterations: int = PAGERANK_ITERATIONS,
             damping: float = PAGERANK_DAMPING) -> List[CentralityScore]:
    """
    PageRank by a fixed number of power iterations.

    Every airport receives ``(1 - damping) / n`` per iteration and each
    airport with outgoing routes splits ``damping * rank`` evenly over them.
    Airports without outgoing routes pass nothing on; their share is not
    redistributed, so total mass decays below 1 when such airports exist.
    """
    n = graph.num_nodes
    if n == 0:
        return []

    sources = []
    targets = []
    for route in graph.routes():
        sources.append(route.source)
        targets.append(route.target)
    sources = np.asarray(sources, dtype=np.int64)
    targets = np.asarray(targets, dtype=np.int64)
    out_degree = np.bincount(sources, minlength=n).astype(np.float64)

    rank = np.full(n, 1.0 / n)
    teleport = (1.0 - damping) / n
    for _ in range(iterations):
        updated = np.full(n, teleport)
        if len(sources):
            share = damping * rank[sources] / out_degree[sources]
            np.add.at(updated, targets, share)
        rank = updated

    return normalize_scores(rank.tolist())


def compute_centralities(graph: RouteGraph, degrees: DegreeStats,
                         config: Optional[AnalysisConfig] = None) -> Centralities:
    """
    Centrality section of the analysis.

    With ``config.workers > 1`` betweenness and closeness run concurrently;
    each produces its own list and the section is assembled afterwards.
    """
    config = config or AnalysisConfig()
    n = graph.num_nodes

    if config.workers > 1:
        with ThreadPoolExecutor(max_workers=min(config.workers, 2)) as executor:
            betweenness_future = executor.submit(
                betweenness_centrality, graph, config.betweenness_sources)
            closeness_future = executor.submit(
                closeness_centrality, graph, config.closeness_sources)
            betweenness = betweenness_future.result()
            closeness = closeness_future.result()
    else:
        betweenness = betweenness_centrality(graph, config.betweenness_sources)
        closeness = closeness_centrality(graph, config.closeness_sources)

    approximate = n > config.betweenness_sources or n > config.closeness_sources
    if approximate:
        log.debug(f"Sampled centralities: {min(n, config.betweenness_sources)} betweenness, "
                  f"{min(n, config.closeness_sources)} closeness sources of {n}")

    return Centralities(
        degree=degree_centrality(degrees),
        betweenness=betweenness,
        closeness=closeness,
        pagerank=pagerank(graph, config.pagerank_iterations, config.damping),
        betweenness_sources=min(n, config.betweenness_sources),
        closeness_sources=min(n, config.closeness_sources),
        approximate=approximate,
    )


__all__ = [
    "normalize_scores",
    "degree_centrality",
    "betweenness_centrality",
    "closeness_centrality",
    "pagerank",
    "compute_centralities",
]
