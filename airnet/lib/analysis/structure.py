"""
Structural metrics: degrees, density and weakly connected components.

Usage:
    from airnet.lib.analysis.structure import compute_basic_stats
    basic, degrees = compute_basic_stats(graph)
"""

from collections import Counter
from typing import List, Tuple

import numpy as np

from ..core.graph import RouteGraph
from ..core.graph_types import BasicStats, DegreeStats
from .traversal import weak_component


def compute_degrees(graph: RouteGraph) -> DegreeStats:
    """
    In, out and total degree of every airport.

    One pass over the adjacency: out-degree is the length of each neighbor
    list, in-degree is tallied into a count table as each route is seen.
    Parallel routes and self-loops are each counted.
    """
    n = graph.num_nodes
    if n == 0:
        return DegreeStats()

    out_degree = np.zeros(n, dtype=np.int64)
    in_degree = np.zeros(n, dtype=np.int64)
    for u in range(n):
        neighbors = graph.neighbors(u)
        out_degree[u] = len(neighbors)
        for nb in neighbors:
            in_degree[nb.target] += 1
    total = out_degree + in_degree

    distribution = Counter(total.tolist())
    return DegreeStats(
        in_degree=in_degree.tolist(),
        out_degree=out_degree.tolist(),
        total=total.tolist(),
        average=float(total.mean()),
        maximum=int(total.max()),
        minimum=int(total.min()),
        distribution=dict(sorted(distribution.items())),
    )


def compute_density(num_nodes: int, num_edges: int) -> float:
    """
    Directed density E / (V (V - 1)); 0 when V <= 1.

    Capped at 1.0: parallel routes and self-loops can push the raw ratio of
    a multigraph past the simple-graph maximum.
    """
    if num_nodes <= 1:
        return 0.0
    return min(1.0, num_edges / (num_nodes * (num_nodes - 1)))


def find_components(graph: RouteGraph) -> Tuple[int, int, List[List[int]]]:
    """
    Weakly connected components (route direction ignored).

    Returns:
        (count, size of the largest component, member lists in discovery order)
    """
    visited = [False] * graph.num_nodes
    components = []
    largest = 0
    for node in range(graph.num_nodes):
        if visited[node]:
            continue
        component = weak_component(graph, node, visited)
        components.append(component)
        largest = max(largest, len(component))
    return len(components), largest, components


def compute_basic_stats(graph: RouteGraph) -> Tuple[BasicStats, DegreeStats]:
    """Basic section of the analysis plus the degree arrays later phases reuse."""
    degrees = compute_degrees(graph)
    count, largest, _ = find_components(graph)
    basic = BasicStats(
        nodes=graph.num_nodes,
        edges=graph.num_edges,
        density=compute_density(graph.num_nodes, graph.num_edges),
        average_degree=degrees.average,
        max_degree=degrees.maximum,
        min_degree=degrees.minimum,
        components=count,
        largest_component=largest,
        is_directed=True,
        degree_distribution=dict(degrees.distribution),
    )
    return basic, degrees


__all__ = [
    "compute_degrees",
    "compute_density",
    "find_components",
    "compute_basic_stats",
]
