"""
Community detection by greedy local moving with modularity gain.

The route graph is read as undirected for community purposes: every
directed route joins its two endpoints with weight 1, so ``m`` is the route
count and an airport's strength is its total degree (sum of strengths is
``2m``). Starting from singletons, each airport is moved to the neighboring
community with the largest modularity gain

    dQ(i -> C) = k_i,C / m  -  k_i * Sigma_C / (2 m^2)

where ``k_i,C`` is the weight between ``i`` and ``C`` and ``Sigma_C`` the
total strength of ``C`` with ``i`` removed. A move happens only if it beats
staying put, so modularity never decreases. This is one level of Louvain
local moving, not an exact optimizer.
"""

from collections import defaultdict
from typing import Dict, List, Sequence

from ..core.graph import RouteGraph
from ..core.graph_types import CommunityResult
from ..core.utils import COMMUNITY_MAX_ROUNDS, Logger

log = Logger()

# Minimum improvement for a move; guards against float ties cycling
_MIN_GAIN = 1e-12


def _undirected_links(graph: RouteGraph) -> List[Dict[int, float]]:
    links: List[Dict[int, float]] = [defaultdict(float) for _ in range(graph.num_nodes)]
    for route in graph.routes():
        if route.source == route.target:
            continue
        links[route.source][route.target] += 1.0
        links[route.target][route.source] += 1.0
    return links


def _strengths(graph: RouteGraph) -> List[int]:
    return [graph.out_degree(i) + graph.in_degree(i) for i in range(graph.num_nodes)]


def relabel(assignments: Sequence[int]) -> List[int]:
    """Map community ids onto 0..k-1 in order of first appearance."""
    mapping: Dict[int, int] = {}
    return [mapping.setdefault(c, len(mapping)) for c in assignments]


def modularity(graph: RouteGraph, assignments: Sequence[int]) -> float:
    """
    Newman-Girvan modularity of a partition.

        Q = sum_c [ L_c / m - (D_c / 2m)^2 ]

    with ``L_c`` the routes inside community ``c`` and ``D_c`` the summed
    total degree of its airports. Computed from the route list and
    per-community totals, no node-pair loop. 0 for a graph without routes.
    """
    m = graph.num_edges
    if m == 0:
        return 0.0

    internal: Dict[int, int] = defaultdict(int)
    for route in graph.routes():
        if assignments[route.source] == assignments[route.target]:
            internal[assignments[route.source]] += 1

    strength: Dict[int, int] = defaultdict(int)
    for node, k in enumerate(_strengths(graph)):
        strength[assignments[node]] += k

    q = 0.0
    for community, total in strength.items():
        q += internal.get(community, 0) / m - (total / (2.0 * m)) ** 2
    return q


def detect_communities(graph: RouteGraph, max_rounds: int = COMMUNITY_MAX_ROUNDS) -> CommunityResult:
    """
    Partition airports into communities by local moving.

    Each round visits airports in index order. Stops after a round without
    moves or after ``max_rounds`` rounds.
    """
    n = graph.num_nodes
    if n == 0:
        return CommunityResult()

    m = float(graph.num_edges)
    community = list(range(n))
    rounds = 0

    if m > 0:
        links = _undirected_links(graph)
        k = _strengths(graph)
        total = [float(s) for s in k]
        two_m_sq = 2.0 * m * m

        while rounds < max_rounds:
            rounds += 1
            moved = 0
            for node in range(n):
                if not links[node]:
                    continue
                current = community[node]
                weight_to: Dict[int, float] = defaultdict(float)
                for other, weight in links[node].items():
                    weight_to[community[other]] += weight

                total[current] -= k[node]
                best = current
                best_gain = weight_to.get(current, 0.0) / m - k[node] * total[current] / two_m_sq
                for candidate, weight in weight_to.items():
                    if candidate == current:
                        continue
                    gain = weight / m - k[node] * total[candidate] / two_m_sq
                    if gain > best_gain + _MIN_GAIN:
                        best, best_gain = candidate, gain
                total[best] += k[node]

                if best != current:
                    community[node] = best
                    moved += 1

            log.debug(f"Community round {rounds}: {moved} moves")
            if not moved:
                break

    assignments = relabel(community)
    sizes: Dict[int, int] = defaultdict(int)
    for c in assignments:
        sizes[c] += 1

    return CommunityResult(
        count=len(sizes),
        modularity=modularity(graph, assignments),
        assignments=assignments,
        sizes=dict(sizes),
        rounds=rounds,
    )


__all__ = [
    "relabel",
    "modularity",
    "detect_communities",
]
