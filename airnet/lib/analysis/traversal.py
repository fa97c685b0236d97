"""
Traversal kernels shared by the airnet analyses.

    - weak_component:          DFS over forward + reverse adjacency
    - dijkstra_distances:      single-source weighted distances (heap based)
    - brandes_single_source:   unweighted BFS with path counting and
                               dependency accumulation for betweenness
    - is_reachable:            BFS reachability with an edge exclusion overlay

All kernels only read the graph. Per-call state lives in local lists, so
independent calls may run on different threads.
"""

import heapq
from collections import deque
from typing import AbstractSet, List, Optional, Tuple

from ..core.graph import INF, RouteGraph

EdgeKey = Tuple[int, int]


def weak_component(graph: RouteGraph, start: int, visited: List[bool]) -> List[int]:
    """
    Collect the weakly connected component containing ``start``.

    Marks every member in ``visited``; nodes already marked are not
    expanded again, so a full pass over all start nodes is O(V + E).
    """
    component = []
    stack = [start]
    while stack:
        node = stack.pop()
        if visited[node]:
            continue
        visited[node] = True
        component.append(node)
        for nb in graph.neighbors(node):
            if not visited[nb.target]:
                stack.append(nb.target)
        for pred in graph.predecessors(node):
            if not visited[pred]:
                stack.append(pred)
    return component


def dijkstra_distances(graph: RouteGraph, source: int,
                       excluded: Optional[AbstractSet[EdgeKey]] = None) -> List[float]:
    """
    Distances from ``source`` to every node (``inf`` when unreachable).

    Args:
        graph: Route graph
        source: Source index
        excluded: Optional set of ``(u, v)`` pairs whose routes are ignored

    Returns:
        List of length ``num_nodes``
    """
    n = graph.num_nodes
    dist = [INF] * n
    if not graph.has_index(source):
        return dist

    dist[source] = 0.0
    done = [False] * n
    heap = [(0.0, source)]
    while heap:
        d, u = heapq.heappop(heap)
        if done[u]:
            continue
        done[u] = True
        for nb in graph.neighbors(u):
            if excluded and (u, nb.target) in excluded:
                continue
            alt = d + nb.distance
            if alt < dist[nb.target]:
                dist[nb.target] = alt
                heapq.heappush(heap, (alt, nb.target))
    return dist


def brandes_single_source(graph: RouteGraph, source: int) -> List[float]:
    """
    One source step of Brandes' betweenness algorithm (hop distances).

    Counts shortest paths ``sigma`` from ``source`` with a BFS, then walks
    the BFS order backwards accumulating ``delta[v] += sigma[v] / sigma[w]
    * (1 + delta[w])`` over predecessors. Parallel routes count as separate
    shortest paths.

    Returns:
        Dependency of ``source`` on every node; ``delta[source]`` is 0.
    """
    n = graph.num_nodes
    delta = [0.0] * n
    if not graph.has_index(source):
        return delta

    sigma = [0] * n
    depth = [-1] * n
    preds: List[List[int]] = [[] for _ in range(n)]
    order = []

    sigma[source] = 1
    depth[source] = 0
    queue = deque([source])
    while queue:
        v = queue.popleft()
        order.append(v)
        for nb in graph.neighbors(v):
            w = nb.target
            if depth[w] < 0:
                depth[w] = depth[v] + 1
                queue.append(w)
            if depth[w] == depth[v] + 1:
                sigma[w] += sigma[v]
                preds[w].append(v)

    for w in reversed(order):
        coeff = (1.0 + delta[w]) / sigma[w]
        for v in preds[w]:
            delta[v] += sigma[v] * coeff
    delta[source] = 0.0
    return delta


def is_reachable(graph: RouteGraph, source: int, target: int,
                 excluded: Optional[AbstractSet[EdgeKey]] = None) -> bool:
    """
    True if ``target`` can be reached from ``source`` along directed routes,
    skipping every route whose ``(u, v)`` pair is in ``excluded``.
    """
    if not (graph.has_index(source) and graph.has_index(target)):
        return False
    if source == target:
        return True

    seen = {source}
    queue = deque([source])
    while queue:
        u = queue.popleft()
        for nb in graph.neighbors(u):
            v = nb.target
            if v in seen or (excluded and (u, v) in excluded):
                continue
            if v == target:
                return True
            seen.add(v)
            queue.append(v)
    return False


__all__ = [
    "weak_component",
    "dijkstra_distances",
    "brandes_single_source",
    "is_reachable",
]
