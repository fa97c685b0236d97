"""
Small graph builders shared by the test modules.

Airport ids equal their index, so edge lists can be written as index pairs.
"""

import sys
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from airnet.lib.core.graph import RouteGraph  # noqa: E402

TINY_DIR = Path(__file__).resolve().parent / "graphs" / "tiny"
TINY_NODES = TINY_DIR / "nodes.csv"
TINY_EDGES = TINY_DIR / "edges.csv"


def make_graph(n: int, edges: Iterable[Tuple], countries: Sequence[str] = None) -> RouteGraph:
    """
    Build a graph with airports 0..n-1.

    Edges are ``(u, v)`` (distance 1) or ``(u, v, distance)``.
    """
    airports = [
        {"id": i, "name": f"A{i}", "iata": f"A{i:02d}",
         "country": countries[i] if countries else ""}
        for i in range(n)
    ]
    routes = []
    for edge in edges:
        u, v = edge[0], edge[1]
        distance = edge[2] if len(edge) > 2 else 1.0
        routes.append({"source": u, "target": v, "distance": distance})
    return RouteGraph.build(airports, routes)


def bidirectional(edges: Iterable[Tuple[int, int]]) -> List[Tuple[int, int]]:
    out = []
    for u, v in edges:
        out.extend([(u, v), (v, u)])
    return out


def scenario_graph() -> RouteGraph:
    """0→1 (100), 1→2 (100), 0→2 (300), 2→3 (50)."""
    return make_graph(4, [(0, 1, 100), (1, 2, 100), (0, 2, 300), (2, 3, 50)])


def two_triangles() -> RouteGraph:
    """Two fully connected (both directions) triangles, no edges between."""
    return make_graph(6, bidirectional([(0, 1), (1, 2), (0, 2), (3, 4), (4, 5), (3, 5)]))


def directed_path(n: int = 4) -> RouteGraph:
    return make_graph(n, [(i, i + 1) for i in range(n - 1)])


def directed_ring(n: int = 4) -> RouteGraph:
    return make_graph(n, [(i, (i + 1) % n) for i in range(n)])


def bidirectional_ring(n: int = 4) -> RouteGraph:
    return make_graph(n, bidirectional([(i, (i + 1) % n) for i in range(n)]))


def star(leaves: int = 3) -> RouteGraph:
    """Hub 0 connected both ways to each leaf."""
    return make_graph(leaves + 1, bidirectional([(0, i) for i in range(1, leaves + 1)]))
