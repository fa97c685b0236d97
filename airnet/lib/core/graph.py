#!/usr/bin/env python3
"""
Route graph store for airnet.

This module provides:
- RouteGraph: airports (nodes) and directed flights (edges) with forward
  and reverse adjacency, built once and read-only afterwards
- Point-to-point shortest path (Dijkstra over route distance)
- ConstructionError for input that no analysis can work with

Construction policy:
    - duplicate airport ids                → ConstructionError
    - non-positive / non-finite distance   → ConstructionError
    - route referencing an unknown airport → dropped (counted, one warning)

Library usage:
    from airnet.lib.core.graph import RouteGraph
    graph = RouteGraph.build(airports, routes)
    path, km = graph.shortest_path(0, 42)
"""

import heapq
import math
import numbers
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .graph_types import Airport, AirportId, Neighbor, Route
from .utils import Logger

log = Logger()

INF = float("inf")

AirportLike = Union[Airport, Mapping[str, Any]]
RouteLike = Union[Route, Mapping[str, Any]]

# Accepted field aliases for dict input (first match wins)
_AIRPORT_FIELDS = {
    "name": ("name", "nombre"),
    "city": ("city", "ciudad"),
    "country": ("country", "pais"),
    "iata": ("iata", "IATA", "IATA/FAA"),
    "icao": ("icao", "ICAO"),
    "latitude": ("latitude", "lat"),
    "longitude": ("longitude", "lng", "lon"),
    "altitude": ("altitude", "altitud"),
}
_ROUTE_SOURCE = ("source", "origin", "origen")
_ROUTE_TARGET = ("target", "destination", "destino")
_ROUTE_DISTANCE = ("distance", "distancia")
_ROUTE_AIRLINE = ("airline", "aerolinea")
_ROUTE_AIRLINE_CODE = ("airline_code", "codigoAerolinea")


class ConstructionError(ValueError):
    """Raised when airports/routes cannot form a valid route graph."""
    pass


def _first(record: Mapping[str, Any], keys: Tuple[str, ...], default: Any = None) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


def _as_airport(record: AirportLike, index: int) -> Airport:
    if isinstance(record, Airport):
        return Airport(
            id=record.id, index=index, name=record.name, city=record.city,
            country=record.country, iata=record.iata, icao=record.icao,
            latitude=record.latitude, longitude=record.longitude,
            altitude=record.altitude,
        )
    if "id" not in record or record["id"] is None:
        raise ConstructionError(f"Airport record at position {index} has no id")
    kwargs = {name: _first(record, keys) for name, keys in _AIRPORT_FIELDS.items()}
    return Airport(id=record["id"], index=index,
                   **{k: v for k, v in kwargs.items() if v is not None})


def _route_fields(record: RouteLike) -> Tuple[AirportId, AirportId, Any, str, int]:
    if isinstance(record, Route):
        return record.source, record.target, record.distance, record.airline, record.airline_code
    return (
        _first(record, _ROUTE_SOURCE),
        _first(record, _ROUTE_TARGET),
        _first(record, _ROUTE_DISTANCE),
        _first(record, _ROUTE_AIRLINE, ""),
        _first(record, _ROUTE_AIRLINE_CODE, 0),
    )


def _valid_distance(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(float(value)) and value > 0


class RouteGraph:
    """
    Directed, weighted air-route graph.

    Airports are addressed by a dense index in ``[0, num_nodes)``; the
    ``id -> index`` map and both adjacency structures are built once in
    ``build`` and never mutated. Analyses hold a reference and only read.

    Attributes:
        airports: Airport per index
        dropped_routes: Routes skipped because an endpoint id was unknown
    """

    def __init__(self, airports: List[Airport], adjacency: List[List[Neighbor]],
                 index_by_id: Dict[AirportId, int], dropped_routes: int = 0):
        self.airports = airports
        self._adj = [tuple(neighbors) for neighbors in adjacency]
        self._index_by_id = index_by_id
        self.dropped_routes = dropped_routes

        reverse: List[List[int]] = [[] for _ in airports]
        for source, neighbors in enumerate(self._adj):
            for nb in neighbors:
                reverse[nb.target].append(source)
        self._radj = [tuple(preds) for preds in reverse]
        self._num_edges = sum(len(neighbors) for neighbors in self._adj)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def build(cls, airports: Iterable[AirportLike], routes: Iterable[RouteLike]) -> "RouteGraph":
        """
        Build a graph from airport and route records in O(V + E).

        Routes refer to airports by ``id`` (not index). Either dataclass
        instances or plain dicts are accepted.

        Raises:
            ConstructionError: duplicate airport id, airport without id, or a
                route distance that is not a positive finite number.
        """
        nodes: List[Airport] = []
        index_by_id: Dict[AirportId, int] = {}
        for position, record in enumerate(airports):
            airport = _as_airport(record, position)
            if airport.id in index_by_id:
                raise ConstructionError(f"Duplicate airport id: {airport.id!r}")
            index_by_id[airport.id] = position
            nodes.append(airport)

        adjacency: List[List[Neighbor]] = [[] for _ in nodes]
        dropped = 0
        for record in routes:
            source_id, target_id, distance, airline, code = _route_fields(record)
            if not _valid_distance(distance):
                raise ConstructionError(
                    f"Route {source_id!r} -> {target_id!r} has invalid distance {distance!r}"
                )
            source = index_by_id.get(source_id)
            target = index_by_id.get(target_id)
            if source is None or target is None:
                dropped += 1
                continue
            route = Route(source=source, target=target, distance=float(distance),
                          airline=airline or "", airline_code=code or 0)
            adjacency[source].append(Neighbor(target, route.distance, route))

        if dropped:
            log.warning(f"Dropped {dropped} routes referencing unknown airports")
        log.debug(f"Built route graph: {len(nodes)} airports, "
                  f"{sum(len(a) for a in adjacency)} routes")
        return cls(nodes, adjacency, index_by_id, dropped)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def num_nodes(self) -> int:
        return len(self.airports)

    @property
    def num_edges(self) -> int:
        return self._num_edges

    def __len__(self) -> int:
        return len(self.airports)

    def __repr__(self) -> str:
        return f"RouteGraph(nodes={self.num_nodes}, edges={self.num_edges})"

    def has_index(self, index: int) -> bool:
        return isinstance(index, numbers.Integral) and 0 <= index < len(self.airports)

    def index_of(self, airport_id: AirportId) -> Optional[int]:
        """Dense index for an airport id, or None if unknown."""
        return self._index_by_id.get(airport_id)

    def airport(self, index: int) -> Airport:
        return self.airports[index]

    def neighbors(self, index: int) -> Tuple[Neighbor, ...]:
        """Outgoing routes of ``index``; empty for unknown or dangling nodes."""
        if not self.has_index(index):
            return ()
        return self._adj[index]

    def predecessors(self, index: int) -> Tuple[int, ...]:
        """Source index of every route arriving at ``index`` (with repeats)."""
        if not self.has_index(index):
            return ()
        return self._radj[index]

    def out_degree(self, index: int) -> int:
        return len(self.neighbors(index))

    def in_degree(self, index: int) -> int:
        return len(self.predecessors(index))

    def routes(self) -> Iterator[Route]:
        """Iterate every route in source-index order."""
        for neighbors in self._adj:
            for nb in neighbors:
                yield nb.route

    def shortest_path(self, source: int, target: int) -> Tuple[List[int], float]:
        """
        Shortest route between two airports by total distance.

        Returns:
            (path, distance): node indices from source to target inclusive and
            the summed distance, or ``([], inf)`` when target is unreachable
            or either index is out of range. ``shortest_path(a, a)`` is
            ``([a], 0.0)``.
        """
        if not (self.has_index(source) and self.has_index(target)):
            return [], INF
        source, target = int(source), int(target)

        dist = {source: 0.0}
        prev: Dict[int, int] = {}
        done = set()
        heap = [(0.0, source)]

        while heap:
            d, u = heapq.heappop(heap)
            if u in done:
                continue
            if u == target:
                break
            done.add(u)
            for nb in self._adj[u]:
                alt = d + nb.distance
                if alt < dist.get(nb.target, INF):
                    dist[nb.target] = alt
                    prev[nb.target] = u
                    heapq.heappush(heap, (alt, nb.target))

        if target not in dist:
            return [], INF

        path = [target]
        while path[-1] != source:
            path.append(prev[path[-1]])
        path.reverse()
        return path, dist[target]


def build_graph(airports: Iterable[AirportLike], routes: Iterable[RouteLike]) -> RouteGraph:
    """Shorthand for ``RouteGraph.build``."""
    return RouteGraph.build(airports, routes)


__all__ = [
    "ConstructionError",
    "RouteGraph",
    "build_graph",
    "INF",
]
