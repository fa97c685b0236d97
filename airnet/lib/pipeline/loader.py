#!/usr/bin/env python3
"""
CSV ingestion for airport / route networks.

Reads the ``nodes.csv`` / ``edges.csv`` pair exported by the route-network
dataset and builds a RouteGraph. Column headers are normalized (surrounding
whitespace and a leading ``#`` are stripped, matching is case-insensitive)
and the usual aliases are accepted:

    nodes: index, id, name, city, country, IATA/FAA | IATA, ICAO,
           latitude, longitude, altitude
    edges: source, target, distance, airline, airline_code

Row policy:
    - airport id missing or not an integer → row position is used
    - coordinate present but not a number   → airport skipped
    - route endpoint not an integer         → route skipped
    - distance missing or <= 0              → route skipped

Empty coordinates read as 0.0. Unparsable ones drop the airport instead of
being coerced to 0, so a typo cannot place an airport at (0, 0) and still
attract routes; the number of dropped rows is logged as a warning.

Standalone usage:
    python -m airnet.lib.pipeline.loader --nodes data/nodes.csv --edges data/edges.csv
"""

import csv
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..core.graph import RouteGraph
from ..core.graph_types import Airport
from ..core.utils import DEFAULT_EDGES_CSV, DEFAULT_NODES_CSV, Logger

log = Logger()

PathLike = Union[str, Path]

NODE_COLUMNS = {
    "id": ("id",),
    "name": ("name",),
    "city": ("city",),
    "country": ("country",),
    "iata": ("iata/faa", "iata"),
    "icao": ("icao",),
    "latitude": ("latitude", "lat"),
    "longitude": ("longitude", "lng", "lon"),
    "altitude": ("altitude",),
}

EDGE_COLUMNS = {
    "source": ("source",),
    "target": ("target",),
    "distance": ("distance",),
    "airline": ("airline",),
    "airline_code": ("airline_code",),
}


def normalize_header(name: str) -> str:
    """``' # source '`` → ``'source'``; lower-cased for alias matching."""
    return name.strip().lstrip("#").strip().lower()


def _read_rows(path: PathLike) -> List[Dict[str, str]]:
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f, skipinitialspace=True)
        rows = []
        for row in reader:
            rows.append({
                normalize_header(k): (v or "").strip()
                for k, v in row.items() if k is not None
            })
        return rows


def _field(row: Dict[str, str], aliases: Tuple[str, ...]) -> str:
    for alias in aliases:
        value = row.get(alias)
        if value:
            return value
    return ""


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        try:
            as_float = float(value)
        except ValueError:
            return None
        return int(as_float) if as_float.is_integer() else None


def _parse_float(value: str, default: Optional[float] = 0.0) -> Optional[float]:
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return None


def load_airports(path: PathLike) -> List[Airport]:
    """Parse the nodes file into Airport records (index assigned later)."""
    airports = []
    skipped = 0
    for position, row in enumerate(_read_rows(path)):
        latitude = _parse_float(_field(row, NODE_COLUMNS["latitude"]))
        longitude = _parse_float(_field(row, NODE_COLUMNS["longitude"]))
        if latitude is None or longitude is None:
            skipped += 1
            continue

        airport_id = _parse_int(_field(row, NODE_COLUMNS["id"]))
        altitude = _parse_int(_field(row, NODE_COLUMNS["altitude"]))
        airports.append(Airport(
            id=position if airport_id is None else airport_id,
            name=_field(row, NODE_COLUMNS["name"]),
            city=_field(row, NODE_COLUMNS["city"]),
            country=_field(row, NODE_COLUMNS["country"]),
            iata=_field(row, NODE_COLUMNS["iata"]),
            icao=_field(row, NODE_COLUMNS["icao"]),
            latitude=latitude,
            longitude=longitude,
            altitude=altitude or 0,
        ))

    if skipped:
        log.warning(f"Skipped {skipped} airports with invalid coordinates in {path}")
    return airports


def load_routes(path: PathLike) -> List[Dict]:
    """
    Parse the edges file into route dicts keyed by airport id.

    Returns dicts rather than Route objects because endpoints are still
    airport ids; RouteGraph.build resolves them to indices.
    """
    routes = []
    skipped = 0
    for row in _read_rows(path):
        source = _parse_int(_field(row, EDGE_COLUMNS["source"]))
        target = _parse_int(_field(row, EDGE_COLUMNS["target"]))
        distance = _parse_float(_field(row, EDGE_COLUMNS["distance"]), default=None)
        if source is None or target is None or distance is None or not distance > 0:
            skipped += 1
            continue
        routes.append({
            "source": source,
            "target": target,
            "distance": distance,
            "airline": _field(row, EDGE_COLUMNS["airline"]),
            "airline_code": _parse_int(_field(row, EDGE_COLUMNS["airline_code"])) or 0,
        })

    if skipped:
        log.warning(f"Skipped {skipped} routes without a usable source/target/distance in {path}")
    return routes


def load_network(nodes_path: PathLike = DEFAULT_NODES_CSV,
                 edges_path: PathLike = DEFAULT_EDGES_CSV) -> RouteGraph:
    """Load both CSV files and build the route graph."""
    airports = load_airports(nodes_path)
    routes = load_routes(edges_path)
    log.info(f"Loaded {len(airports):,} airports and {len(routes):,} routes")
    return RouteGraph.build(airports, routes)


# =============================================================================
# Main (for standalone usage)
# =============================================================================

if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Load an airport/route CSV pair")
    parser.add_argument("--nodes", default=str(DEFAULT_NODES_CSV), help="Airports CSV")
    parser.add_argument("--edges", default=str(DEFAULT_EDGES_CSV), help="Routes CSV")
    args = parser.parse_args()

    graph = load_network(args.nodes, args.edges)
    print(f"{graph.num_nodes:,} airports, {graph.num_edges:,} routes, "
          f"{graph.dropped_routes:,} dropped")
