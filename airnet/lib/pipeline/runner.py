#!/usr/bin/env python3
"""
Full analysis run for a route graph.

Phases run in a fixed order, each adding one section to the result:

    1. basic         degrees, density, weak components
    2. centralities  degree, betweenness, closeness, PageRank
    3. connectivity  clustering, sampled diameter, assortativity
    4. communities   local-moving modularity partition
    5. hubs          composite hub ranking (needs phase 2)
    6. routes        efficiency, regional connectivity, redundancy

Each call builds and returns its own AnalysisResult; nothing is shared
between runs.

Standalone usage:
    python -m airnet.lib.pipeline.runner --nodes data/nodes.csv --edges data/edges.csv
    python -m airnet.lib.pipeline.runner --config analysis.json --workers 2 --top 20

Library usage:
    from airnet.lib.pipeline.runner import run_full_analysis
    result = run_full_analysis(graph)
"""

import sys
import time
from typing import List, Optional

from ..analysis.centrality import compute_centralities
from ..analysis.community import detect_communities
from ..analysis.connectivity import compute_connectivity
from ..analysis.routes import compute_route_metrics, rank_hubs
from ..analysis.structure import compute_basic_stats
from ..core.graph import ConstructionError, RouteGraph
from ..core.graph_types import AnalysisConfig, AnalysisResult, HubEntry
from ..core.utils import (
    DEFAULT_EDGES_CSV,
    DEFAULT_NODES_CSV,
    HUB_TOP_SMALL,
    Logger,
    format_count,
    format_duration,
    format_percent,
    load_json,
)
from .loader import load_network

log = Logger()


def load_config(path=None, **overrides) -> AnalysisConfig:
    """
    AnalysisConfig from an optional JSON file plus keyword overrides.

    Overrides set to None are ignored; anything not given keeps its default.
    Raises ValueError when the file does not hold a JSON object or a value
    is invalid.
    """
    data = load_json(path) if path else {}
    if not isinstance(data, dict):
        raise ValueError(f"config file {path} must hold a JSON object, got {type(data).__name__}")
    data.update({k: v for k, v in overrides.items() if v is not None})
    return AnalysisConfig.from_dict(data)


def run_full_analysis(graph: RouteGraph, config: Optional[AnalysisConfig] = None) -> AnalysisResult:
    """
    Run every analysis phase on ``graph`` and return the populated result.

    The graph is only read. Sampling caps and algorithm parameters come
    from ``config`` (defaults when omitted).
    """
    config = config or AnalysisConfig()
    start = time.time()

    log.phase(f"Basic properties ({format_count(graph.num_nodes)} airports, "
              f"{format_count(graph.num_edges)} routes)")
    basic, degrees = compute_basic_stats(graph)

    log.phase("Centralities")
    centralities = compute_centralities(graph, degrees, config)

    log.phase("Connectivity")
    connectivity = compute_connectivity(graph, degrees, config)

    log.phase("Communities")
    communities = detect_communities(graph, config.community_rounds)

    log.phase("Hubs")
    hubs = rank_hubs(graph, degrees, centralities)

    log.phase("Route metrics")
    routes = compute_route_metrics(graph, config)

    elapsed = time.time() - start
    log.success(f"Analysis completed in {format_duration(elapsed)}")
    return AnalysisResult(
        basic=basic,
        centralities=centralities,
        connectivity=connectivity,
        communities=communities,
        hubs=hubs,
        routes=routes,
        config=config,
        elapsed_seconds=elapsed,
    )


# =============================================================================
# Reporting
# =============================================================================

def print_summary(result: AnalysisResult, logger: Logger = None) -> None:
    """Print the headline numbers of a completed run."""
    out = logger or log
    basic = result.basic
    connectivity = result.connectivity

    out.header("NETWORK ANALYSIS SUMMARY")
    out.item("Airports", format_count(basic.nodes))
    out.item("Routes", format_count(basic.edges))
    out.item("Density", format_percent(basic.density))
    out.item("Average degree", f"{basic.average_degree:.2f}")
    out.item("Connected components", basic.components)
    out.item("Largest component", format_count(basic.largest_component))
    out.item("Clustering coefficient", f"{connectivity.clustering_coefficient:.4f}")
    out.item("Diameter", f"{connectivity.diameter:.0f} km")
    out.item("Assortativity", f"{connectivity.assortativity:.4f}")
    out.item("Communities", result.communities.count)
    out.item("Modularity", f"{result.communities.modularity:.4f}")
    out.item("Route efficiency", f"{result.routes.efficiency:.4f}")
    out.item("Redundancy", f"{result.routes.redundancy:.4f}")
    if result.hubs.top10:
        out.item("Principal hub", result.hubs.top10[0].airport.label())
    if result.centralities.approximate:
        out.item("Note", "betweenness/closeness/diameter sampled from the first "
                         f"{result.centralities.betweenness_sources} / "
                         f"{result.centralities.closeness_sources} / "
                         f"{connectivity.diameter_sources} airports")


def print_top_hubs(hubs: List[HubEntry], logger: Logger = None) -> None:
    """Print a ranked hub table: name, IATA code and connection count."""
    out = logger or log
    out.section(f"TOP {len(hubs)} HUB AIRPORTS")
    for rank, hub in enumerate(hubs, 1):
        airport = hub.airport
        code = airport.iata or "-"
        out.item(f"{rank}. {airport.name} ({code})",
                 f"{hub.total_degree} connections, score {hub.score:.1f}")


# =============================================================================
# Main (for standalone usage)
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Analyze an air-route network")
    parser.add_argument("--nodes", default=str(DEFAULT_NODES_CSV), help="Airports CSV")
    parser.add_argument("--edges", default=str(DEFAULT_EDGES_CSV), help="Routes CSV")
    parser.add_argument("--config", help="JSON file with AnalysisConfig overrides")
    parser.add_argument("--betweenness-sources", type=int, help="Betweenness sample cap")
    parser.add_argument("--closeness-sources", type=int, help="Closeness sample cap")
    parser.add_argument("--diameter-sources", type=int, help="Diameter sample cap")
    parser.add_argument("--workers", type=int, help="Threads for the centrality phase")
    parser.add_argument("--top", type=int, default=HUB_TOP_SMALL, help="Hubs to list")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    args = parser.parse_args(argv)

    try:
        config = load_config(
            args.config,
            betweenness_sources=args.betweenness_sources,
            closeness_sources=args.closeness_sources,
            diameter_sources=args.diameter_sources,
            workers=args.workers,
        )
    except ValueError as e:
        log.error(f"Invalid configuration: {e}")
        return 1

    previous_floor = Logger.floor
    if args.quiet:
        Logger.set_floor("WARNING")
    try:
        graph = load_network(args.nodes, args.edges)
        result = run_full_analysis(graph, config)
    except FileNotFoundError as e:
        log.error(f"Input file not found: {e.filename}")
        return 1
    except ConstructionError as e:
        log.error(f"Invalid route network: {e}")
        return 1
    finally:
        Logger.floor = previous_floor

    print_summary(result)
    print_top_hubs(result.hubs.ranking[:max(args.top, 0)])
    return 0


if __name__ == "__main__":
    sys.exit(main())
