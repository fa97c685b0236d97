"""
airnet Library - Graph analytics for air-route networks.

This library provides functions for:
- Building a directed, distance-weighted route graph from airports and flights
- Shortest-path and neighbor queries on that graph
- Degree statistics, density and weakly connected components
- Degree, betweenness, closeness and PageRank centrality
- Clustering coefficient, sampled diameter and degree assortativity
- Community detection by modularity-gain local moving
- Hub ranking, route efficiency, regional connectivity and redundancy
- Loading the nodes.csv / edges.csv pair and printing an analysis report

**Module Overview:**

Sub-packages:
- `core/`:     Graph store, data types, constants, logging
  - `utils`:            Defaults, region table, Logger, JSON and formatting helpers
  - `graph_types`:      Data classes (Airport, Route, AnalysisConfig, AnalysisResult, ...)
  - `graph`:            RouteGraph store and ConstructionError
- `analysis/`: Graph algorithms
  - `traversal`:        Weak-component DFS, Dijkstra, Brandes step, reachability
  - `structure`:        Degrees, density, components
  - `centrality`:       Degree, betweenness, closeness, PageRank
  - `connectivity`:     Clustering, diameter, assortativity
  - `community`:        Local-moving communities and modularity
  - `routes`:           Hubs, efficiency, regions, redundancy
- `pipeline/`: Input and orchestration
  - `loader`:           CSV ingestion with header normalization
  - `runner`:           run_full_analysis, summary report, CLI

**Standalone Usage:**
    python -m airnet.lib.pipeline.runner --nodes data/nodes.csv --edges data/edges.csv
    python -m airnet.lib.pipeline.loader --nodes data/nodes.csv --edges data/edges.csv
    python -m airnet.lib.core.utils --defaults

**Library Usage:**
    from airnet.lib import RouteGraph, run_full_analysis
    graph = RouteGraph.build(airports, routes)
    path, km = graph.shortest_path(0, 5)
    result = run_full_analysis(graph)
    print(result.hubs.top10[0].airport.name)
"""

__version__ = "1.0.0"
__all__ = [
    # Sub-packages
    "core", "analysis", "pipeline",
    # Graph store
    "RouteGraph", "ConstructionError", "build_graph",
    # Types
    "Airport", "Route", "Neighbor", "AnalysisConfig", "AnalysisResult",
    # Entry points
    "run_full_analysis", "load_network",
    # Logging
    "Logger",
]

# =============================================================================
# Core
# =============================================================================
from .core.utils import Logger
from .core.graph import (
    RouteGraph,
    ConstructionError,
    build_graph,
)
from .core.graph_types import (
    Airport,
    Route,
    Neighbor,
    AnalysisConfig,
    AnalysisResult,
)

# =============================================================================
# Pipeline
# =============================================================================
from .pipeline.loader import load_network
from .pipeline.runner import run_full_analysis
