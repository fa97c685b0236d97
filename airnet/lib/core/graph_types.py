"""
airnet Type Definitions
=======================

Data classes shared across the airnet library.

Canonical types:
    - ``Airport``, ``Route``, ``Neighbor``   → graph payload (``lib.core.graph``)
    - ``AnalysisConfig``                     → sampling caps and algorithm knobs
    - ``DegreeStats``, ``BasicStats``        → ``lib.analysis.structure``
    - ``CentralityScore``, ``Centralities``  → ``lib.analysis.centrality``
    - ``ConnectivityStats``                  → ``lib.analysis.connectivity``
    - ``CommunityResult``                    → ``lib.analysis.community``
    - ``HubEntry``, ``HubRanking``,
      ``RegionStats``, ``RouteMetrics``      → ``lib.analysis.routes``
    - ``AnalysisResult``                     → ``lib.pipeline.runner``

They live in one module because the analysis modules import each other's
result types and would otherwise form import cycles.
"""

from dataclasses import dataclass, field, asdict, fields
from typing import Any, Dict, List, NamedTuple, Optional, Union

from .utils import (
    BETWEENNESS_MAX_SOURCES,
    CLOSENESS_MAX_SOURCES,
    DIAMETER_MAX_SOURCES,
    EFFICIENCY_MAX_SOURCES,
    REDUNDANCY_MAX_SOURCES,
    PAGERANK_ITERATIONS,
    PAGERANK_DAMPING,
    COMMUNITY_MAX_ROUNDS,
    Logger,
)

log = Logger()

AirportId = Union[int, str]


# =============================================================================
# Graph Payload
# =============================================================================

@dataclass
class Airport:
    """
    An airport (graph node).

    Attributes:
        id: Stable external key from the source data
        index: Dense zero-based position assigned by the graph store
        name, city, country: Descriptive fields
        iata, icao: Airport codes (may be empty)
        latitude, longitude, altitude: Location

    Only ``id`` and ``country`` are read by the analytics; everything else
    is carried through to hub rankings and reports untouched.
    """
    id: AirportId
    index: int = -1
    name: str = ""
    city: str = ""
    country: str = ""
    iata: str = ""
    icao: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    altitude: int = 0

    def label(self) -> str:
        """Short display label: name plus IATA code when present."""
        if self.iata:
            return f"{self.name} ({self.iata})"
        return self.name or str(self.id)

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class Route:
    """A directed flight between two airports, addressed by dense index."""
    source: int
    target: int
    distance: float
    airline: str = ""
    airline_code: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)


class Neighbor(NamedTuple):
    """Outgoing edge view returned by ``RouteGraph.neighbors``."""
    target: int
    distance: float
    route: Route


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class AnalysisConfig:
    """
    Caller-settable knobs for a full analysis run.

    The ``*_sources`` caps bound how many source nodes (first N by index)
    the sampled passes start from. They are the only backpressure the
    engine offers: on graphs larger than a cap, the corresponding metric is
    an approximation.
    """
    betweenness_sources: int = BETWEENNESS_MAX_SOURCES
    closeness_sources: int = CLOSENESS_MAX_SOURCES
    diameter_sources: int = DIAMETER_MAX_SOURCES
    efficiency_sources: int = EFFICIENCY_MAX_SOURCES
    redundancy_sources: int = REDUNDANCY_MAX_SOURCES
    pagerank_iterations: int = PAGERANK_ITERATIONS
    damping: float = PAGERANK_DAMPING
    community_rounds: int = COMMUNITY_MAX_ROUNDS
    workers: int = 1

    def __post_init__(self):
        for f in fields(self):
            if f.name == "damping":
                continue
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{f.name} must be a positive integer, got {value!r}")
        if (isinstance(self.damping, bool) or not isinstance(self.damping, (int, float))
                or not 0.0 < self.damping < 1.0):
            raise ValueError(f"damping must be in (0, 1), got {self.damping!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisConfig":
        """Build a config from a dict, ignoring (and reporting) unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            log.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict:
        return asdict(self)


# =============================================================================
# Analysis Sections
# =============================================================================

@dataclass
class DegreeStats:
    """Per-node degree arrays plus summary values."""
    in_degree: List[int] = field(default_factory=list)
    out_degree: List[int] = field(default_factory=list)
    total: List[int] = field(default_factory=list)
    average: float = 0.0
    maximum: int = 0
    minimum: int = 0
    distribution: Dict[int, int] = field(default_factory=dict)


@dataclass
class BasicStats:
    nodes: int = 0
    edges: int = 0
    density: float = 0.0
    average_degree: float = 0.0
    max_degree: int = 0
    min_degree: int = 0
    components: int = 0
    largest_component: int = 0
    is_directed: bool = True
    degree_distribution: Dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class CentralityScore:
    """A raw centrality value and its max-normalized counterpart."""
    value: float
    normalized: float


@dataclass
class Centralities:
    degree: List[CentralityScore] = field(default_factory=list)
    betweenness: List[CentralityScore] = field(default_factory=list)
    closeness: List[CentralityScore] = field(default_factory=list)
    pagerank: List[CentralityScore] = field(default_factory=list)
    betweenness_sources: int = 0
    closeness_sources: int = 0
    approximate: bool = False

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class ConnectivityStats:
    clustering_coefficient: float = 0.0
    diameter: float = 0.0
    diameter_sources: int = 0
    assortativity: float = 0.0

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class CommunityResult:
    """
    Partition found by the local-moving heuristic.

    Attributes:
        count: Number of communities
        modularity: Newman-Girvan Q of the final partition
        assignments: Community id per node index (dense 0..count-1)
        sizes: Community id -> number of nodes
        rounds: Local-moving rounds actually executed
    """
    count: int = 0
    modularity: float = 0.0
    assignments: List[int] = field(default_factory=list)
    sizes: Dict[int, int] = field(default_factory=dict)
    rounds: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class HubEntry:
    index: int
    airport: Airport
    total_degree: int
    out_degree: int
    in_degree: int
    degree_centrality: float
    pagerank: float
    score: float


@dataclass
class HubRanking:
    top10: List[HubEntry] = field(default_factory=list)
    top50: List[HubEntry] = field(default_factory=list)
    ranking: List[HubEntry] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class RegionStats:
    airports: List[int] = field(default_factory=list)
    internal_routes: int = 0
    external_routes: int = 0


@dataclass
class RouteMetrics:
    """Airline-oriented route metrics."""
    efficiency: float = 0.0
    efficiency_samples: int = 0
    regions: Dict[str, RegionStats] = field(default_factory=dict)
    redundancy: float = 0.0
    redundancy_samples: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)


# =============================================================================
# Aggregate
# =============================================================================

@dataclass(frozen=True)
class AnalysisResult:
    """
    Aggregate of one full analysis run.

    Sections are computed in a fixed order (basic → centralities →
    connectivity → communities → hubs → routes) by a single owner, the
    runner, which assembles the result once every phase has completed.
    The aggregate is frozen: its sections cannot be reassigned afterwards.
    A section left as ``None`` was not computed.

    Example:
        >>> result = run_full_analysis(graph)
        >>> result.basic.components
        1
        >>> result.hubs.top10[0].airport.iata
        'ATL'
    """

    SECTIONS = ("basic", "centralities", "connectivity", "communities", "hubs", "routes")

    basic: Optional[BasicStats] = None
    centralities: Optional[Centralities] = None
    connectivity: Optional[ConnectivityStats] = None
    communities: Optional[CommunityResult] = None
    hubs: Optional[HubRanking] = None
    routes: Optional[RouteMetrics] = None
    config: AnalysisConfig = field(default_factory=AnalysisConfig)
    elapsed_seconds: float = 0.0

    @property
    def complete(self) -> bool:
        return all(getattr(self, name) is not None for name in self.SECTIONS)

    def to_dict(self) -> Dict:
        return asdict(self)


__all__ = [
    "AirportId",
    "Airport",
    "Route",
    "Neighbor",
    "AnalysisConfig",
    "DegreeStats",
    "BasicStats",
    "CentralityScore",
    "Centralities",
    "ConnectivityStats",
    "CommunityResult",
    "HubEntry",
    "HubRanking",
    "RegionStats",
    "RouteMetrics",
    "AnalysisResult",
]
