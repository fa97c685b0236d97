"""
airnet Test Suite

Test modules:
- test_graph: RouteGraph construction policy and queries
- test_traversal: traversal kernels
- test_structure: degrees, density, components
- test_centrality: degree, betweenness, closeness, PageRank
- test_connectivity: clustering, diameter, assortativity
- test_community: local-moving communities and modularity
- test_routes: hubs, efficiency, regions, redundancy
- test_loader: CSV ingestion
- test_runner: full analysis, config and CLI

Usage:
    pytest airnet/test -v
    pytest airnet/test/test_community.py -v
"""
