"""Traversal kernels and the structural, centrality, connectivity, community and route analyses."""
