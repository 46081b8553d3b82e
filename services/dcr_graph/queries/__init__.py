"""
DCR Graph Queries
=================

Read-only views over a materialized event graph.

Modules:
- adjacency: Dense kind-agnostic adjacency matrix
- projections: Bounded per-event neighborhoods

Version: 0.1.0
"""

from services.dcr_graph.queries.adjacency import (
    AdjacencyMatrix,
    build_adjacency_matrix,
)
from services.dcr_graph.queries.projections import (
    all_projections,
    projection,
    projection_ids,
)


__all__ = [
    # Adjacency
    "AdjacencyMatrix",
    "build_adjacency_matrix",
    # Projections
    "all_projections",
    "projection",
    "projection_ids",
]
