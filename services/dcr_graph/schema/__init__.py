"""
DCR Graph Schema
================

In-memory schema definitions for DCR graphs.

Node Types:
- Event: A process activity holding its incoming relations

Relationships (stored on the target as back-references):
- CONDITION: source must occur before target
- RESPONSE: target becomes obligatory after source
- INCLUDE: source makes target eligible
- EXCLUDE: source makes target ineligible

Version: 0.1.0
"""

from services.dcr_graph.schema.nodes import Event
from services.dcr_graph.schema.relationships import (
    RELATION_ORDER,
    Relation,
    RelationKind,
)

__all__ = [
    # Nodes
    "Event",
    # Relationships
    "RELATION_ORDER",
    "Relation",
    "RelationKind",
]
