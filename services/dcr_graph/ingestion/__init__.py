"""
Graph Ingestion Module
======================

Decodes constraint documents and materializes them into an in-memory
event graph.

Version: 0.1.0
"""

from services.dcr_graph.ingestion.decoder import (
    DecodedRelations,
    decode_relations,
)
from services.dcr_graph.ingestion.materializer import (
    RelationMaterializer,
    materialize,
    parse_constraints,
)
from services.dcr_graph.ingestion.registry import EventRegistry


__all__ = [
    "DecodedRelations",
    "EventRegistry",
    "RelationMaterializer",
    "decode_relations",
    "materialize",
    "parse_constraints",
]
