"""
Projection Engine
=================

Bounded structural neighborhood of an event.

The projection of ``e`` is the concatenation of ``e``'s conditions,
responses, includes and excludes, followed by the includes and excludes of
every event in that first-hop list. Only include/exclude relations are
followed at the second hop. Results are not deduplicated, so an event may
appear several times, ``e`` itself included when the graph has cycles.

Version: 0.1.0
"""

from services.dcr_graph.ingestion.registry import EventRegistry
from services.dcr_graph.schema.nodes import Event


def projection(event: Event) -> list[Event]:
    """
    Compute the projection of a single event.

    Args:
        event: Event of a materialized graph

    Returns:
        First-hop neighbors in kind order, then each neighbor's includes
        and excludes
    """
    first_hop = list(event.neighbors())

    result = list(first_hop)
    for neighbor in first_hop:
        result.extend(neighbor.includes)
        result.extend(neighbor.excludes)

    return result


def all_projections(registry: EventRegistry) -> dict[str, list[Event]]:
    """Compute the projection of every event in a registry."""
    return {event.id: projection(event) for event in registry.events()}


def projection_ids(event: Event) -> list[str]:
    """Identifiers of an event's projection, in projection order."""
    return [related.id for related in projection(event)]
