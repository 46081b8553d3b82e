"""
Graph Operations Routes
=======================

API endpoints exposing the structural views of a DCR graph.

Every request carries its own constraint document (XML body); the graph
is built for that request only and discarded afterwards.

Version: 0.1.0
"""

import asyncio
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from shared.config import settings
from shared.config.settings import RepositorySettings
from shared.exceptions import DecodeError, RepositoryError
from shared.logging import bind_context, clear_context, get_logger
from shared.repository import DCRRepositoryClient

from services.dcr_graph.ingestion import EventRegistry, parse_constraints
from services.dcr_graph.queries import (
    all_projections,
    build_adjacency_matrix,
    projection_ids,
)
from services.dcr_graph.schema import RELATION_ORDER, Event


logger = get_logger(__name__)

router = APIRouter()


# ============================================================================
# Models
# ============================================================================


class GraphSummary(BaseModel):
    """Counts describing a parsed graph."""

    event_count: int = 0
    relation_count: int = 0
    relations_by_kind: dict[str, int] = Field(default_factory=dict)
    event_ids: list[str] = Field(default_factory=list)


class AdjacencyResponse(BaseModel):
    """Adjacency matrix of a parsed graph."""

    event_ids: list[str]
    matrix: list[list[int]]
    simulation_id: str | None = None


class EventView(BaseModel):
    """An event with its incoming relations as identifiers."""

    id: str
    conditions: list[str] = Field(default_factory=list)
    responses: list[str] = Field(default_factory=list)
    includes: list[str] = Field(default_factory=list)
    excludes: list[str] = Field(default_factory=list)

    @classmethod
    def from_event(cls, event: Event) -> "EventView":
        return cls(
            id=event.id,
            **{kind.group: event.relation_ids(kind) for kind in RELATION_ORDER},
        )


class ProjectionView(BaseModel):
    """Projection of a single event."""

    event_id: str
    projection: list[str]


# ============================================================================
# Helpers
# ============================================================================


async def _parse_request(request: Request) -> EventRegistry:
    """Read the request body and build its event graph off the event loop."""
    body = await request.body()

    if len(body) > settings.graph.max_payload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Constraint document exceeds {settings.graph.max_payload_bytes} bytes",
        )

    return await asyncio.to_thread(parse_constraints, body)


def _get_event(registry: EventRegistry, event_id: str) -> Event:
    event = registry.get(event_id)
    if event is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event {event_id} not found",
        )
    return event


async def get_repository_client() -> AsyncGenerator[DCRRepositoryClient, None]:
    """
    Provide a repository client for the duration of a request.

    Credentials come from the file named by ``DCR_REPOSITORY_CREDENTIALS_FILE``
    when set, otherwise from the environment.
    """
    config = settings.repository
    if config.credentials_file:
        config = RepositorySettings.from_json_file(config.credentials_file)

    async with DCRRepositoryClient(config) as client:
        yield client


# ============================================================================
# Graph Endpoints
# ============================================================================


@router.post("/parse", response_model=GraphSummary)
async def parse_graph(request: Request) -> GraphSummary:
    """
    Parse a constraint document and summarize the resulting graph.
    """
    registry = await _parse_request(request)

    by_kind = {kind.group: 0 for kind in RELATION_ORDER}
    for event in registry.events():
        for kind in RELATION_ORDER:
            by_kind[kind.group] += len(event.relations(kind))

    logger.info(
        "graph_parsed",
        events=len(registry),
        relations=sum(by_kind.values()),
    )

    return GraphSummary(
        event_count=len(registry),
        relation_count=sum(by_kind.values()),
        relations_by_kind=by_kind,
        event_ids=registry.list(),
    )


@router.post("/adjacency", response_model=AdjacencyResponse)
async def get_adjacency(request: Request) -> AdjacencyResponse:
    """
    Build the kind-agnostic adjacency matrix of a constraint document.

    ``matrix[i][j]`` is 1 when there is a relation from ``event_ids[i]``
    to ``event_ids[j]``.
    """
    registry = await _parse_request(request)
    adjacency = build_adjacency_matrix(registry)

    return AdjacencyResponse(
        event_ids=adjacency.event_ids,
        matrix=adjacency.matrix,
    )


@router.post("/projections", response_model=dict[str, list[str]])
async def get_projections(request: Request) -> dict[str, list[str]]:
    """
    Compute the projection of every event.
    """
    registry = await _parse_request(request)

    return {
        event_id: [related.id for related in related_events]
        for event_id, related_events in all_projections(registry).items()
    }


@router.post("/projections/{event_id}", response_model=ProjectionView)
async def get_projection(event_id: str, request: Request) -> ProjectionView:
    """
    Compute the projection of a single event.

    Args:
        event_id: Event identifier
    """
    registry = await _parse_request(request)
    event = _get_event(registry, event_id)

    return ProjectionView(event_id=event.id, projection=projection_ids(event))


@router.post("/events/{event_id}", response_model=EventView)
async def get_event(event_id: str, request: Request) -> EventView:
    """
    Get an event's incoming relations.

    Args:
        event_id: Event identifier
    """
    registry = await _parse_request(request)
    return EventView.from_event(_get_event(registry, event_id))


@router.get("/remote/{graph_id}/adjacency", response_model=AdjacencyResponse)
async def get_remote_adjacency(
    graph_id: str,
    client: DCRRepositoryClient = Depends(get_repository_client),
) -> AdjacencyResponse:
    """
    Fetch a graph's relations from the remote repository and build its
    adjacency matrix.

    Args:
        graph_id: Repository graph identifier
    """
    bind_context(graph_id=graph_id)
    try:
        sim_id, document = await client.fetch_relations(graph_id)
        registry = await asyncio.to_thread(parse_constraints, document)
    except RepositoryError as e:
        logger.error("remote_fetch_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch graph {graph_id}: {e!s}",
        )
    except DecodeError as e:
        logger.error("remote_document_invalid", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Repository returned an invalid document for graph {graph_id}: {e!s}",
        )
    finally:
        clear_context()

    adjacency = build_adjacency_matrix(registry)

    return AdjacencyResponse(
        event_ids=adjacency.event_ids,
        matrix=adjacency.matrix,
        simulation_id=sim_id,
    )
