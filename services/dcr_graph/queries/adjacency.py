"""
Adjacency Matrix Builder
========================

Dense, kind-agnostic adjacency view of a materialized event graph.

``matrix[i][j] == 1`` when ``event_ids[i]`` appears in any relation list of
``event_ids[j]``, i.e. there is at least one relation ``i -> j``. Relation
kinds and repeated edges collapse into a single 1.

Version: 0.1.0
"""

from dataclasses import dataclass, field

from services.dcr_graph.ingestion.registry import EventRegistry


@dataclass
class AdjacencyMatrix:
    """A 0/1 directed-edge matrix with its identifier enumeration."""

    matrix: list[list[int]]
    event_ids: list[str]
    _index: dict[str, int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._index = {event_id: i for i, event_id in enumerate(self.event_ids)}

    @property
    def size(self) -> int:
        return len(self.event_ids)

    def index_of(self, event_id: str) -> int:
        """Row/column index of an identifier."""
        return self._index[event_id]

    def has_edge(self, source_id: str, target_id: str) -> bool:
        """Check for a relation of any kind from source to target."""
        return self.matrix[self.index_of(source_id)][self.index_of(target_id)] == 1

    @property
    def edge_count(self) -> int:
        """Number of distinct directed pairs."""
        return sum(map(sum, self.matrix))


def build_adjacency_matrix(registry: EventRegistry) -> AdjacencyMatrix:
    """
    Snapshot a registry into an adjacency matrix.

    The registry must be fully materialized.

    Args:
        registry: Materialized event registry

    Returns:
        AdjacencyMatrix over all known identifiers
    """
    events = registry.events()
    event_ids = [event.id for event in events]
    index = {event_id: i for i, event_id in enumerate(event_ids)}

    size = len(event_ids)
    matrix = [[0] * size for _ in range(size)]

    for event in events:
        target_index = index[event.id]
        for source in event.neighbors():
            matrix[index[source.id]][target_index] = 1

    return AdjacencyMatrix(matrix=matrix, event_ids=event_ids)
