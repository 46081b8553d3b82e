"""
Graph Node Definitions
======================

The Event node of an in-memory DCR graph.

Relation lists hold back-references: for a relation ``(source, target, kind)``
the ``kind`` list of ``target`` receives ``source``. References are plain
object references owned by nobody but the registry; cycles are expected.

Version: 0.1.0
"""

import threading
from collections.abc import Iterator
from dataclasses import dataclass, field

from services.dcr_graph.schema.relationships import RELATION_ORDER, RelationKind


@dataclass(eq=False, repr=False)
class Event:
    """A single process activity and its incoming relations."""

    id: str
    conditions: list["Event"] = field(default_factory=list)
    responses: list["Event"] = field(default_factory=list)
    includes: list["Event"] = field(default_factory=list)
    excludes: list["Event"] = field(default_factory=list)

    _lock: threading.Lock = field(default_factory=threading.Lock)

    def __repr__(self) -> str:
        # Lists are cyclic, so only the id is rendered
        return f"Event(id={self.id!r})"

    def relations(self, kind: RelationKind) -> list["Event"]:
        """Get the back-reference list for a relation kind."""
        return getattr(self, kind.group)

    def link(self, kind: RelationKind, source: "Event") -> None:
        """Record ``source`` as a ``kind`` relation pointing at this event."""
        with self._lock:
            self.relations(kind).append(source)

    def neighbors(self) -> Iterator["Event"]:
        """Iterate over all four relation lists in kind order."""
        for kind in RELATION_ORDER:
            yield from self.relations(kind)

    def relation_ids(self, kind: RelationKind) -> list[str]:
        """Identifiers of the events in one relation list."""
        return [event.id for event in self.relations(kind)]

    @property
    def relation_count(self) -> int:
        """Total number of back-references held by this event."""
        return sum(len(self.relations(kind)) for kind in RELATION_ORDER)
