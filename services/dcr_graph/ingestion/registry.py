"""
Event Registry
==============

Thread-safe owner of all Event nodes of one graph snapshot.

Version: 0.1.0
"""

from __future__ import annotations

import threading
from collections.abc import Iterator

from services.dcr_graph.schema.nodes import Event


class EventRegistry:
    """
    Mapping from event identifier to its single Event node.

    ``get_or_create`` performs lookup and insertion as one step under the
    registry lock, so concurrent callers asking for the same identifier
    always receive the same node.

    Read accessors are intended for use after materialization has finished;
    before that they may observe nodes whose relation lists are still
    growing.

    Example:
        >>> registry = EventRegistry()
        >>> a = registry.get_or_create("A")
        >>> registry.get_or_create("A") is a
        True
    """

    def __init__(self) -> None:
        self._events: dict[str, Event] = {}
        self._lock = threading.Lock()

    def get_or_create(self, event_id: str) -> Event:
        """
        Get the node for an identifier, creating it if absent.

        Args:
            event_id: Event identifier

        Returns:
            The unique Event node for ``event_id``
        """
        with self._lock:
            event = self._events.get(event_id)
            if event is None:
                event = Event(id=event_id)
                self._events[event_id] = event
            return event

    def get(self, event_id: str) -> Event | None:
        """Get an existing node, or None if the identifier is unknown."""
        return self._events.get(event_id)

    def list(self) -> list[str]:
        """Identifiers of all known events."""
        with self._lock:
            return list(self._events)

    def events(self) -> list[Event]:
        """Snapshot of all known event nodes."""
        with self._lock:
            return list(self._events.values())

    def relation_count(self) -> int:
        """Total number of back-references held across all nodes."""
        return sum(event.relation_count for event in self.events())

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._events

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events())
