"""
Graph Relationship Definitions
==============================

Relation kinds of a DCR graph and the transient relation record.

Version: 0.1.0
"""

from dataclasses import dataclass
from enum import Enum


class RelationKind(str, Enum):
    """DCR relation kinds."""

    CONDITION = "condition"  # source must occur before target
    RESPONSE = "response"  # target becomes pending after source
    INCLUDE = "include"  # source includes target
    EXCLUDE = "exclude"  # source excludes target

    @property
    def element(self) -> str:
        """Wire element name of a single relation, e.g. ``condition``."""
        return self.value

    @property
    def group(self) -> str:
        """
        Plural name of the kind.

        Used both as the wire group element (``<conditions>``) and as the
        Event attribute holding the back-references of this kind.
        """
        return f"{self.value}s"


# Order used wherever the four lists are concatenated
RELATION_ORDER: tuple[RelationKind, ...] = (
    RelationKind.CONDITION,
    RelationKind.RESPONSE,
    RelationKind.INCLUDE,
    RelationKind.EXCLUDE,
)


@dataclass(frozen=True, slots=True)
class Relation:
    """A decoded ``(source, target)`` pair of one kind."""

    source_id: str
    target_id: str
    kind: RelationKind

    @property
    def is_self_relation(self) -> bool:
        return self.source_id == self.target_id
