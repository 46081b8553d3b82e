"""
Relation Decoder
================

Decodes a DCR constraint document into per-kind relation sequences.

Wire format::

    <constraints>
      <conditions>
        <condition sourceId="A" targetId="B"/>
      </conditions>
      <responses>...</responses>
      <includes>...</includes>
      <excludes>...</excludes>
    </constraints>

Version: 0.1.0
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from shared.exceptions import DecodeError
from shared.logging import get_logger

from services.dcr_graph.schema.relationships import (
    RELATION_ORDER,
    Relation,
    RelationKind,
)


logger = get_logger(__name__)

ROOT_ELEMENT = "constraints"
SOURCE_ATTRIBUTE = "sourceId"
TARGET_ATTRIBUTE = "targetId"


@dataclass
class DecodedRelations:
    """Relations of one constraint document, grouped by kind."""

    conditions: list[Relation] = field(default_factory=list)
    responses: list[Relation] = field(default_factory=list)
    includes: list[Relation] = field(default_factory=list)
    excludes: list[Relation] = field(default_factory=list)

    def of_kind(self, kind: RelationKind) -> list[Relation]:
        """Get the relations of a single kind, in input order."""
        return getattr(self, kind.group)

    def by_kind(self) -> dict[RelationKind, list[Relation]]:
        """Map every kind to its relations."""
        return {kind: self.of_kind(kind) for kind in RELATION_ORDER}

    @property
    def total(self) -> int:
        """Total number of relations across all kinds."""
        return sum(len(self.of_kind(kind)) for kind in RELATION_ORDER)


def _local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an element tag."""
    return tag.rpartition("}")[2]


def decode_relations(payload: bytes | str) -> DecodedRelations:
    """
    Decode a constraint document.

    Elements match by local name, so a default namespace is accepted.
    Missing groups decode as empty sequences. A relation element without a
    ``sourceId`` or ``targetId`` attribute uses the empty string as that
    identifier.

    Args:
        payload: Raw XML document

    Returns:
        DecodedRelations with input order preserved per kind

    Raises:
        DecodeError: If the document is not well-formed XML or its root
            element is not ``<constraints>``
    """
    try:
        root = ET.fromstring(payload)
    except ET.ParseError as e:
        logger.warning("decode_failed", error=str(e))
        raise DecodeError(f"Malformed constraint document: {e}") from e

    if _local_name(root.tag) != ROOT_ELEMENT:
        logger.warning("decode_failed", root=root.tag)
        raise DecodeError(
            f"Expected <{ROOT_ELEMENT}> root element, got <{root.tag}>"
        )

    decoded = DecodedRelations()
    for kind in RELATION_ORDER:
        relations = decoded.of_kind(kind)
        for element in root.iterfind(f"{{*}}{kind.group}/{{*}}{kind.element}"):
            relations.append(
                Relation(
                    source_id=element.get(SOURCE_ATTRIBUTE, ""),
                    target_id=element.get(TARGET_ATTRIBUTE, ""),
                    kind=kind,
                )
            )

    logger.debug(
        "relations_decoded",
        conditions=len(decoded.conditions),
        responses=len(decoded.responses),
        includes=len(decoded.includes),
        excludes=len(decoded.excludes),
    )

    return decoded
