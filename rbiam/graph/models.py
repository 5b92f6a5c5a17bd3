"""Data structures for the correlated access graph."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from rbiam.models.entities import EntityKind


class EdgeLabel(StrEnum):
    """Relationships the correlator can derive between entities."""

    USES = "uses"  # pod -> service account
    HAS = "has"  # service account -> secret, role -> policy (legend only)
    ASSUMES = "assumes"  # pod -> IAM role via AWS_ROLE_ARN


@dataclass(frozen=True)
class TypedReference:
    """A (kind, key) pair, rendered on the wire as ``[kind] key``."""

    kind: EntityKind
    key: str

    def __str__(self) -> str:
        return f"[{self.kind}] {self.key}"


@dataclass(frozen=True)
class GraphEdge:
    """A derived, labelled edge between two trace entries."""

    source: TypedReference
    target: TypedReference
    label: EdgeLabel
