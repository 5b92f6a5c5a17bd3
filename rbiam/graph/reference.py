"""Codec for the ``[kind] key`` typed reference format used by traces."""

from __future__ import annotations

from collections.abc import Iterable

from rbiam.errors import MalformedReference
from rbiam.graph.models import TypedReference
from rbiam.models.entities import EntityKind
from rbiam.observability.logging import get_logger

_logger = get_logger("graph.reference")


def encode(kind: str, key: str) -> str:
    """Produce the textual form ``[kind] key``."""
    return f"[{kind}] {key}"


def decode(reference: str) -> tuple[str, str]:
    """Split *reference* at its first ``]`` into (kind, key).

    Only the first ``]`` delimits, so a key containing ``]`` still decodes
    back to itself as long as the kind has none.

    Raises:
        MalformedReference: if *reference* has no ``]``.
    """
    head, sep, tail = reference.partition("]")
    if not sep:
        raise MalformedReference(reference)
    kind = head.strip().removeprefix("[").strip()
    return kind, tail.lstrip()


def parse(reference: str) -> TypedReference | None:
    """Decode *reference* into a TypedReference, None if its kind is unknown."""
    kind, key = decode(reference)
    try:
        return TypedReference(EntityKind(kind), key)
    except ValueError:
        return None


def resolve_trace(trace: Iterable[str | TypedReference]) -> list[TypedReference]:
    """Turn raw trace entries into TypedReferences, in trace order.

    Entries whose kind is outside the known set are dropped. Duplicates
    are kept.
    """
    resolved: list[TypedReference] = []
    for item in trace:
        if isinstance(item, TypedReference):
            resolved.append(item)
            continue
        ref = parse(item)
        if ref is None:
            _logger.debug("trace_entry_skipped", entry=item, reason="unknown kind")
            continue
        resolved.append(ref)
    return resolved


def distinct(refs: Iterable[TypedReference]) -> list[TypedReference]:
    """Drop repeated references, keeping first-seen order."""
    return list(dict.fromkeys(refs))
