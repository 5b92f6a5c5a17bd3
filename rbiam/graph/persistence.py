"""Whole-graph save/restore as a JSON document.

The document holds five named collections, each mapping an entity key to
its record. Saved dumps are named ``rbiam-dump-<unix-timestamp>.json``.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any

from rbiam.errors import MalformedArtifact
from rbiam.graph.store import COLLECTIONS, AccessGraph
from rbiam.models.entities import ENTITY_TYPES, EntityKind
from rbiam.models.serialization import encode_record
from rbiam.observability.logging import get_logger

_logger = get_logger("graph.persistence")

# Collection names inside the persisted document.
DOCUMENT_KEYS: dict[EntityKind, str] = {
    EntityKind.POD: "pods",
    EntityKind.SERVICE_ACCOUNT: "serviceaccounts",
    EntityKind.SECRET: "secrets",
    EntityKind.ROLE: "roles",
    EntityKind.POLICY: "policies",
}

DUMP_PREFIX = "rbiam-dump"


def save(graph: AccessGraph) -> str:
    """Serialize the whole access graph into a single JSON document.

    Raises:
        SerializationFailure: if a record holds a value JSON cannot encode
            without loss.
    """
    document: dict[str, dict[str, Any]] = {}
    for kind, doc_key in DOCUMENT_KEYS.items():
        document[doc_key] = {key: encode_record(entity) for key, entity in graph.collection(kind).items()}
    return json.dumps(document, sort_keys=True, allow_nan=False)


def restore(text: str | bytes) -> AccessGraph:
    """Rebuild an access graph from a document produced by save().

    Raises:
        MalformedArtifact: if the document is not valid JSON or does not
            have the five-collection shape.
    """
    try:
        document = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedArtifact(f"invalid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise MalformedArtifact(f"top level must be an object, got {type(document).__name__}")

    graph = AccessGraph()
    for kind, doc_key in DOCUMENT_KEYS.items():
        records = document.get(doc_key)
        if not isinstance(records, dict):
            raise MalformedArtifact("collection missing or not an object", collection=doc_key)
        entity_type = ENTITY_TYPES[kind]
        target = getattr(graph, COLLECTIONS[kind])
        for key, record in records.items():
            try:
                target[key] = entity_type.from_dict(record)
            except (TypeError, ValueError, AttributeError) as exc:
                raise MalformedArtifact(str(exc), collection=doc_key, key=key) from exc
    return graph


def dump(graph: AccessGraph, directory: str | Path = ".", now: float | None = None) -> Path:
    """Save *graph* to ``rbiam-dump-<ts>.json`` in *directory* and return the path."""
    text = save(graph)
    ts = int(now if now is not None else time.time())
    path = Path(directory) / f"{DUMP_PREFIX}-{ts}.json"
    path.write_text(text, encoding="utf-8")
    _logger.info("access_graph_dumped", path=str(path), entities=len(graph))
    return path


def load(path: str | Path) -> AccessGraph:
    """Restore an access graph from a dump file."""
    graph = restore(Path(path).read_text(encoding="utf-8"))
    _logger.info("access_graph_loaded", path=str(path), entities=len(graph))
    return graph
