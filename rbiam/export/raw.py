"""Raw trace export: one JSON record per trace entry, in trace order."""

from __future__ import annotations

import json
from collections.abc import Iterable

from rbiam.graph.models import TypedReference
from rbiam.graph.reference import resolve_trace
from rbiam.graph.store import AccessGraph
from rbiam.models.serialization import encode_record
from rbiam.observability.logging import get_logger

_logger = get_logger("export.raw")


def render_raw(trace: Iterable[str | TypedReference], graph: AccessGraph) -> str:
    """Serialize the record of every resolvable trace entry, newline separated.

    Repeated entries are dumped each time they occur. Entries of unknown
    kind or not present in *graph* are skipped.

    Raises:
        MalformedReference: if a trace entry is not a ``[kind] key`` string.
        SerializationFailure: if a record cannot be encoded as JSON without loss.
    """
    records: list[str] = []
    skipped = 0
    for ref in resolve_trace(trace):
        entity = graph.lookup(ref)
        if entity is None:
            skipped += 1
            continue
        records.append(json.dumps(encode_record(entity), separators=(",", ":")))

    _logger.debug("raw_trace_rendered", records=len(records), skipped=skipped)
    return "\n".join(records)
