"""Writing export artifacts to disk.

Artifacts are named ``rbiam-trace-<unix-timestamp>`` with a ``.json``
extension for raw dumps and ``.dot`` for graphs. Rendering happens before
the file is opened, so a failed export leaves no partial file behind.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from pathlib import Path

from rbiam.export.dot import render_graph
from rbiam.export.raw import render_raw
from rbiam.graph.models import TypedReference
from rbiam.graph.store import AccessGraph
from rbiam.observability.logging import get_logger

_logger = get_logger("export.artifacts")

TRACE_PREFIX = "rbiam-trace"


def artifact_path(directory: str | Path, extension: str, now: float | None = None) -> Path:
    """Return ``<directory>/rbiam-trace-<ts>.<extension>``."""
    ts = int(now if now is not None else time.time())
    return Path(directory) / f"{TRACE_PREFIX}-{ts}.{extension}"


def export_raw(
    trace: Iterable[str | TypedReference],
    graph: AccessGraph,
    directory: str | Path = ".",
    now: float | None = None,
) -> Path:
    """Write the raw trace dump and return its path."""
    text = render_raw(trace, graph)
    path = artifact_path(directory, "json", now)
    path.write_text(text, encoding="utf-8")
    _logger.info("raw_trace_exported", path=str(path))
    return path


def export_graph(
    trace: Iterable[str | TypedReference],
    graph: AccessGraph,
    directory: str | Path = ".",
    now: float | None = None,
) -> Path:
    """Write the DOT graph of the trace and return its path."""
    text = render_graph(trace, graph)
    path = artifact_path(directory, "dot", now)
    path.write_text(text, encoding="utf-8")
    _logger.info("graph_exported", path=str(path))
    return path
