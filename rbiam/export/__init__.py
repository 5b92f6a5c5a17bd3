"""Trace exporters.

Exposes:
    render_raw   -- Newline-separated JSON records, one per trace entry.
    build_graph  -- graphviz.Digraph of a trace with a legend cluster.
    render_graph -- DOT source of build_graph().
    export_raw   -- Writes render_raw() output to rbiam-trace-<ts>.json.
    export_graph -- Writes render_graph() output to rbiam-trace-<ts>.dot.
"""

from rbiam.export.artifacts import export_graph, export_raw
from rbiam.export.dot import STYLES, NodeStyle, build_graph, render_graph
from rbiam.export.raw import render_raw

__all__ = [
    "STYLES",
    "NodeStyle",
    "build_graph",
    "export_graph",
    "export_raw",
    "render_graph",
    "render_raw",
]
