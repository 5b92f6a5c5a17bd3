"""Graph export in Graphviz DOT format.

The document holds a static legend cluster with one exemplar node per kind
and the canonical edges between them, one styled node per distinct trace
entry, and the correlated edges. ``newrank=true`` keeps the legend below
the main graph.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from graphviz import Digraph, nohtml

from rbiam.graph.correlator import correlate
from rbiam.graph.models import EdgeLabel, TypedReference
from rbiam.graph.reference import distinct, resolve_trace
from rbiam.graph.store import AccessGraph
from rbiam.models.entities import EntityKind
from rbiam.observability.logging import get_logger

_logger = get_logger("export.dot")

FONT = "Helvetica"


@dataclass(frozen=True)
class NodeStyle:
    """Visual style of one entity kind."""

    fillcolor: str
    fontcolor: str = "#000000"
    fontname: str = FONT

    def attrs(self) -> dict[str, str]:
        return {
            "style": "filled",
            "fillcolor": self.fillcolor,
            "fontcolor": self.fontcolor,
            "fontname": self.fontname,
        }


STYLES: Mapping[EntityKind, NodeStyle] = {
    EntityKind.POD: NodeStyle(fillcolor="#4260FA", fontcolor="#f0f0f0"),
    EntityKind.SERVICE_ACCOUNT: NodeStyle(fillcolor="#1BFF9F"),
    EntityKind.SECRET: NodeStyle(fillcolor="#F9ED49"),
    EntityKind.ROLE: NodeStyle(fillcolor="#FD8564"),
    EntityKind.POLICY: NodeStyle(fillcolor="#D9A7F1"),
}

_LEGEND_EDGES: tuple[tuple[EntityKind, EntityKind, EdgeLabel], ...] = (
    (EntityKind.POD, EntityKind.SERVICE_ACCOUNT, EdgeLabel.USES),
    (EntityKind.SERVICE_ACCOUNT, EntityKind.SECRET, EdgeLabel.HAS),
    (EntityKind.ROLE, EntityKind.POLICY, EdgeLabel.HAS),
    (EntityKind.POD, EntityKind.ROLE, EdgeLabel.ASSUMES),
)


def _legend_id(kind: EntityKind) -> str:
    return f"legend_{kind.name.lower()}"


def _add_legend(g: Digraph) -> None:
    with g.subgraph(name="cluster_LEGEND") as legend:
        legend.attr(label="LEGEND")
        for kind in EntityKind:
            legend.node(_legend_id(kind), label=str(kind), **STYLES[kind].attrs())
        for source, target, label in _LEGEND_EDGES:
            legend.edge(_legend_id(source), _legend_id(target), label=str(label), fontname=FONT)


def build_graph(trace: Iterable[str | TypedReference], graph: AccessGraph) -> Digraph:
    """Build the styled Digraph for *trace* and its correlated edges.

    Nodes get positional IDs (``n0``, ``n1``, ...) in first-seen trace
    order and are labelled with their key. Keys carry ``:`` which Graphviz
    would read as a port in edge statements, and entries of different kinds
    may share a key.

    Raises:
        MalformedReference: if a trace entry is not a ``[kind] key`` string.
    """
    refs = resolve_trace(trace)
    node_ids = {ref: f"n{i}" for i, ref in enumerate(distinct(refs))}
    edges = correlate(refs, graph)

    g = Digraph()
    # make sure the legend is at the bottom
    g.attr(newrank="true")
    _add_legend(g)
    for ref, node_id in node_ids.items():
        g.node(node_id, label=nohtml(ref.key), **STYLES[ref.kind].attrs())
    for edge in edges:
        g.edge(node_ids[edge.source], node_ids[edge.target], label=str(edge.label), fontname=FONT)

    _logger.debug("graph_rendered", nodes=len(node_ids), edges=len(edges))
    return g


def render_graph(trace: Iterable[str | TypedReference], graph: AccessGraph) -> str:
    """Render *trace* as a DOT document."""
    return build_graph(trace, graph).source
