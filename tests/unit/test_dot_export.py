"""Tests for the DOT graph exporter."""

from __future__ import annotations

import re

from graphviz import Digraph

from rbiam.export.dot import STYLES, build_graph, render_graph
from rbiam.graph.store import AccessGraph
from rbiam.models.entities import Container, EntityKind, EnvVar, Pod, Policy, Role, Secret, ServiceAccount

_ROLE = "arn:aws:iam::1:role/r1"
_POLICY = "arn:aws:iam::aws:policy/ReadOnlyAccess"
_NODE = re.compile(r'^\s*(\w+) \[label=(?:"((?:[^"\\]|\\.)*)"|(\w+))(.*)\]$')
_EDGE = re.compile(r"^\s*(\w+) -> (\w+) \[label=(\w+)")


def _make_graph() -> AccessGraph:
    graph = AccessGraph()
    graph.add(
        Pod(
            name="p1",
            namespace="ns",
            service_account_name="sa1",
            containers=[Container(name="app", env=[EnvVar("AWS_ROLE_ARN", _ROLE)])],
        )
    )
    graph.add(ServiceAccount(name="sa1", namespace="ns", secrets=["tok"]))
    graph.add(Secret(name="tok", namespace="ns"))
    graph.add(Role(arn=_ROLE))
    graph.add(Policy(arn=_POLICY))
    return graph


_TRACE = [
    "[Kubernetes pod] ns:p1",
    "[Kubernetes service account] ns:sa1",
    "[Kubernetes secret] ns:tok",
    f"[IAM role] {_ROLE}",
    f"[IAM policy] {_POLICY}",
]


def _split(dot: str) -> tuple[list[str], list[str]]:
    """Split DOT source into legend cluster lines and main graph lines."""
    lines = dot.splitlines()
    start = next(i for i, line in enumerate(lines) if "subgraph cluster_LEGEND" in line)
    end = next(i for i in range(start, len(lines)) if lines[i].strip() == "}")
    return lines[start:end], [line for line in lines[end + 1 :] if line.strip() != "}"]


def _nodes(lines: list[str]) -> dict[str, tuple[str, str]]:
    """Map node ID -> (label, remaining attributes)."""
    found = {}
    for line in lines:
        m = _NODE.match(line)
        if m:
            found[m.group(1)] = (m.group(2) if m.group(2) is not None else m.group(3), m.group(4))
    return found


def _labelled_edges(dot: str) -> list[tuple[str, str, str]]:
    _, main = _split(dot)
    labels = {node_id: label for node_id, (label, _) in _nodes(main).items()}
    return [
        (labels[m.group(1)], labels[m.group(2)], m.group(3)) for line in main if (m := _EDGE.match(line))
    ]


def test_document_structure() -> None:
    dot = render_graph(_TRACE, _make_graph())
    lines = dot.splitlines()
    assert lines[0] == "digraph {"
    assert lines[1].strip() == "newrank=true"
    assert "subgraph cluster_LEGEND {" in lines[2]
    assert dot.endswith("}\n")


def test_build_graph_returns_digraph() -> None:
    g = build_graph(_TRACE, _make_graph())
    assert isinstance(g, Digraph)
    assert g.source == render_graph(_TRACE, _make_graph())


def test_legend_is_static() -> None:
    empty, _ = _split(render_graph([], AccessGraph()))
    full, _ = _split(render_graph(_TRACE, _make_graph()))
    assert empty == full
    labels = {label for label, _ in _nodes(empty).values()}
    assert labels == {str(kind) for kind in EntityKind}
    legend_edges = [m.group(3) for line in empty if (m := _EDGE.match(line))]
    assert legend_edges == ["uses", "has", "has", "assumes"]


def test_one_node_per_distinct_entry() -> None:
    _, main = _split(render_graph(_TRACE + _TRACE[:2], _make_graph()))
    assert len(_nodes(main)) == 5


def test_nodes_styled_per_kind() -> None:
    _, main = _split(render_graph(["[Kubernetes pod] ns:p1"], _make_graph()))
    ((label, attrs),) = _nodes(main).values()
    assert label == "ns:p1"
    assert f'fillcolor="{STYLES[EntityKind.POD].fillcolor}"' in attrs
    assert 'fontcolor="#f0f0f0"' in attrs
    assert "fontname=Helvetica" in attrs
    assert "style=filled" in attrs


def test_correlated_edges() -> None:
    assert set(_labelled_edges(render_graph(_TRACE, _make_graph()))) == {
        ("ns:p1", "ns:sa1", "uses"),
        ("ns:sa1", "ns:tok", "has"),
        ("ns:p1", _ROLE, "assumes"),
    }


def test_no_duplicate_edges() -> None:
    edges = _labelled_edges(render_graph(_TRACE * 3, _make_graph()))
    assert len(edges) == len(set(edges)) == 3


def test_dangling_reference_is_node_without_edges() -> None:
    dot = render_graph(["[Kubernetes pod] ns:ghost", "[Kubernetes service account] ns:sa1"], _make_graph())
    _, main = _split(dot)
    assert "ns:ghost" in {label for label, _ in _nodes(main).values()}
    assert _labelled_edges(dot) == []


def test_same_key_different_kinds_are_distinct_nodes() -> None:
    graph = AccessGraph()
    graph.add(Pod(name="web", namespace="ns", service_account_name="web"))
    graph.add(ServiceAccount(name="web", namespace="ns"))
    dot = render_graph(["[Kubernetes pod] ns:web", "[Kubernetes service account] ns:web"], graph)
    _, main = _split(dot)
    assert len(_nodes(main)) == 2
    assert _labelled_edges(dot) == [("ns:web", "ns:web", "uses")]


def test_byte_stable() -> None:
    assert render_graph(_TRACE, _make_graph()) == render_graph(_TRACE, _make_graph())
