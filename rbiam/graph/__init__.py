"""Access graph: entity store, typed references and trace correlation.

Provides the in-memory inventory of Kubernetes and IAM entities, the
``[kind] key`` reference codec traces are written in, and the correlator
that re-derives edges between trace entries (pod -> service account,
service account -> secret, pod -> IAM role).
"""

from rbiam.graph.correlator import correlate
from rbiam.graph.models import EdgeLabel, GraphEdge, TypedReference
from rbiam.graph.persistence import dump, load, restore, save
from rbiam.graph.reference import decode, encode, resolve_trace
from rbiam.graph.store import AccessGraph

__all__ = [
    "AccessGraph",
    "EdgeLabel",
    "GraphEdge",
    "TypedReference",
    "correlate",
    "decode",
    "dump",
    "encode",
    "load",
    "resolve_trace",
    "restore",
    "save",
]
