"""Derives edges between trace entries by kind-specific join rules.

Each rule pairs the distinct trace references of a source kind with the
distinct trace references of a target kind and emits an edge when the join
key computed from the source record equals the target's key:

    Pod            -> ServiceAccount  "uses"     namespace + ":" + serviceAccountName
    ServiceAccount -> Secret          "has"      namespace + ":" + first secret name
    Pod            -> Role            "assumes"  any container env AWS_ROLE_ARN value

Only the first secret of a service account is considered. Roles a pod
obtains from its node's instance profile are not attributed, and no
Role -> Policy edges are derived; attached policies are not part of the
access graph.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from rbiam.graph.models import EdgeLabel, GraphEdge, TypedReference
from rbiam.graph.reference import distinct, resolve_trace
from rbiam.graph.store import AccessGraph
from rbiam.models.entities import EntityKind, Pod, ServiceAccount
from rbiam.observability.logging import get_logger

_logger = get_logger("graph.correlator")

ROLE_ARN_ENV = "AWS_ROLE_ARN"

# Maps a source record to the target keys it joins on.
JoinFn = Callable[[Any], Iterable[str]]


def _pod_service_account(pod: Pod) -> Iterable[str]:
    key = pod.service_account_key
    return [key] if key is not None else []


def _service_account_secret(sa: ServiceAccount) -> Iterable[str]:
    key = sa.first_secret_key
    return [key] if key is not None else []


def _pod_role(pod: Pod) -> Iterable[str]:
    return pod.env_values(ROLE_ARN_ENV)


# (source kind, target kind, label, join) in emission order.
JOIN_RULES: tuple[tuple[EntityKind, EntityKind, EdgeLabel, JoinFn], ...] = (
    (EntityKind.POD, EntityKind.SERVICE_ACCOUNT, EdgeLabel.USES, _pod_service_account),
    (EntityKind.SERVICE_ACCOUNT, EntityKind.SECRET, EdgeLabel.HAS, _service_account_secret),
    (EntityKind.POD, EntityKind.ROLE, EdgeLabel.ASSUMES, _pod_role),
)


def correlate(trace: Iterable[str | TypedReference], graph: AccessGraph) -> list[GraphEdge]:
    """Compute the deduplicated edge set connecting the entries of *trace*.

    Edges are ordered by rule, then by the first-seen trace position of the
    source, then of the target. References absent from *graph* produce no
    edges.

    Raises:
        MalformedReference: if a trace entry is not a ``[kind] key`` string.
    """
    refs = distinct(resolve_trace(trace))
    by_kind: dict[EntityKind, list[TypedReference]] = {kind: [] for kind in EntityKind}
    for ref in refs:
        by_kind[ref.kind].append(ref)

    edges: list[GraphEdge] = []
    seen: set[GraphEdge] = set()
    for source_kind, target_kind, label, join in JOIN_RULES:
        targets = {ref.key: ref for ref in by_kind[target_kind] if graph.lookup(ref) is not None}
        if not targets:
            continue
        for source in by_kind[source_kind]:
            record = graph.lookup(source)
            if record is None:
                continue
            matched = [targets[k] for k in dict.fromkeys(join(record)) if k in targets]
            matched.sort(key=refs.index)
            for target in matched:
                edge = GraphEdge(source=source, target=target, label=label)
                if edge not in seen:
                    seen.add(edge)
                    edges.append(edge)

    _logger.debug("edges_correlated", references=len(refs), edges=len(edges))
    return edges
