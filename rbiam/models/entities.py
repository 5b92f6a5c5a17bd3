"""Entity records held by the access graph.

Kubernetes kinds are keyed by ``namespace:name``; IAM kinds by their ARN.
Every record converts to and from a plain JSON-compatible dict so the whole
access graph can be persisted and individual records dumped.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any, ClassVar


class EntityKind(StrEnum):
    """Closed set of entity kinds; values are the typed reference kind texts."""

    POD = "Kubernetes pod"
    SERVICE_ACCOUNT = "Kubernetes service account"
    SECRET = "Kubernetes secret"
    ROLE = "IAM role"
    POLICY = "IAM policy"


def namespaced(namespace: str, name: str) -> str:
    """Build the ``namespace:name`` key used by all Kubernetes kinds."""
    return f"{namespace}:{name}"


def _require(record: dict[str, Any], *names: str) -> None:
    if not isinstance(record, dict):
        raise TypeError(f"record must be an object, got {type(record).__name__}")
    missing = [n for n in names if n not in record]
    if missing:
        raise ValueError(f"missing required field(s): {', '.join(missing)}")


@dataclass
class EnvVar:
    """A container environment variable."""

    name: str
    value: str = ""


@dataclass
class Container:
    """A pod container; only its environment matters for correlation."""

    name: str
    image: str = ""
    env: list[EnvVar] = field(default_factory=list)

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> Container:
        _require(record, "name")
        return cls(
            name=record["name"],
            image=record.get("image", ""),
            env=[EnvVar(**e) for e in record.get("env", [])],
        )


@dataclass
class Pod:
    """A Kubernetes pod."""

    kind: ClassVar[EntityKind] = EntityKind.POD

    name: str
    namespace: str
    service_account_name: str = ""
    containers: list[Container] = field(default_factory=list)
    node_name: str = ""
    host_ip: str = ""
    labels: dict[str, str] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return namespaced(self.namespace, self.name)

    @property
    def service_account_key(self) -> str | None:
        """Key of the declared service account, None when the pod declares none."""
        # an empty name never joins, not even a service account keyed "<namespace>:"
        if not self.service_account_name:
            return None
        return namespaced(self.namespace, self.service_account_name)

    def env_values(self, var_name: str) -> list[str]:
        """Values of every container env var named *var_name*, in container order."""
        return [e.value for c in self.containers for e in c.env if e.name == var_name]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> Pod:
        _require(record, "name", "namespace")
        return cls(
            name=record["name"],
            namespace=record["namespace"],
            service_account_name=record.get("service_account_name", ""),
            containers=[Container.from_dict(c) for c in record.get("containers", [])],
            node_name=record.get("node_name", ""),
            host_ip=record.get("host_ip", ""),
            labels=dict(record.get("labels", {})),
        )


@dataclass
class ServiceAccount:
    """A Kubernetes service account and the names of its secrets, in order."""

    kind: ClassVar[EntityKind] = EntityKind.SERVICE_ACCOUNT

    name: str
    namespace: str
    secrets: list[str] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return namespaced(self.namespace, self.name)

    @property
    def first_secret_key(self) -> str | None:
        """Key of the first listed secret; the remaining ones are not considered."""
        if not self.secrets:
            return None
        return namespaced(self.namespace, self.secrets[0])

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> ServiceAccount:
        _require(record, "name", "namespace")
        return cls(
            name=record["name"],
            namespace=record["namespace"],
            secrets=list(record.get("secrets", [])),
            annotations=dict(record.get("annotations", {})),
        )


@dataclass
class Secret:
    """A Kubernetes secret. Only the data keys are kept, never the values."""

    kind: ClassVar[EntityKind] = EntityKind.SECRET

    name: str
    namespace: str
    type: str = "Opaque"
    data_keys: list[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        return namespaced(self.namespace, self.name)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> Secret:
        _require(record, "name", "namespace")
        return cls(
            name=record["name"],
            namespace=record["namespace"],
            type=record.get("type", "Opaque"),
            data_keys=list(record.get("data_keys", [])),
        )


@dataclass
class Role:
    """An IAM role."""

    kind: ClassVar[EntityKind] = EntityKind.ROLE

    arn: str
    name: str = ""
    role_id: str = ""
    path: str = "/"
    assume_role_policy_document: dict[str, Any] | None = None

    @property
    def key(self) -> str:
        return self.arn

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> Role:
        _require(record, "arn")
        return cls(
            arn=record["arn"],
            name=record.get("name", ""),
            role_id=record.get("role_id", ""),
            path=record.get("path", "/"),
            assume_role_policy_document=record.get("assume_role_policy_document"),
        )


@dataclass
class Policy:
    """An IAM managed policy."""

    kind: ClassVar[EntityKind] = EntityKind.POLICY

    arn: str
    name: str = ""
    policy_id: str = ""
    default_version_id: str = ""
    attachment_count: int = 0
    document: dict[str, Any] | None = None

    @property
    def key(self) -> str:
        return self.arn

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> Policy:
        _require(record, "arn")
        return cls(
            arn=record["arn"],
            name=record.get("name", ""),
            policy_id=record.get("policy_id", ""),
            default_version_id=record.get("default_version_id", ""),
            attachment_count=int(record.get("attachment_count", 0)),
            document=record.get("document"),
        )


Entity = Pod | ServiceAccount | Secret | Role | Policy

ENTITY_TYPES: dict[EntityKind, type[Entity]] = {
    EntityKind.POD: Pod,
    EntityKind.SERVICE_ACCOUNT: ServiceAccount,
    EntityKind.SECRET: Secret,
    EntityKind.ROLE: Role,
    EntityKind.POLICY: Policy,
}
