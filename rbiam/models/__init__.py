"""Core data structures for rbiam."""

from rbiam.models.config import ExportConfig, LogConfig, RbiamConfig
from rbiam.models.entities import (
    ENTITY_TYPES,
    Container,
    Entity,
    EntityKind,
    EnvVar,
    Pod,
    Policy,
    Role,
    Secret,
    ServiceAccount,
    namespaced,
)

__all__ = [
    "ENTITY_TYPES",
    "Container",
    "Entity",
    "EntityKind",
    "EnvVar",
    "ExportConfig",
    "LogConfig",
    "Pod",
    "Policy",
    "RbiamConfig",
    "Role",
    "Secret",
    "ServiceAccount",
    "namespaced",
]
