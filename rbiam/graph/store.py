"""In-memory access graph: the inventory of known entities, keyed by kind."""

from __future__ import annotations

from dataclasses import dataclass, field

from rbiam.graph.models import TypedReference
from rbiam.models.entities import Entity, EntityKind, Pod, Policy, Role, Secret, ServiceAccount


@dataclass
class AccessGraph:
    """Five key -> record mappings, one per entity kind.

    Populated once by the traversal that discovers entities and read-only
    for correlation and export. No cross-kind consistency is enforced here.
    """

    pods: dict[str, Pod] = field(default_factory=dict)
    service_accounts: dict[str, ServiceAccount] = field(default_factory=dict)
    secrets: dict[str, Secret] = field(default_factory=dict)
    roles: dict[str, Role] = field(default_factory=dict)
    policies: dict[str, Policy] = field(default_factory=dict)

    def collection(self, kind: EntityKind) -> dict[str, Entity]:
        """Return the mapping holding entities of *kind*."""
        return getattr(self, COLLECTIONS[kind])  # type: ignore[no-any-return]

    def add(self, entity: Entity) -> None:
        """Insert *entity*, replacing any entity of the same kind and key."""
        self.collection(entity.kind)[entity.key] = entity

    def lookup(self, ref: TypedReference) -> Entity | None:
        """Return the entity for *ref*, None for a dangling reference."""
        return self.collection(ref.kind).get(ref.key)

    def __len__(self) -> int:
        return sum(len(self.collection(kind)) for kind in EntityKind)


# Attribute name of each kind's collection.
COLLECTIONS: dict[EntityKind, str] = {
    EntityKind.POD: "pods",
    EntityKind.SERVICE_ACCOUNT: "service_accounts",
    EntityKind.SECRET: "secrets",
    EntityKind.ROLE: "roles",
    EntityKind.POLICY: "policies",
}
