"""Error taxonomy for the correlation and export engine.

Dangling references and the unimplemented edge categories are not errors;
they are skipped silently by the correlator and exporters.
"""

from __future__ import annotations


class RbiamError(Exception):
    """Base class for all rbiam errors."""


class MalformedReference(RbiamError):
    """Raised when a typed reference cannot be split into kind and key."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"Malformed typed reference (expected '[kind] key'): {reference!r}")
        self.reference = reference


class MalformedArtifact(RbiamError):
    """Raised when a persisted access graph cannot be restored."""

    def __init__(self, reason: str, collection: str | None = None, key: str | None = None) -> None:
        where = ""
        if collection is not None:
            where = f" in collection '{collection}'"
            if key is not None:
                where += f" at key '{key}'"
        super().__init__(f"Malformed access graph artifact{where}: {reason}")
        self.reason = reason
        self.collection = collection
        self.key = key


class SerializationFailure(RbiamError):
    """Raised when an entity record cannot be serialized during export."""

    def __init__(self, kind: str, key: str, cause: Exception) -> None:
        super().__init__(f"Cannot serialize [{kind}] {key}: {cause}")
        self.kind = kind
        self.key = key
        self.cause = cause
