"""Error taxonomy for catalog operations."""

from __future__ import annotations
from typing import Any


class CatalogError(Exception):
    """Base class for all catalog core errors."""
    pass


class ValidationError(CatalogError):
    """Raised when an operation carries malformed input."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class NotFoundError(CatalogError):
    """Raised when an operation references an unknown catalog, section or item."""

    def __init__(self, kind: str, id: str):
        self.kind = kind
        self.id = id
        super().__init__(f"{kind.capitalize()} '{id}' not found")


class PersistenceError(CatalogError):
    """Raised when the storage boundary fails."""

    def __init__(self, cause: Any):
        self.cause = cause
        super().__init__(str(cause))


class MutationInProgressError(CatalogError):
    """Raised when a mutation is rejected because another one is in flight."""

    def __init__(self, owner_key: str):
        self.owner_key = owner_key
        super().__init__(f"A mutation is already in progress for '{owner_key}'")
