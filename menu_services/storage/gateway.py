"""Persistence boundary consumed by the catalog store."""

from __future__ import annotations
from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class PersistenceGateway(Protocol):
    """
    Fetch-by-key and whole-document replace against durable storage.

    Both methods raise PersistenceError on transport or storage failure.
    There is no partial update: ``replace_document`` always overwrites the
    full stored document, and the last writer wins.
    """

    def fetch_document(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the stored document, or None if there is none."""
        ...

    def replace_document(self, key: str, document: Dict[str, Any]) -> None:
        """Overwrite the stored document for ``key``."""
        ...
