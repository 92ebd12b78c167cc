"""In-memory gateway for tests and local experiments."""

from __future__ import annotations
import copy
from typing import Any, Dict, List, Optional

from ..errors import PersistenceError


class MemoryStorage:
    """Dict-backed document store with one-shot failure injection."""
    
    def __init__(self, documents: Optional[Dict[str, Dict[str, Any]]] = None):
        self.documents: Dict[str, Dict[str, Any]] = copy.deepcopy(documents or {})
        self.replace_calls: List[str] = []
        self._fetch_error: Optional[Exception] = None
        self._replace_error: Optional[Exception] = None
    
    def fail_next_fetch(self, error: Optional[Exception] = None) -> None:
        self._fetch_error = error or PersistenceError("simulated fetch failure")
    
    def fail_next_replace(self, error: Optional[Exception] = None) -> None:
        self._replace_error = error or PersistenceError("simulated replace failure")
    
    def fetch_document(self, key: str) -> Optional[Dict[str, Any]]:
        if self._fetch_error is not None:
            error, self._fetch_error = self._fetch_error, None
            raise error
        document = self.documents.get(key)
        return copy.deepcopy(document) if document is not None else None
    
    def replace_document(self, key: str, document: Dict[str, Any]) -> None:
        self.replace_calls.append(key)
        if self._replace_error is not None:
            error, self._replace_error = self._replace_error, None
            raise error
        self.documents[key] = copy.deepcopy(document)
