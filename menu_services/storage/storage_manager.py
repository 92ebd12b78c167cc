"""
Storage Manager - Orchestrates a primary store and a local cache.
Writes reach the cache only after the primary accepted them.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from ..errors import PersistenceError
from .gateway import PersistenceGateway

logger = logging.getLogger(__name__)


class StorageManager:
    """Coordinates primary (e.g. Gist) and cache (local) storage."""
    
    def __init__(
        self,
        primary: PersistenceGateway,
        cache: Optional[PersistenceGateway] = None,
        fallback_to_cache: bool = False,
    ):
        """
        Initialize storage manager.
        
        Args:
            primary: Authoritative store
            cache: Optional mirror, refreshed after every successful read/write
            fallback_to_cache: Serve the cached copy when the primary fails on read
        """
        self.primary = primary
        self.cache = cache
        self.fallback_to_cache = fallback_to_cache
        self._last_warning: Optional[str] = None
    
    def get_last_warning(self) -> Optional[str]:
        """Get last warning message (for UI display)."""
        return self._last_warning
    
    def _set_warning(self, message: str) -> None:
        logger.warning(message)
        self._last_warning = message
    
    def _refresh_cache(self, key: str, document: Dict[str, Any]) -> None:
        if self.cache is None:
            return
        try:
            self.cache.replace_document(key, document)
        except PersistenceError as e:
            self._set_warning(f"Local cache update failed for '{key}': {e}")
    
    def fetch_document(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Load a document, primary first.
        
        Strategy:
        1. Read the primary; on success refresh the cache and return
        2. On failure, serve the cache if fallback is enabled
        3. Otherwise propagate the PersistenceError
        """
        try:
            document = self.primary.fetch_document(key)
        except PersistenceError as e:
            if not (self.fallback_to_cache and self.cache is not None):
                raise
            self._set_warning(f"Cloud storage unavailable: {e}. Using local cache.")
            return self.cache.fetch_document(key)
        
        if document is not None:
            self._refresh_cache(key, document)
        self._last_warning = None
        return document
    
    def replace_document(self, key: str, document: Dict[str, Any]) -> None:
        """
        Replace a document in the primary, then mirror it to the cache.
        
        Raises:
            PersistenceError: If the primary write fails (cache is untouched)
        """
        self.primary.replace_document(key, document)
        self._last_warning = None
        self._refresh_cache(key, document)
