"""Storage layer for menu persistence."""

from __future__ import annotations
from typing import TYPE_CHECKING

from .gateway import PersistenceGateway
from .gist_storage import GistStorage, filename_for
from .local_storage import LocalStorage
from .memory_storage import MemoryStorage
from .storage_manager import StorageManager

if TYPE_CHECKING:
    from ..settings import Settings


def build_storage(settings: "Settings") -> PersistenceGateway:
    """
    Build the gateway described by ``settings``.
    
    Gist is primary (with a local cache) when configured and not disabled;
    otherwise menus live in local files only.
    """
    local = LocalStorage(settings.data_dir)
    gist = GistStorage(settings.gist_id, settings.gist_token, timeout=settings.request_timeout)
    
    if settings.gist_disabled or not gist.is_available():
        return local
    return StorageManager(gist, cache=local, fallback_to_cache=settings.fallback_to_cache)


__all__ = [
    "PersistenceGateway",
    "GistStorage",
    "LocalStorage",
    "MemoryStorage",
    "StorageManager",
    "build_storage",
    "filename_for",
]
