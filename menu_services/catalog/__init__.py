"""
Catalog Management Module
=========================

Central module for menu operations.

Exports:
- CatalogStore / StoreRegistry: in-memory menu per owner, persisted on every change
- Operation types and apply_operation: pure mutation engine
- normalize_catalog / denormalize_catalog: storage boundary adapter

Usage:
    from menu_services.catalog import CatalogStore, AddSection
"""

from .catalog_adapter import default_catalog_name, denormalize_catalog, normalize_catalog
from .mutations import (
    AddItem,
    AddSection,
    CreateCatalog,
    Operation,
    RemoveItem,
    RemoveSection,
    RenameSection,
    apply_operation,
)
from .store import CatalogStore, StoreRegistry

__all__ = [
    # Store
    "CatalogStore",
    "StoreRegistry",
    
    # Operations
    "Operation",
    "CreateCatalog",
    "AddSection",
    "RenameSection",
    "RemoveSection",
    "AddItem",
    "RemoveItem",
    "apply_operation",
    
    # Adapter
    "normalize_catalog",
    "denormalize_catalog",
    "default_catalog_name",
]
