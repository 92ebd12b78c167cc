"""Menu catalog services: data model, mutations, storage and store."""

from .errors import (
    CatalogError,
    MutationInProgressError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from .models import Catalog, Item, Section
from .repositories import ItemFields
from .catalog import (
    AddItem,
    AddSection,
    CatalogStore,
    CreateCatalog,
    RemoveItem,
    RemoveSection,
    RenameSection,
    StoreRegistry,
)
from .settings import Settings
from .storage import build_storage

__version__ = "0.1.0"

__all__ = [
    "CatalogError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "MutationInProgressError",
    "Catalog",
    "Section",
    "Item",
    "ItemFields",
    "CatalogStore",
    "StoreRegistry",
    "CreateCatalog",
    "AddSection",
    "RenameSection",
    "RemoveSection",
    "AddItem",
    "RemoveItem",
    "Settings",
    "build_storage",
]
