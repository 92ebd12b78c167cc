"""
Catalog Store
=============

Holds the in-memory menu for one owner and mediates every change through
the persistence gateway.

Guarantees:
- At most one mutation per owner is in flight. By default a second caller
  blocks until the first finishes; with ``wait=False`` it is rejected with
  MutationInProgressError.
- State is only replaced after the gateway accepted the new document, so a
  failed mutation leaves the previous Catalog in place.
- Writes are whole-document replaces without a version marker: if two
  processes edit the same menu, the last write wins.

Related Files:
- menu_services/catalog/mutations.py: operations and apply_operation
- menu_services/catalog/catalog_adapter.py: dict <-> Catalog
- menu_services/storage/: gateway implementations
"""

from __future__ import annotations
import logging
import threading
from typing import Dict, Optional

from ..errors import CatalogError, MutationInProgressError, NotFoundError, PersistenceError, ValidationError
from ..models import Catalog, Item, Section
from ..repositories import ItemFields
from ..storage import PersistenceGateway
from ..utils import IdentifierGenerator, UtcClock
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
    operation_name,
)

logger = logging.getLogger(__name__)


class CatalogStore:
    """Authoritative in-memory menu for a single owner key."""

    def __init__(
        self,
        owner_key: str,
        gateway: PersistenceGateway,
        id_generator: Optional[IdentifierGenerator] = None,
        clock: Optional[UtcClock] = None,
    ):
        if not owner_key or not owner_key.strip():
            raise ValidationError("owner_key", "must not be empty")
        self.owner_key = owner_key
        self.gateway = gateway
        self.id_generator = id_generator or IdentifierGenerator()
        self.clock = clock or UtcClock()
        self._state: Optional[Catalog] = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def current_state(self) -> Optional[Catalog]:
        """Return the current Catalog, or None if the owner has none."""
        return self._state

    def is_busy(self) -> bool:
        """True while a load or mutation holds the store."""
        return self._lock.locked()

    def load(self) -> Optional[Catalog]:
        """
        Fetch the owner's menu from storage into memory.

        Returns:
            Loaded Catalog, or None if storage has no menu for this owner

        Raises:
            PersistenceError: If storage cannot be read (state unchanged)
        """
        with self._lock:
            try:
                document = self.gateway.fetch_document(self.owner_key)
            except PersistenceError:
                logger.warning("Loading menu for '%s' failed", self.owner_key, exc_info=True)
                raise

            catalog = normalize_catalog(document, self.owner_key) if document is not None else None
            if catalog is not None and catalog.owner_id != self.owner_key:
                logger.warning(
                    "Stored menu %s belongs to '%s', not '%s'",
                    catalog.id, catalog.owner_id, self.owner_key,
                )
                raise PersistenceError(
                    f"Stored menu {catalog.id} belongs to '{catalog.owner_id}', not '{self.owner_key}'"
                )
            self._state = catalog

            if catalog is None:
                logger.info("No menu stored for '%s'", self.owner_key)
            else:
                logger.info(
                    "Loaded menu %s for '%s' (%d sections)",
                    catalog.id, self.owner_key, len(catalog.sections),
                )
            return catalog

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _acquire(self, wait: bool) -> None:
        if not self._lock.acquire(blocking=wait):
            logger.warning("Rejected mutation for '%s': another one is in flight", self.owner_key)
            raise MutationInProgressError(self.owner_key)

    def apply_mutation(self, operation: Operation, *, wait: bool = True) -> Catalog:
        """
        Apply ``operation``, persist the result and return the new Catalog.

        Args:
            operation: Catalog operation (see mutations.py)
            wait: Block behind an in-flight mutation (True) or reject (False)

        Raises:
            ValidationError: Malformed input; nothing was persisted
            NotFoundError: Unknown catalog/section/item; nothing was persisted
            PersistenceError: Storage rejected the write; state rolled back
            MutationInProgressError: ``wait=False`` and the store is busy
        """
        self._acquire(wait)
        try:
            return self._apply_locked(operation)
        finally:
            self._lock.release()

    def _apply_locked(self, operation: Operation) -> Catalog:
        name = operation_name(operation)
        snapshot = self._state

        try:
            if isinstance(operation, CreateCatalog) and operation.owner_id != self.owner_key:
                raise ValidationError("owner_id", f"does not match store owner '{self.owner_key}'")
            if snapshot is None and not isinstance(operation, CreateCatalog):
                raise NotFoundError("catalog", self.owner_key)
            candidate = apply_operation(
                snapshot, operation, id_generator=self.id_generator, clock=self.clock
            )
        except CatalogError as e:
            logger.warning("%s rejected for '%s': %s", name, self.owner_key, e)
            raise

        try:
            self.gateway.replace_document(self.owner_key, denormalize_catalog(candidate))
        except PersistenceError as e:
            logger.warning("%s for '%s' not persisted, state kept at previous version: %s", name, self.owner_key, e)
            raise

        self._state = candidate
        logger.info("%s applied to menu %s for '%s'", name, candidate.id, self.owner_key)
        return candidate

    # ------------------------------------------------------------------
    # Convenience wrappers
    # ------------------------------------------------------------------

    def create_catalog(self, name: Optional[str] = None, *, business_name: str = "", wait: bool = True) -> Catalog:
        """
        Create the owner's menu; fails if one already exists.

        Without an explicit ``name`` the menu is called "<business_name>'s Menu".
        """
        if name is None:
            name = default_catalog_name(business_name)
        return self.apply_mutation(CreateCatalog(self.owner_key, name), wait=wait)

    def add_section(self, name: str, *, wait: bool = True) -> Section:
        """Append a section and return it (with its new id)."""
        return self.apply_mutation(AddSection(name), wait=wait).sections[-1]

    def rename_section(self, section_id: str, new_name: str, *, wait: bool = True) -> Catalog:
        return self.apply_mutation(RenameSection(section_id, new_name), wait=wait)

    def remove_section(self, section_id: str, *, wait: bool = True) -> Catalog:
        return self.apply_mutation(RemoveSection(section_id), wait=wait)

    def add_item(self, section_id: str, fields: ItemFields, *, wait: bool = True) -> Item:
        """Append an item to a section and return it (with its new id)."""
        catalog = self.apply_mutation(AddItem(section_id, fields), wait=wait)
        for section in catalog.sections:
            if section.id == section_id:
                return section.items[-1]
        raise NotFoundError("section", section_id)

    def remove_item(self, section_id: str, item_id: str, *, wait: bool = True) -> Catalog:
        return self.apply_mutation(RemoveItem(section_id, item_id), wait=wait)


class StoreRegistry:
    """Hands out one CatalogStore per owner key, sharing a gateway."""

    def __init__(
        self,
        gateway: PersistenceGateway,
        id_generator: Optional[IdentifierGenerator] = None,
        clock: Optional[UtcClock] = None,
    ):
        self.gateway = gateway
        self.id_generator = id_generator
        self.clock = clock
        self._stores: Dict[str, CatalogStore] = {}
        self._lock = threading.Lock()

    def get(self, owner_key: str) -> CatalogStore:
        """Return the store for ``owner_key``, creating it on first use."""
        with self._lock:
            store = self._stores.get(owner_key)
            if store is None:
                store = CatalogStore(
                    owner_key,
                    self.gateway,
                    id_generator=self.id_generator,
                    clock=self.clock,
                )
                self._stores[owner_key] = store
            return store

    def owners(self) -> list[str]:
        with self._lock:
            return list(self._stores)
