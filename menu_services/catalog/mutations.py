"""
Catalog mutations.

Operations are plain value objects; ``apply_operation`` turns
(current catalog, operation) into the next catalog without side effects.
Errors are raised before anything is persisted.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from ..errors import NotFoundError, ValidationError
from ..models import Catalog
from ..repositories import ItemFields, ItemRepository, SectionRepository, require_text
from ..utils import IdentifierGenerator, UtcClock


@dataclass(frozen=True)
class CreateCatalog:
    owner_id: str
    name: str


@dataclass(frozen=True)
class AddSection:
    name: str


@dataclass(frozen=True)
class RenameSection:
    section_id: str
    new_name: str


@dataclass(frozen=True)
class RemoveSection:
    section_id: str


@dataclass(frozen=True)
class AddItem:
    section_id: str
    fields: ItemFields


@dataclass(frozen=True)
class RemoveItem:
    section_id: str
    item_id: str


Operation = Union[CreateCatalog, AddSection, RenameSection, RemoveSection, AddItem, RemoveItem]


def operation_name(operation: Operation) -> str:
    return type(operation).__name__


def _create(operation: CreateCatalog, id_generator: IdentifierGenerator, clock: UtcClock) -> Catalog:
    owner_id = require_text(operation.owner_id, "owner_id")
    name = require_text(operation.name, "name")
    now = clock.timestamp()
    return Catalog(
        id=id_generator.next_id("menu", owner_id),
        owner_id=owner_id,
        name=name,
        created_at=now,
        updated_at=now,
    )


def apply_operation(
    catalog: Optional[Catalog],
    operation: Operation,
    *,
    id_generator: IdentifierGenerator,
    clock: UtcClock,
) -> Catalog:
    """
    Compute the catalog that results from applying ``operation``.
    
    Args:
        catalog: Current catalog, or None if the owner has none yet
        operation: One of the operation types above
        id_generator: Source of ids for new catalogs, sections and items
        clock: Source of timestamps
        
    Returns:
        New Catalog; ``catalog`` is left untouched
        
    Raises:
        ValidationError: Blank required field, or creating a second catalog
        NotFoundError: Unknown catalog, section or item
        TypeError: Unsupported operation object
    """
    if isinstance(operation, CreateCatalog):
        if catalog is not None:
            raise ValidationError("catalog", "already exists")
        return _create(operation, id_generator, clock)
    
    if catalog is None:
        raise NotFoundError("catalog", "(none)")
    
    updated_at = clock.tick(catalog.updated_at)
    
    if isinstance(operation, AddSection):
        return SectionRepository.add(catalog, operation.name, id_generator, updated_at)[0]
    if isinstance(operation, RenameSection):
        return SectionRepository.rename(catalog, operation.section_id, operation.new_name, updated_at)
    if isinstance(operation, RemoveSection):
        return SectionRepository.delete(catalog, operation.section_id, updated_at)
    if isinstance(operation, AddItem):
        return ItemRepository.add(catalog, operation.section_id, operation.fields, id_generator, updated_at)[0]
    if isinstance(operation, RemoveItem):
        return ItemRepository.delete(catalog, operation.section_id, operation.item_id, updated_at)
    
    raise TypeError(f"Unsupported catalog operation: {operation!r}")
