"""
Catalog Data Model
==================

Immutable records for a business menu:

    Catalog -> ordered Sections -> ordered Items

Records are frozen dataclasses holding tuples, so a Catalog handed out by
the store can be shared freely; every change produces a new Catalog.

Related Files:
- menu_services/catalog/catalog_adapter.py: stored dict -> Catalog at the storage boundary
- menu_services/repositories/: section and item operations
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Item:
    """A single menu entry. ``price`` is an opaque display string."""

    id: str
    name: str
    price: str
    description: str = ""
    image_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "description": self.description,
        }
        if self.image_url:
            data["imageUrl"] = self.image_url
        return data


@dataclass(frozen=True)
class Section:
    """A named, ordered group of items."""

    id: str
    name: str
    items: Tuple[Item, ...] = ()

    def item_ids(self) -> Tuple[str, ...]:
        return tuple(item.id for item in self.items)

    def with_items(self, items) -> "Section":
        return replace(self, items=tuple(items))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "products": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class Catalog:
    """Top-level per-owner menu document."""

    id: str
    owner_id: str
    name: str
    created_at: str
    updated_at: str
    sections: Tuple[Section, ...] = field(default=())

    def all_ids(self) -> set[str]:
        """Every id in use inside this catalog (catalog, sections, items)."""
        ids = {self.id}
        for section in self.sections:
            ids.add(section.id)
            ids.update(section.item_ids())
        return ids

    def with_sections(self, sections, updated_at: str) -> "Catalog":
        return replace(self, sections=tuple(sections), updated_at=updated_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "businessId": self.owner_id,
            "name": self.name,
            "sections": [section.to_dict() for section in self.sections],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
