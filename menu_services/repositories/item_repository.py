"""Item repository - handles item operations within a section."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import NotFoundError
from ..models import Catalog, Item
from ..utils import IdentifierGenerator
from .section_repository import SectionRepository
from .validation import require_text


@dataclass(frozen=True)
class ItemFields:
    """User-entered fields for a new item."""

    name: str
    price: str
    description: str = ""
    image_url: Optional[str] = None


class ItemRepository:
    """Manages items inside the sections of a catalog."""
    
    @staticmethod
    def add(
        catalog: Catalog,
        section_id: str,
        fields: ItemFields,
        id_generator: IdentifierGenerator,
        updated_at: str,
    ) -> Tuple[Catalog, Item]:
        """
        Append a new item to a section.
        
        Returns:
            (updated_catalog, new_item)
            
        Raises:
            ValidationError: If name or price is blank
            NotFoundError: If the section does not exist
        """
        name = require_text(fields.name, "name")
        price = require_text(fields.price, "price")
        section = SectionRepository.require(catalog, section_id)
        
        item = Item(
            id=id_generator.next_id("product", name, catalog.all_ids()),
            name=name,
            price=price,
            description=(fields.description or "").strip(),
            image_url=(fields.image_url or "").strip() or None,
        )
        
        sections = [
            s.with_items(s.items + (item,)) if s.id == section.id else s
            for s in catalog.sections
        ]
        return catalog.with_sections(sections, updated_at), item
    
    @staticmethod
    def delete(catalog: Catalog, section_id: str, item_id: str, updated_at: str) -> Catalog:
        """Delete a single item from a section."""
        section = SectionRepository.require(catalog, section_id)
        if item_id not in section.item_ids():
            raise NotFoundError("item", item_id)
        
        sections = [
            s.with_items(i for i in s.items if i.id != item_id) if s.id == section_id else s
            for s in catalog.sections
        ]
        return catalog.with_sections(sections, updated_at)
