"""Section repository - handles section operations on a catalog."""

from __future__ import annotations
from typing import Optional, Tuple

from ..errors import NotFoundError
from ..models import Catalog, Section
from ..utils import IdentifierGenerator
from .validation import require_text


class SectionRepository:
    """Manages the ordered sections of a catalog. Never mutates its input."""
    
    @staticmethod
    def get_by_id(catalog: Catalog, section_id: str) -> Optional[Section]:
        """Get section by ID."""
        for section in catalog.sections:
            if section.id == section_id:
                return section
        return None
    
    @staticmethod
    def require(catalog: Catalog, section_id: str) -> Section:
        """Get section by ID or raise NotFoundError."""
        section = SectionRepository.get_by_id(catalog, section_id)
        if section is None:
            raise NotFoundError("section", section_id)
        return section
    
    @staticmethod
    def add(
        catalog: Catalog,
        name: str,
        id_generator: IdentifierGenerator,
        updated_at: str,
    ) -> Tuple[Catalog, Section]:
        """
        Append a new, empty section.
        
        Returns:
            (updated_catalog, new_section)
        """
        name = require_text(name, "name")
        section = Section(
            id=id_generator.next_id("section", name, catalog.all_ids()),
            name=name,
        )
        return catalog.with_sections(catalog.sections + (section,), updated_at), section
    
    @staticmethod
    def rename(catalog: Catalog, section_id: str, new_name: str, updated_at: str) -> Catalog:
        """Rename a section in place, keeping its items and position."""
        new_name = require_text(new_name, "name")
        SectionRepository.require(catalog, section_id)
        
        sections = [
            Section(id=s.id, name=new_name, items=s.items) if s.id == section_id else s
            for s in catalog.sections
        ]
        return catalog.with_sections(sections, updated_at)
    
    @staticmethod
    def delete(catalog: Catalog, section_id: str, updated_at: str) -> Catalog:
        """Delete a section together with all of its items."""
        SectionRepository.require(catalog, section_id)
        
        sections = [s for s in catalog.sections if s.id != section_id]
        return catalog.with_sections(sections, updated_at)
