"""Repository layer: pure section and item operations on a Catalog."""

from .section_repository import SectionRepository
from .item_repository import ItemFields, ItemRepository
from .validation import require_text

__all__ = ["SectionRepository", "ItemRepository", "ItemFields", "require_text"]
