"""
Catalog Adapter
===============

Normalizes stored menu documents into the Catalog record type.

Menus written by older versions of the admin used different key names
for the same fields. This adapter is the only place that knows about
them; everything past the storage boundary sees a Catalog:

{
  "id": "...",
  "businessId": "...",
  "name": "...",
  "sections": [{"id", "name", "products": [...]}],
  "created_at": "...",
  "updated_at": "..."
}

Related Files:
- menu_services/models.py: Catalog, Section, Item
- menu_services/catalog/store.py: calls normalize/denormalize around the gateway
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from ..errors import PersistenceError
from ..models import Catalog, Item, Section
from ..utils import format_timestamp, parse_timestamp

_OWNER_KEYS = ("businessId", "business_id", "ownerId", "owner_id")
_CHILD_KEYS = ("products", "items")
_CREATED_KEYS = ("created_at", "createdAt")
_UPDATED_KEYS = ("updated_at", "updatedAt")
_IMAGE_KEYS = ("imageUrl", "image_url", "image")


def _first(data: Dict[str, Any], keys, default: Any = None) -> Any:
    """Return the first present, non-None value among ``keys``."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _timestamp(value: Any, field: str) -> str:
    """Canonical form of a stored timestamp, or PersistenceError if unreadable."""
    try:
        return format_timestamp(parse_timestamp(_text(value)))
    except ValueError as e:
        raise PersistenceError(f"Stored menu has a corrupt {field}: {value!r}") from e


def _normalize_item(raw: Dict[str, Any]) -> Optional[Item]:
    if not raw.get("id"):
        return None
    return Item(
        id=str(raw["id"]),
        name=_text(raw.get("name")),
        price=_text(raw.get("price")),
        description=_text(raw.get("description")),
        image_url=_text(_first(raw, _IMAGE_KEYS)) or None,
    )


def _normalize_section(raw: Dict[str, Any]) -> Optional[Section]:
    if not raw.get("id"):
        return None
    children = _first(raw, _CHILD_KEYS, [])
    if not isinstance(children, list):
        children = []
    items = [_normalize_item(p) for p in children if isinstance(p, dict)]
    return Section(
        id=str(raw["id"]),
        name=_text(raw.get("name")),
        items=tuple(i for i in items if i is not None),
    )


def normalize_catalog(raw: Any, owner_key: Optional[str] = None) -> Catalog:
    """
    Normalize a stored menu document to a Catalog.
    
    Args:
        raw: Document as returned by the storage gateway
        owner_key: Storage key, used when the document lacks an owner field
        
    Returns:
        Catalog
        
    Raises:
        PersistenceError: If the document is not a usable menu
    """
    if not isinstance(raw, dict):
        raise PersistenceError(f"Stored menu is not an object: {type(raw).__name__}")
    if not raw.get("id"):
        raise PersistenceError("Stored menu has no id")
    
    sections_raw = raw.get("sections", [])
    if not isinstance(sections_raw, list):
        sections_raw = []
    sections: List[Section] = []
    for s in sections_raw:
        if isinstance(s, dict):
            section = _normalize_section(s)
            if section is not None:
                sections.append(section)
    
    created_at = _text(_first(raw, _CREATED_KEYS))
    updated_at = _text(_first(raw, _UPDATED_KEYS)) or created_at
    if not updated_at:
        raise PersistenceError("Stored menu has no timestamps")
    updated_at = _timestamp(updated_at, "updated_at")
    created_at = _timestamp(created_at, "created_at") if created_at else updated_at
    
    return Catalog(
        id=str(raw["id"]),
        owner_id=_text(_first(raw, _OWNER_KEYS, owner_key)),
        name=_text(raw.get("name")),
        created_at=created_at,
        updated_at=updated_at,
        sections=tuple(sections),
    )


def denormalize_catalog(catalog: Catalog) -> Dict[str, Any]:
    """Convert a Catalog to the canonical JSON-compatible document."""
    return catalog.to_dict()


def default_catalog_name(business_name: str) -> str:
    """Name given to a menu created for a business that has none."""
    business_name = (business_name or "").strip()
    return f"{business_name}'s Menu" if business_name else "Menu"
