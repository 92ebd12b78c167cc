"""ID generation utilities."""

from __future__ import annotations
import hashlib
import itertools
import re
import secrets
from typing import Iterable, Optional


def slugify(text: str) -> str:
    """
    Convert text to URL-safe slug.
    
    Examples:
        'Hot Drinks' -> 'hot_drinks'
        'Café & Bar 24!' -> 'caf_bar_24'
    """
    text = (text or "").strip().lower()
    text = re.sub(r"[^a-z0-9]+", "_", text)
    text = re.sub(r"_+", "_", text).strip("_")
    return text or "item"


def storage_key(key: str) -> str:
    """
    File-safe name for an owner key.
    
    The slug keeps names readable; the digest of the raw key keeps apart
    keys that slugify alike ('Biz-1' and 'biz_1', or all-punctuation keys).
    
    Examples:
        'Biz-1' -> 'biz_1_<12 hex chars>'
    """
    digest = hashlib.sha256((key or "").encode("utf-8")).hexdigest()[:12]
    return f"{slugify(key)}_{digest}"


class IdentifierGenerator:
    """
    Produces ids for new catalogs, sections and items.

    Ids have the form ``<kind>-<slug>-<salt><n>``. The counter is monotonic
    for the lifetime of the generator, so an id is never handed out twice by
    the same generator; ``existing_ids`` additionally guards against ids
    already present in a catalog loaded from storage.
    """

    def __init__(self, salt: Optional[str] = None):
        self.salt = salt if salt is not None else secrets.token_hex(2)
        self._counter = itertools.count(1)

    def next_id(self, kind: str, name: str = "", existing_ids: Iterable[str] = ()) -> str:
        existing = set(existing_ids)
        slug = slugify(name)
        while True:
            candidate = f"{kind}-{slug}-{self.salt}{next(self._counter)}"
            if candidate not in existing:
                return candidate
