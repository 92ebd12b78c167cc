"""Secret and setting lookup: environment first, then Streamlit secrets."""

from __future__ import annotations
import os
from typing import Optional


def get_secret(name: str) -> Optional[str]:
    """Get secret from environment or Streamlit secrets."""
    value = os.environ.get(name)
    if value:
        return value
    try:
        import streamlit as st
        value = st.secrets.get(name)
    except Exception:
        return None
    return str(value) if value is not None else None


def is_truthy(value: Optional[str]) -> bool:
    """Interpret a flag-style setting ('1', 'true', 'yes')."""
    return (value or "").strip().lower() in ("1", "true", "yes", "on")
