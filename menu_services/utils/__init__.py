"""Utility functions."""

from .clock import UtcClock, format_timestamp, parse_timestamp
from .id_generator import IdentifierGenerator, slugify, storage_key
from .path_utils import get_project_root, get_data_dir
from .env import get_secret

__all__ = [
    "UtcClock",
    "format_timestamp",
    "parse_timestamp",
    "IdentifierGenerator",
    "storage_key",
    "slugify",
    "get_project_root",
    "get_data_dir",
    "get_secret",
]
