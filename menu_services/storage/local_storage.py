"""
Local file storage implementation.
One JSON file per menu owner under a data directory.
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import PersistenceError
from ..utils import storage_key

logger = logging.getLogger(__name__)


class LocalStorage:
    """Handles local file operations for menu documents."""
    
    def __init__(self, data_dir: Path):
        """
        Initialize local storage.
        
        Args:
            data_dir: Directory holding one <key>.json per owner
        """
        self.data_dir = Path(data_dir)
    
    def path_for(self, key: str) -> Path:
        return self.data_dir / f"{storage_key(key)}.json"
    
    def fetch_document(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Load the menu for ``key``.
        
        Returns:
            Menu document, or None if no file exists
            
        Raises:
            PersistenceError: If the file cannot be read or parsed
        """
        file_path = self.path_for(key)
        if not file_path.exists():
            return None
        
        logger.debug("Reading %s", file_path)
        try:
            with file_path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"{file_path} is not valid JSON: {e}") from e
        except OSError as e:
            raise PersistenceError(f"Could not read {file_path}: {e}") from e
    
    def replace_document(self, key: str, document: Dict[str, Any]) -> None:
        """
        Save the menu for ``key`` with an atomic write.
        
        Raises:
            PersistenceError: If write fails
        """
        file_path = self.path_for(key)
        # Temp file next to the target so os.replace stays on one filesystem
        tmp_path = file_path.with_suffix(".json.tmp")
        
        logger.debug("Writing %s", file_path)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, file_path)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to write menu to {file_path}: {e}") from e
