"""
GitHub Gist storage implementation.
Keeps one menu document per owner key as a file inside a single Gist.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, Optional

import requests

from ..errors import PersistenceError
from ..utils import storage_key

logger = logging.getLogger(__name__)

GIST_API_URL = "https://api.github.com/gists"


def filename_for(key: str) -> str:
    """Gist filename holding the menu for ``key``."""
    return f"menu_{storage_key(key)}.json"


class GistStorage:
    """Handles GitHub Gist API operations for menu documents."""
    
    def __init__(self, gist_id: Optional[str], token: Optional[str], timeout: float = 15.0):
        self.gist_id = gist_id
        self.token = token
        self.timeout = timeout
    
    def is_available(self) -> bool:
        """Check if Gist storage is configured."""
        return bool(self.gist_id and self.token)
    
    def _url(self) -> str:
        if not self.gist_id:
            raise PersistenceError("Missing GIST_ID")
        return f"{GIST_API_URL}/{self.gist_id}"
    
    def _headers(self) -> Dict[str, str]:
        """Build headers for Gist API requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "Content-Type": "application/json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers
    
    def _file_content(self, entry: Dict[str, Any]) -> str:
        """Return full file content, following raw_url when GitHub truncated it."""
        if not entry.get("truncated") or not entry.get("raw_url"):
            return entry.get("content") or ""
        
        try:
            response = requests.get(entry["raw_url"], headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise PersistenceError(f"Gist raw fetch error: {e}") from e
        return response.text
    
    def fetch_document(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Load the menu for ``key`` from the Gist.
        
        Returns:
            Menu document, or None if the Gist has no file for this key
            
        Raises:
            PersistenceError: If fetch fails or the file is not valid JSON
        """
        url = self._url()
        filename = filename_for(key)
        logger.debug("GET %s (%s)", url, filename)
        
        try:
            response = requests.get(url, headers=self._headers(), timeout=self.timeout)
            
            if response.status_code in (401, 403, 404):
                raise PersistenceError(
                    f"Gist fetch unauthorized/unavailable (HTTP {response.status_code})"
                )
            
            response.raise_for_status()
            
        except requests.RequestException as e:
            raise PersistenceError(f"Gist fetch error: {e}") from e
        
        try:
            payload = response.json()
        except ValueError as e:
            raise PersistenceError(f"Gist response is not valid JSON: {e}") from e

        files = payload.get("files") if isinstance(payload, dict) else None
        if not isinstance(files, dict):
            raise PersistenceError("Gist response has no 'files' object")

        entry = files.get(filename)
        if not entry:
            return None
        if not isinstance(entry, dict):
            raise PersistenceError(f"Gist file entry {filename} is malformed")
        
        content = self._file_content(entry)
        if not content.strip():
            return None
        
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Gist file {filename} is not valid JSON: {e}") from e
    
    def replace_document(self, key: str, document: Dict[str, Any]) -> None:
        """
        Overwrite the menu file for ``key`` with ``document``.
        
        Raises:
            PersistenceError: If save fails
        """
        url = self._url()
        filename = filename_for(key)
        body = {
            "files": {
                filename: {
                    "content": json.dumps(document, ensure_ascii=False, indent=2)
                }
            }
        }
        logger.debug("PATCH %s (%s)", url, filename)
        
        try:
            response = requests.patch(
                url,
                headers=self._headers(),
                data=json.dumps(body),
                timeout=self.timeout
            )
            
            if response.status_code in (401, 403, 404):
                raise PersistenceError(
                    f"Gist save unauthorized/unavailable (HTTP {response.status_code})"
                )
            
            response.raise_for_status()
            
        except requests.RequestException as e:
            raise PersistenceError(f"Gist save error: {e}") from e
