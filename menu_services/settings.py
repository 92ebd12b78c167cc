"""
Settings
========

Runtime configuration, read from the environment or Streamlit secrets.

Keys:
- GITHUB_GIST_ID / GITHUB_TOKEN: Gist used as primary menu storage
- DISABLE_GIST: '1' / 'true' forces local-only storage
- MENU_DATA_DIR: directory for local menu files (default data/menus)
- MENU_REQUEST_TIMEOUT: HTTP timeout in seconds (default 15)
- MENU_FALLBACK_TO_CACHE: serve the local copy when the Gist cannot be read
- MENU_LOG_LEVEL: level used by configure_logging (default INFO)
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .utils import get_data_dir, get_secret
from .utils.env import is_truthy


@dataclass
class Settings:
    gist_id: Optional[str] = None
    gist_token: Optional[str] = None
    gist_disabled: bool = False
    data_dir: Path = field(default_factory=get_data_dir)
    request_timeout: float = 15.0
    fallback_to_cache: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        data_dir = get_secret("MENU_DATA_DIR")
        timeout = get_secret("MENU_REQUEST_TIMEOUT")
        return cls(
            gist_id=get_secret("GITHUB_GIST_ID"),
            gist_token=get_secret("GITHUB_TOKEN"),
            gist_disabled=is_truthy(get_secret("DISABLE_GIST")),
            data_dir=Path(data_dir).expanduser().resolve() if data_dir else get_data_dir(),
            request_timeout=float(timeout) if timeout else 15.0,
            fallback_to_cache=is_truthy(get_secret("MENU_FALLBACK_TO_CACHE")),
            log_level=(get_secret("MENU_LOG_LEVEL") or "INFO").upper(),
        )


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a console handler for scripts; libraries should not call this."""
    logging.basicConfig(
        level=(level or "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
