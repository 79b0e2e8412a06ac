"""
Client configuration.

Resolution order for each value: explicit argument > environment variable >
``~/.config/richnotes/config.json`` > built-in default.

  RICHNOTES_API_URL   base address of the note store
  RICHNOTES_TIMEOUT   HTTP timeout in seconds
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

LOGGER = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 10.0

config_dir = os.path.expanduser("~/.config/richnotes")
config_path = os.path.join(config_dir, "config.json")


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from file; a missing or broken file yields ``{}``."""
    path = path or config_path
    try:
        if os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                return data
            LOGGER.warning("Ignoring config file %s: not a JSON object", path)
    except (json.JSONDecodeError, OSError) as exc:
        LOGGER.warning("Could not load config file %s: %s", path, exc)
    return {}


def _timeout(value: Any) -> Optional[float]:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        LOGGER.warning("Ignoring invalid timeout %r", value)
        return None


def load_settings(
    api_url: Optional[str] = None,
    timeout: Optional[float] = None,
    *,
    config_file: Optional[str] = None,
) -> Settings:
    config = load_config(config_file)
    url = (
        api_url
        or os.getenv("RICHNOTES_API_URL")
        or config.get("api_url")
        or DEFAULT_API_URL
    )
    resolved_timeout = timeout
    for candidate in (os.getenv("RICHNOTES_TIMEOUT"), config.get("timeout")):
        if resolved_timeout is not None:
            break
        resolved_timeout = _timeout(candidate)
    return Settings(
        api_url=str(url).rstrip("/"),
        timeout=DEFAULT_TIMEOUT if resolved_timeout is None else resolved_timeout,
    )
