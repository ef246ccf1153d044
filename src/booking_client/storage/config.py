"""User-editable settings for booking-client.

Settings are a flat JSON object in :data:`SETTINGS_FILE`, merged over
:data:`DEFAULTS`.  The ``API_BASE_URL`` environment variable, when set,
overrides ``base_url``.
"""

from __future__ import annotations

import json
import os
from typing import Any

from loguru import logger

from .paths import SETTINGS_FILE, atomic_write

BASE_URL_ENV = "API_BASE_URL"

DEFAULTS: dict[str, Any] = {
    "base_url": "http://10.73.62.120:8000/",
    "timeout": 30.0,
    "credentials_file": None,
}


class AppSettings:
    """Classmethod-only accessor for the settings file."""

    @classmethod
    def load(cls) -> dict[str, Any]:
        """Return defaults merged with the settings file and environment."""
        settings = dict(DEFAULTS)
        if SETTINGS_FILE.exists():
            try:
                stored = json.loads(SETTINGS_FILE.read_text(encoding="utf-8"))
                if isinstance(stored, dict):
                    settings.update(stored)
            except (OSError, ValueError) as exc:
                logger.warning(f"Ignoring unreadable settings file {SETTINGS_FILE}: {exc}")
        env_url = os.environ.get(BASE_URL_ENV)
        if env_url:
            settings["base_url"] = env_url
        return settings

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        return cls.load().get(key, default)

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        """Persist a single setting.  Environment overrides are not saved."""
        stored: dict[str, Any] = {}
        if SETTINGS_FILE.exists():
            try:
                stored = json.loads(SETTINGS_FILE.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                stored = {}
        stored[key] = value
        atomic_write(SETTINGS_FILE, json.dumps(stored, indent=2))
        logger.debug(f"Setting '{key}' saved to {SETTINGS_FILE}")
