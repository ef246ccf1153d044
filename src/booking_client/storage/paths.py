"""Filesystem locations used by booking-client.

Everything lives under the platform config directory.  Nothing is
created at import time; callers use :func:`ensure_parents` or
:func:`atomic_write`, which create directories on demand.
"""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "booking-client"

CONFIG_DIR: Path = Path(user_config_dir(APP_NAME))

CREDENTIALS_FILE = CONFIG_DIR / "credentials.json"
SETTINGS_FILE = CONFIG_DIR / "settings.json"


def ensure_parents(path: Path) -> Path:
    """Create the parent directories of *path* and return *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* via a temporary sibling and ``os.replace``.

    Readers never observe a half-written file.  On failure the temporary
    file is removed and the ``OSError`` propagates.
    """
    tmp = path.with_suffix(path.suffix + ".tmp")
    ensure_parents(tmp)
    try:
        tmp.write_text(data, encoding="utf-8")
        os.replace(tmp, path)
    except OSError:
        if tmp.exists():
            tmp.unlink()
        raise
