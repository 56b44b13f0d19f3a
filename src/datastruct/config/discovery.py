"""Locate the datastruct.toml that applies to a working directory.

``DATASTRUCT_CONFIG`` names a file directly and disables the search;
otherwise the nearest ``datastruct.toml`` in *start* or any ancestor wins.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "datastruct.toml"
CONFIG_ENV_VAR = "DATASTRUCT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
