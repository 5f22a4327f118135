"""Config file discovery.

Walks up from the working directory looking for ``dealref.toml``, the way
git finds ``.git/``. The ``DEALREF_CONFIG`` env var short-circuits the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "dealref.toml"
CONFIG_ENV_VAR = "DEALREF_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``dealref.toml`` at or above *start* (default: cwd).

    When ``DEALREF_CONFIG`` is set, returns that path if it is a file and
    None otherwise, without walking.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent
