"""
Environment helpers.

Developers usually keep the session credential in a repo-local `.env` file rather than
exporting it in every shell. This module loads that file once, without ever overriding
variables that are already set in the process environment.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load `.env` once if present; returns the loaded env path (or None)."""
    # Respect explicit env file path if provided.
    explicit = os.getenv("RBXWEB_ENV_FILE")
    if explicit:
        env_path = Path(explicit).expanduser().resolve()
        if env_path.is_file():
            load_dotenv(dotenv_path=env_path, override=False)
            return env_path
        return None

    found = find_dotenv(usecwd=True)
    if not found:
        return None
    load_dotenv(dotenv_path=found, override=False)
    return Path(found)
