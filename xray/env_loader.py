"""xray.env_loader

Loads environment variables from a .env file using python-dotenv.

Lookup order: explicit `dotenv_path`, then `XRAY_ENV_FILE`, then the nearest
`.env` above the current working directory (`find_dotenv`). Already-set
environment variables win unless `override=True`.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


def load_env(dotenv_path: str | None = None, override: bool = False) -> str | None:
    """Load env vars from .env; returns the file used, or None."""
    explicit = dotenv_path or os.getenv("XRAY_ENV_FILE")
    if explicit:
        path = Path(explicit).expanduser()
        found = str(path) if path.is_file() else ""
    else:
        found = find_dotenv(usecwd=True)

    if not found:
        return None
    load_dotenv(dotenv_path=found, override=override)
    return found
