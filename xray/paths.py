"""xray.paths

Helpers for resolving file system paths consistently (Streamlit and the CLI can run from different CWDs).
"""

from __future__ import annotations
from pathlib import Path


def project_root() -> Path:
    """Return the repository root folder (parent of `xray/`)."""
    return Path(__file__).resolve().parents[1]


def data_dir() -> Path:
    """Return the default data directory under the repo."""
    return project_root() / "data"


def traces_dir() -> Path:
    """Default directory for the JSON record store."""
    return data_dir() / "traces"


def streamlit_app_path() -> Path:
    return project_root() / "ui" / "streamlit_app.py"
