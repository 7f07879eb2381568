"""Load environment-driven settings. Uses python-dotenv.

Side-effect free except for loading `.env`. Callers use the accessors below
rather than reading `os.environ` directly, so overrides from `.env` and from the
CLI (which exports API_DESK_* before dispatching) behave the same way.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

APP_DIR_NAME = "api-desk"


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """
    Load .env from the project root, then from the working directory.

    Idempotent. Values already present in the process environment are kept, so
    an exported API_DESK_DATA_DIR beats the one in `.env`.
    """
    load_dotenv(_project_root() / ".env", override=False)
    load_dotenv(Path.cwd() / ".env", override=False)


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or blank."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


# --- Public config accessors ---

def data_dir() -> Path:
    """
    Data root holding `collections/` and `environments.json`.

    API_DESK_DATA_DIR wins; otherwise $XDG_DATA_HOME/api-desk, falling back to
    ~/.local/share/api-desk.
    """
    explicit = get_optional("API_DESK_DATA_DIR")
    if explicit:
        return Path(explicit).expanduser()
    xdg = get_optional("XDG_DATA_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".local" / "share"
    return base / APP_DIR_NAME


def log_level() -> int:
    """Optional: API_DESK_LOG_LEVEL as a level name (DEBUG, INFO, ...). Default INFO."""
    name = get_optional("API_DESK_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def log_file() -> Path | None:
    """Optional: API_DESK_LOG_FILE. None logs to stderr only."""
    val = get_optional("API_DESK_LOG_FILE")
    return Path(val).expanduser() if val else None
