"""Configuration loaded from environment variables."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Project-root .env first, then whatever the process already has
_root = Path(__file__).resolve().parents[2]
load_dotenv(_root / ".env")
load_dotenv()


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)).strip())
    except ValueError:
        return default


# JSON file with keyword table overrides (cities, statuses, sources, ...)
KEYWORD_TABLES_PATH: Optional[str] = os.getenv("KEYWORD_TABLES_PATH") or None

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Upload limits
MAX_UPLOAD_ROWS: int = _env_int("MAX_UPLOAD_ROWS", 5000)
