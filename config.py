"""
config.py
Environment-driven settings (python-dotenv). Accessors read at call time so tests
can override values through the environment.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parent

DEFAULT_BRANCHES = ("Nairobi Central", "Mombasa Branch", "Kisumu Outreach", "Nakuru Parish")


def load_config() -> None:
    """Load .env from the project root. Existing environment values win."""
    load_dotenv(ROOT / ".env", override=False)


def get_optional(key: str, default: str = "") -> str:
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# --- Public config accessors ---

def db_file() -> Path:
    """SQLite file holding the durable session record and login accounts."""
    return Path(get_optional("IMANI_DB_FILE", str(ROOT / "imani.db")))


def toast_ttl_ms() -> int:
    return get_optional_int("IMANI_TOAST_TTL_MS", 4000)


def branches() -> tuple[str, ...]:
    raw = get_optional("IMANI_BRANCHES")
    if not raw:
        return DEFAULT_BRANCHES
    return tuple(b.strip() for b in raw.split(",") if b.strip())


def default_branch() -> str:
    return branches()[0]


def bcrypt_rounds() -> int:
    return get_optional_int("IMANI_BCRYPT_ROUNDS", 12)


def church_name() -> str:
    return get_optional("IMANI_CHURCH_NAME", "Imani Central Parish")


def church_region() -> str:
    return get_optional("IMANI_CHURCH_REGION", "Kenya Region")


def log_level() -> str:
    return get_optional("LOG_LEVEL", "INFO").upper()


def log_file() -> Path | None:
    raw = get_optional("LOG_FILE")
    return Path(raw) if raw else None
