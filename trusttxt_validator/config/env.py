"""
Environment variable loading for the trust.txt validator.

- DOWNLOAD_TIMEOUT: manifest fetch timeout in milliseconds (default: 5000)
- TRUST_VALIDATOR_URL: delegated validation endpoint (POST {"url": ...}); unset disables it
- VALIDATOR_TIMEOUT: delegated validation timeout in milliseconds (default: 5000)
- TRUST_LOCAL_STORE_PATH: JSON file backing the persistent auto-verify flag
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: config is trusttxt_validator/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_DOWNLOAD_TIMEOUT_MS = 5000
DEFAULT_VALIDATOR_TIMEOUT_MS = 5000
DEFAULT_LOCAL_STORE_PATH = ".trust_settings.json"
DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 8000


def load_validator_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    from dotenv import load_dotenv

    load_dotenv(_ENV_PATH)


def env_str(name: str, default: str | None = None) -> str | None:
    """Return the stripped env value, or default when unset/blank."""
    raw = (os.getenv(name) or "").strip()
    return raw or default


def env_int(name: str, default: int) -> int:
    """Return a positive int from env; invalid or non-positive values fall back to default."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_download_timeout_ms() -> int:
    """Manifest fetch timeout (ms). Order: DOWNLOAD_TIMEOUT > 5000."""
    load_validator_env()
    return env_int("DOWNLOAD_TIMEOUT", DEFAULT_DOWNLOAD_TIMEOUT_MS)


def get_validator_url() -> str | None:
    """Delegated validator endpoint, or None when not configured."""
    load_validator_env()
    return env_str("TRUST_VALIDATOR_URL")


def get_validator_timeout_ms() -> int:
    """Delegated validator timeout (ms). Order: VALIDATOR_TIMEOUT > 5000."""
    load_validator_env()
    return env_int("VALIDATOR_TIMEOUT", DEFAULT_VALIDATOR_TIMEOUT_MS)


def get_local_store_path() -> Path:
    """Path of the JSON file holding persistent flags (autoVerifyTrustUris)."""
    load_validator_env()
    return Path(env_str("TRUST_LOCAL_STORE_PATH", DEFAULT_LOCAL_STORE_PATH) or DEFAULT_LOCAL_STORE_PATH)
