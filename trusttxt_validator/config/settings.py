"""
Application settings.

Responsibilities:
- Collect configuration from environment variables (and .env via config.env).
- Provide defaults for every optional value.
- Expose typed settings (timeouts, validator endpoint, store path, API binding)
  for use across the fetcher, engine, lookup service and API server.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from trusttxt_validator import __version__
from trusttxt_validator.config.env import (
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    env_int,
    env_str,
    get_download_timeout_ms,
    get_local_store_path,
    get_validator_timeout_ms,
    get_validator_url,
)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration snapshot."""

    download_timeout_ms: int
    validator_url: str | None
    validator_timeout_ms: int
    local_store_path: Path
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT
    user_agent: str = f"trusttxt-validator/{__version__}"


def get_settings() -> Settings:
    """
    Return the current application settings.

    Read from the environment on every call so tests and long-running
    processes pick up changes without a restart.
    """
    return Settings(
        download_timeout_ms=get_download_timeout_ms(),
        validator_url=get_validator_url(),
        validator_timeout_ms=get_validator_timeout_ms(),
        local_store_path=get_local_store_path(),
        api_host=env_str("API_HOST", DEFAULT_API_HOST) or DEFAULT_API_HOST,
        api_port=env_int("API_PORT", DEFAULT_API_PORT),
        user_agent=env_str("TRUST_USER_AGENT", f"trusttxt-validator/{__version__}")
        or f"trusttxt-validator/{__version__}",
    )
