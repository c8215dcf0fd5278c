"""
Configuration for the trust.txt validator.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for timeouts, validator endpoint and API binding.
"""

from trusttxt_validator.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
