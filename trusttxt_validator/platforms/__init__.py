"""
Social platform registry: account URL -> (platform, handle).
"""

from trusttxt_validator.platforms.registry import (
    DEFAULT_REGISTRY,
    KNOWN_PLATFORMS,
    AccountMatch,
    FallbackPlatform,
    HostPathPlatform,
    Platform,
    PlatformRegistry,
)

__all__ = [
    "AccountMatch",
    "DEFAULT_REGISTRY",
    "FallbackPlatform",
    "HostPathPlatform",
    "KNOWN_PLATFORMS",
    "Platform",
    "PlatformRegistry",
]
