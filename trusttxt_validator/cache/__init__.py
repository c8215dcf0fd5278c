"""
Result cache and key/value stores (session and persistent).
"""

from trusttxt_validator.cache.store import (
    TRUST_RESULTS_KEY,
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    ResultCache,
)

__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore", "ResultCache", "TRUST_RESULTS_KEY"]
