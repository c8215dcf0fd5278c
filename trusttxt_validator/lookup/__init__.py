"""
Lookup service: resolve, cache and report Trust URI results per page.
"""

from trusttxt_validator.lookup.service import (
    AUTO_VERIFY_KEY,
    LookupSource,
    TrustLookupService,
    build_service,
    new_http_client,
    should_store,
)

__all__ = [
    "AUTO_VERIFY_KEY",
    "LookupSource",
    "TrustLookupService",
    "build_service",
    "new_http_client",
    "should_store",
]
