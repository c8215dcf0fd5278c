"""
trust.txt manifest package.

Trust URI grammar and discovery, manifest fetching over HTTPS, and parsing
into an immutable TrustManifest.
"""

from trusttxt_validator.manifest.fetcher import FetchedManifest, ManifestFetcher
from trusttxt_validator.manifest.models import TrustManifest
from trusttxt_validator.manifest.parser import (
    ParseWarning,
    parse_manifest,
    parse_manifest_with_warnings,
)
from trusttxt_validator.manifest.uri import (
    TrustURI,
    contains_trust_uri,
    find_trust_uri,
    find_trust_uris,
    parse_trust_uri,
    trust_uri_at,
)

__all__ = [
    "FetchedManifest",
    "ManifestFetcher",
    "ParseWarning",
    "TrustManifest",
    "TrustURI",
    "contains_trust_uri",
    "find_trust_uri",
    "find_trust_uris",
    "parse_manifest",
    "parse_manifest_with_warnings",
    "parse_trust_uri",
    "trust_uri_at",
]
