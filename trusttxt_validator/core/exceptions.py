"""
Application-level exceptions.

Fetch failures are raised by the manifest fetcher and converted into
ErrorResult at the matching-engine boundary; they never escape resolve().
"""

from __future__ import annotations


class TrustValidatorError(Exception):
    """Base class for all trusttxt_validator errors."""


class FetchError(TrustValidatorError):
    """Manifest could not be obtained for a Trust URI."""


class InvalidTrustUri(FetchError):
    """Text is not a trust:// URI with a domain."""

    def __init__(self, trust_uri: str) -> None:
        super().__init__(f"Invalid trust URI: {trust_uri}")
        self.trust_uri = trust_uri


class FetchTimeout(FetchError):
    """Request exceeded its timeout and was cancelled."""

    def __init__(self, url: str, timeout_ms: int) -> None:
        super().__init__(f"HTTP timeout of {timeout_ms}ms to {url}")
        self.url = url
        self.timeout_ms = timeout_ms


class TransportError(FetchError):
    """Connection, TLS or protocol failure before a response was received."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"HTTP error: {reason}")
        self.reason = reason


class HttpStatusError(FetchError):
    """Server answered with a non-success status code."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP error: {status_code}")
        self.status_code = status_code


class DelegatedValidatorUnavailable(TrustValidatorError):
    """Delegated validation endpoint not configured, unreachable, or returned garbage."""
