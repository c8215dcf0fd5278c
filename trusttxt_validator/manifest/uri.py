"""
Trust URI grammar: trust://<domain>[/<path>][!]

Parses Trust URIs, maps them to their manifest URL, and finds them in page
text (the predicate the page scanner and right-click handler rely on).
Also hosts the URL helpers shared by the matching engine.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from trusttxt_validator.core.exceptions import InvalidTrustUri

TRUST_SCHEME = "trust://"
WELL_KNOWN_PATH = "/.well-known/trust.txt"

# Domain, optional path (no '!', whitespace or '<'), optional terminator
TRUST_URI_PATTERN = re.compile(r"trust://([a-zA-Z0-9.-]+)(/[^!\s<]*)?!?")


@dataclass(frozen=True)
class TrustURI:
    """A parsed Trust URI. Path and terminator are kept for display only."""

    raw: str
    domain: str
    path: str = ""

    @property
    def manifest_url(self) -> str:
        return f"https://{self.domain}{WELL_KNOWN_PATH}"

    @property
    def site_url(self) -> str:
        """https:// form shown to users (scheme swapped, '!' and trailing '/' dropped)."""
        return display_base_url(self.raw)


def parse_trust_uri(text: str) -> TrustURI:
    """
    Parse a Trust URI. Raises InvalidTrustUri when text does not start with
    trust:// or carries no domain.
    """
    raw = (text or "").strip()
    if not raw.startswith(TRUST_SCHEME):
        raise InvalidTrustUri(raw)
    match = TRUST_URI_PATTERN.match(raw)
    if match is None:
        raise InvalidTrustUri(raw)
    domain = match.group(1).strip(".")
    if not domain:
        raise InvalidTrustUri(raw)
    return TrustURI(raw=raw, domain=domain, path=match.group(2) or "")


def manifest_url_for(trust_uri: str) -> str:
    """https://<domain>/.well-known/trust.txt for a Trust URI."""
    return parse_trust_uri(trust_uri).manifest_url


def display_base_url(trust_uri: str) -> str:
    """Swap trust:// for https:// and drop a trailing '!' and '/'."""
    url = trust_uri
    if url.startswith(TRUST_SCHEME):
        url = "https://" + url[len(TRUST_SCHEME):]
    if url.endswith("!"):
        url = url[:-1]
    if url.endswith("/"):
        url = url[:-1]
    return url


# -----------------------------------------------------------------------------
# Discovery predicates
# -----------------------------------------------------------------------------


def contains_trust_uri(text: str | None) -> bool:
    """True when a unit of page text contains a Trust URI."""
    if not text:
        return False
    return TRUST_URI_PATTERN.search(text) is not None


def find_trust_uri(text: str | None) -> str | None:
    """First Trust URI in text, or None."""
    if not text:
        return None
    match = TRUST_URI_PATTERN.search(text)
    return match.group(0) if match else None


def find_trust_uris(text: str | None) -> list[str]:
    """All Trust URIs in text, in order, without duplicates."""
    if not text:
        return []
    seen: list[str] = []
    for match in TRUST_URI_PATTERN.finditer(text):
        uri = match.group(0)
        if uri not in seen:
            seen.append(uri)
    return seen


def trust_uri_at(text: str | None, offset: int) -> str | None:
    """
    Trust URI under a click at character offset.

    Only the first URI in text is considered. Offset 0 is accepted as a hit:
    some browsers report 0 for right-clicks regardless of position.
    """
    if not text:
        return None
    match = TRUST_URI_PATTERN.search(text)
    if match is None:
        return None
    if offset == 0 or match.start() <= offset <= match.end():
        return match.group(0)
    return None


# -----------------------------------------------------------------------------
# URL helpers
# -----------------------------------------------------------------------------


def get_base_url(url: str) -> str:
    """
    Origin + path with query, fragment and one trailing slash removed.

    Scheme and host are lower-cased; an explicit port is kept.
    """
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    netloc = (parts.hostname or "").lower()
    if parts.port is not None:
        netloc = f"{netloc}:{parts.port}"
    path = parts.path or "/"
    base = f"{scheme}://{netloc}{path}"
    if base.endswith("/"):
        base = base[:-1]
    return base


def hostname_of(url: str) -> str:
    """Lower-cased hostname of url, or '' when it has none."""
    try:
        return (urlsplit(url.strip()).hostname or "").lower()
    except ValueError:
        return ""


def strip_www(host: str) -> str:
    return host[4:] if host.startswith("www.") else host
