"""
Tests for Trust URI parsing, discovery predicates and URL helpers.
"""

from __future__ import annotations

import pytest

from trusttxt_validator.core.exceptions import InvalidTrustUri
from trusttxt_validator.manifest.uri import (
    contains_trust_uri,
    display_base_url,
    find_trust_uri,
    find_trust_uris,
    get_base_url,
    hostname_of,
    manifest_url_for,
    parse_trust_uri,
    strip_www,
    trust_uri_at,
)


def test_parse_trust_uri_domain_and_path():
    uri = parse_trust_uri("trust://acme.example/news!")
    assert uri.domain == "acme.example"
    assert uri.path == "/news"
    assert uri.raw == "trust://acme.example/news!"


def test_manifest_url_drops_path_and_terminator():
    assert manifest_url_for("trust://acme.example!") == "https://acme.example/.well-known/trust.txt"
    assert manifest_url_for("trust://acme.example/") == "https://acme.example/.well-known/trust.txt"
    assert manifest_url_for("trust://acme.example/a/b!") == "https://acme.example/.well-known/trust.txt"


@pytest.mark.parametrize("bad", ["https://acme.example", "acme.example", "", "trust://", "trust://!"])
def test_parse_trust_uri_rejects_invalid(bad):
    with pytest.raises(InvalidTrustUri, match="Invalid trust URI"):
        parse_trust_uri(bad)


def test_display_base_url():
    assert display_base_url("trust://acme.example!") == "https://acme.example"
    assert display_base_url("trust://acme.example/") == "https://acme.example"
    assert parse_trust_uri("trust://acme.example/news!").site_url == "https://acme.example/news"


def test_contains_and_find_trust_uri():
    text = "Verify us: trust://acme.example! and trust://other.example/x!"
    assert contains_trust_uri(text) is True
    assert contains_trust_uri("no uri here") is False
    assert contains_trust_uri(None) is False
    assert find_trust_uri(text) == "trust://acme.example!"
    assert find_trust_uris(text) == ["trust://acme.example!", "trust://other.example/x!"]


def test_find_trust_uri_stops_at_markup():
    assert find_trust_uri("<b>trust://acme.example/p<br>") == "trust://acme.example/p"


def test_find_trust_uris_dedupes():
    assert find_trust_uris("trust://a.example! trust://a.example!") == ["trust://a.example!"]


def test_trust_uri_at_offset():
    text = "see trust://acme.example! here"
    start = text.index("trust://")
    assert trust_uri_at(text, start + 3) == "trust://acme.example!"
    assert trust_uri_at(text, 0) == "trust://acme.example!"
    assert trust_uri_at(text, len(text) - 1) is None
    assert trust_uri_at("plain text", 2) is None


def test_get_base_url_strips_query_fragment_and_slash():
    assert get_base_url("https://Twitter.com/acme/?s=20#x") == "https://twitter.com/acme"
    assert get_base_url("https://example.org/") == "https://example.org"
    assert get_base_url("https://example.org:8443/a") == "https://example.org:8443/a"


def test_hostname_helpers():
    assert hostname_of("https://WWW.Example.org/page") == "www.example.org"
    assert hostname_of("not a url") == ""
    assert strip_www("www.example.org") == "example.org"
    assert strip_www("wwwexample.org") == "wwwexample.org"
