"""
Tests for trust.txt parsing: comments, malformed lines, unknown variables,
category order and serialization back to text.
"""

from __future__ import annotations

import pytest

from trusttxt_validator.manifest.models import TrustManifest
from trusttxt_validator.manifest.parser import parse_manifest, parse_manifest_with_warnings

SAMPLE = """\
# trust.txt for acme.example
member=https://partner.example
belongto=https://federation.example

social=https://twitter.com/acme
SOCIAL = https://www.youtube.com/@acme
control=https://sub.acme.example
controlledby=https://parent.example
vendor=https://vendor.example
customer=https://customer.example
disclosure=https://acme.example/disclosure
contact=mailto:press@acme.example
datatrainingallowed=yes
"""


def test_parse_all_categories_in_order():
    m = parse_manifest(SAMPLE)
    assert m.member == ("https://partner.example",)
    assert m.belong_to == ("https://federation.example",)
    assert m.social == ("https://twitter.com/acme", "https://www.youtube.com/@acme")
    assert m.control == ("https://sub.acme.example",)
    assert m.controlled_by == ("https://parent.example",)
    assert m.vendor == ("https://vendor.example",)
    assert m.customer == ("https://customer.example",)
    assert m.disclosure == ("https://acme.example/disclosure",)
    assert m.contact == ("mailto:press@acme.example",)
    assert m.data_training_allowed is True


def test_empty_and_comment_only_input_yields_empty_manifest():
    assert parse_manifest("") == TrustManifest()
    assert parse_manifest("# nothing\n\n   \n# more").is_empty()


def test_malformed_lines_are_skipped():
    m = parse_manifest("social\nsocial=\n=https://x.example\nsocial=https://github.com/acme\n")
    assert m.social == ("https://github.com/acme",)


def test_value_keeps_text_after_first_equals():
    m = parse_manifest("social=https://example.org/profile?id=42\n")
    assert m.social == ("https://example.org/profile?id=42",)


def test_unknown_variables_are_warned_not_fatal():
    m, warnings = parse_manifest_with_warnings("foo=bar\nsocial=https://github.com/acme\nbaz=1\n")
    assert m.social == ("https://github.com/acme",)
    assert [w.variable for w in warnings] == ["foo", "baz"]
    assert warnings[0].line_number == 1
    assert warnings[1].line_number == 3


def test_data_training_allowed_only_for_yes():
    assert parse_manifest("datatrainingallowed=YES").data_training_allowed is True
    assert parse_manifest("datatrainingallowed=no").data_training_allowed is False
    assert parse_manifest("datatrainingallowed=true").data_training_allowed is False
    assert parse_manifest("member=a.example").data_training_allowed is False


def test_crlf_line_endings():
    m = parse_manifest("social=https://github.com/acme\r\nmember=a.example\r\n")
    assert m.social == ("https://github.com/acme",)
    assert m.member == ("a.example",)


def test_serialize_then_parse_keeps_social_order():
    m = parse_manifest("social=https://b.example\nmember=x.example\nsocial=https://a.example\n")
    again = parse_manifest(m.to_text())
    assert again == m
    assert again.social == ("https://b.example", "https://a.example")


def test_full_manifest_survives_serialization():
    m = parse_manifest(SAMPLE)
    assert parse_manifest(m.to_text()) == m


def test_manifest_is_immutable():
    m = parse_manifest("social=https://github.com/acme")
    with pytest.raises(AttributeError):
        m.social = ()  # type: ignore[misc]
    assert m.to_dict()["social"] == ["https://github.com/acme"]


def test_value_with_several_equals_signs_is_kept_whole():
    m, warnings = parse_manifest_with_warnings(
        "social=https://example.org/p?a=1&b=2\n"
        "contact=key=value=more\n"
    )
    assert m.social == ("https://example.org/p?a=1&b=2",)
    assert m.contact == ("key=value=more",)
    assert warnings == []
