"""
Tests for severity reduction, icons and popup rendering.
"""

from __future__ import annotations

import pytest

from trusttxt_validator.engine import (
    AccountResult,
    ErrorResult,
    Finding,
    MultipleResult,
    NotFoundResult,
)
from trusttxt_validator.platforms import AccountMatch
from trusttxt_validator.presentation import Severity, icon_for, render, result_severity, severity
from trusttxt_validator.presentation.messages import ERROR_COLOR, SUCCESS_COLOR, WARNING_COLOR


def _f(status: str) -> Finding:
    return Finding(status, "acme.example", "")


@pytest.mark.parametrize(
    "statuses,expected",
    [
        ([], Severity.INVALID),
        (["not found"], Severity.INVALID),
        (["error", "not found"], Severity.INVALID),
        (["found"], Severity.CHECKMARK),
        (["found", "found"], Severity.CHECKMARK),
        (["found", "not found"], Severity.WARNING),
        (["found", "error"], Severity.WARNING),
        (["found", "something else"], Severity.CHECKMARK),
    ],
)
def test_severity_table(statuses, expected):
    assert severity([_f(s) for s in statuses]) is expected


def test_severity_accepts_mappings():
    assert severity([{"status": "found"}, {"status": "error"}]) is Severity.WARNING
    assert severity([{"domain": "x"}]) is Severity.INVALID


def test_adding_a_negative_never_improves_severity():
    rank = {Severity.CHECKMARK: 0, Severity.WARNING: 1, Severity.INVALID: 2}
    for base in (["found"], ["found", "error"], ["not found"], []):
        for extra in ("not found", "error"):
            before = severity([_f(s) for s in base])
            after = severity([_f(s) for s in base + [extra]])
            assert rank[after] >= rank[before]


def test_result_severity():
    account = AccountResult("acme.example", "acme.example", "trust.txt-draft00", AccountMatch("Twitter", "acme"))
    assert result_severity(account) is Severity.CHECKMARK
    assert result_severity(NotFoundResult("trust://acme.example!")) is Severity.INVALID
    assert result_severity(ErrorResult("trust://acme.example!", "boom")) is Severity.INVALID
    assert result_severity(MultipleResult((_f("found"), _f("not found")))) is Severity.WARNING


def test_icons():
    assert icon_for(Severity.CHECKMARK) == "icons/valid128x128.png"
    assert icon_for(Severity.WARNING) == "icons/warning128x128.png"
    assert icon_for(Severity.INVALID) == "icons/invalid128x128.png"
    assert icon_for(None) == "icons/unknown128x128.png"


def test_render_account():
    result = AccountResult(
        "acme.example",
        "acme.example",
        "trust.txt-draft00",
        AccountMatch("Twitter", "acme", "https://twitter.com/acme"),
    )
    popup = render(result)
    assert popup.title == "Trust.txt match"
    assert popup.color == SUCCESS_COLOR
    assert popup.lines == ("Twitter account acme found in trust.txt file at acme.example",)


def test_render_member_account_without_platform_name():
    result = AccountResult(
        "sub.example.org",
        "https://acme.example/.well-known/trust.txt",
        "trust.txt-draft00",
        AccountMatch("", "https://blog.example.net/acme/"),
    )
    assert render(result).lines[0].startswith("Account https://blog.example.net/acme/ found")


def test_render_not_found_and_error():
    nf = render(NotFoundResult("trust://acme.example!"))
    assert nf.title == "Trust URI Error"
    assert nf.color == ERROR_COLOR
    assert nf.lines == ("This page is not listed in the manifest at https://acme.example",)

    err = render(ErrorResult("trust://acme.example/", "Error fetching trust.txt file: HTTP error: 404"))
    assert err.lines == (
        "Failed to fetch manifest from https://acme.example",
        "Error fetching trust.txt file: HTTP error: 404",
    )
    assert err.to_dict()["severity"] == "invalid"


def test_render_multiple():
    popup = render(MultipleResult((Finding("found", "a.example", "ok"), Finding("error", "b.example", ""))))
    assert popup.color == WARNING_COLOR
    assert popup.lines == ("a.example: found (ok)", "b.example: error")
    assert render(MultipleResult()).lines == ("No validation results returned",)


@pytest.mark.parametrize(
    "message",
    [
        "Delegated validator unavailable: HTTP error: 503",
        "Invalid page URL: not-a-url",
    ],
)
def test_render_error_after_successful_fetch_does_not_blame_the_manifest(message):
    popup = render(ErrorResult("trust://acme.example!", message))
    assert popup.title == "Trust URI Error"
    assert popup.lines == (message,)
    assert not any("Failed to fetch manifest" in line for line in popup.lines)
