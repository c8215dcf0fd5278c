"""
Human-readable text for resolution results, as shown next to a Trust URI.
"""

from __future__ import annotations

from dataclasses import dataclass

from trusttxt_validator.engine.models import (
    FETCH_ERROR_PREFIX,
    TRUST_TXT_VERSION,
    AccountResult,
    ErrorResult,
    MultipleResult,
    NotFoundResult,
    ResolutionResult,
)
from trusttxt_validator.manifest.uri import display_base_url
from trusttxt_validator.presentation.severity import Severity, result_severity

SUCCESS_COLOR = "#5B9BD5"
ERROR_COLOR = "#E43A19"
WARNING_COLOR = "#F2A900"

_COLORS = {
    Severity.CHECKMARK: SUCCESS_COLOR,
    Severity.INVALID: ERROR_COLOR,
    Severity.WARNING: WARNING_COLOR,
}


@dataclass(frozen=True)
class Popup:
    title: str
    color: str
    severity: Severity
    lines: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "color": self.color,
            "severity": self.severity.value,
            "lines": list(self.lines),
        }


def _account_line(result: AccountResult) -> str:
    account = result.account
    if result.version == TRUST_TXT_VERSION:
        if account.platform:
            prefix = f"{account.platform} account {account.account}"
        else:
            prefix = f"Account {account.account}"
        return f"{prefix} found in trust.txt file at {result.base_url}"
    return f"Account {account.account} listed by {result.name} ({result.base_url})"


def render(result: ResolutionResult) -> Popup:
    """Popup title, color and body lines for a result."""
    level = result_severity(result)
    color = _COLORS[level]
    if isinstance(result, AccountResult):
        return Popup("Trust.txt match", color, level, (_account_line(result),))
    if isinstance(result, NotFoundResult):
        return Popup(
            "Trust URI Error",
            color,
            level,
            (f"This page is not listed in the manifest at {display_base_url(result.base_url)}",),
        )
    if isinstance(result, ErrorResult):
        if result.message.startswith(FETCH_ERROR_PREFIX):
            lines = (f"Failed to fetch manifest from {display_base_url(result.base_url)}", result.message)
        else:
            # Manifest was fetched; the page URL or the delegated validator failed.
            lines = (result.message,)
        return Popup("Trust URI Error", color, level, lines)
    if isinstance(result, MultipleResult):
        if not result.list:
            return Popup("Trust.txt validation", color, level, ("No validation results returned",))
        lines = tuple(f"{f.domain}: {f.status}" + (f" ({f.message})" if f.message else "") for f in result.list)
        return Popup("Trust.txt validation", color, level, lines)
    raise TypeError(f"Unknown resolution result: {result!r}")
