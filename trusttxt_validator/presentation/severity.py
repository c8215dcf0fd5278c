"""
Result-severity reducer.

Collapses per-source statuses into Invalid / Checkmark / Warning for icon,
color and message selection. Presentation only; the matching engine never
consults it.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping

from trusttxt_validator.engine.models import (
    STATUS_ERROR,
    STATUS_FOUND,
    STATUS_NOT_FOUND,
    AccountResult,
    ErrorResult,
    Finding,
    MultipleResult,
    NotFoundResult,
    ResolutionResult,
)


class Severity(str, Enum):
    INVALID = "invalid"
    CHECKMARK = "checkmark"
    WARNING = "warning"


# Severity (None = nothing resolved yet) -> toolbar icon asset
ICONS: dict[Severity | None, str] = {
    Severity.CHECKMARK: "icons/valid128x128.png",
    Severity.INVALID: "icons/invalid128x128.png",
    Severity.WARNING: "icons/warning128x128.png",
    None: "icons/unknown128x128.png",
}


def _status(item: Finding | Mapping[str, Any]) -> str:
    if isinstance(item, Finding):
        return item.status
    return str(item.get("status") or "")


def severity(items: Iterable[Finding | Mapping[str, Any]]) -> Severity:
    found = not_found = error = False
    for item in items:
        status = _status(item)
        if status == STATUS_FOUND:
            found = True
        elif status == STATUS_NOT_FOUND:
            not_found = True
        elif status == STATUS_ERROR:
            error = True
    if not found:
        return Severity.INVALID
    if not not_found and not error:
        return Severity.CHECKMARK
    return Severity.WARNING


def result_severity(result: ResolutionResult) -> Severity:
    if isinstance(result, AccountResult):
        return Severity.CHECKMARK
    if isinstance(result, MultipleResult):
        return severity(result.list)
    if isinstance(result, (NotFoundResult, ErrorResult)):
        return Severity.INVALID
    raise TypeError(f"Unknown resolution result: {result!r}")


def icon_for(level: Severity | None) -> str:
    return ICONS[level]
