"""
Resolution result variants.

A ResolutionResult is exactly one of AccountResult, MultipleResult,
NotFoundResult or ErrorResult. Each carries a `type` tag and serializes to
the wire/storage form used by the page-side collaborators (keys `baseurl`,
`list`, ...). Callers dispatch with isinstance or on `type`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union

from trusttxt_validator.platforms.registry import AccountMatch

TRUST_TXT_VERSION = "trust.txt-draft00"

FETCH_ERROR_PREFIX = "Error fetching trust.txt file:"

STATUS_FOUND = "found"
STATUS_NOT_FOUND = "not found"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class Finding:
    """One entry returned by the delegated validator."""

    status: str
    domain: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"status": self.status, "domain": self.domain, "message": self.message}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Finding":
        return cls(
            status=str(data.get("status") or ""),
            domain=str(data.get("domain") or ""),
            message=str(data.get("message") or ""),
        )


@dataclass(frozen=True)
class AccountResult:
    """Positive match: the page is listed in the manifest."""

    type: ClassVar[str] = "account"

    name: str
    base_url: str
    version: str
    account: AccountMatch

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "baseurl": self.base_url,
            "version": self.version,
            "account": self.account.to_dict(),
        }


@dataclass(frozen=True)
class MultipleResult:
    """Same-domain case answered by the delegated validator."""

    type: ClassVar[str] = "multiple"

    list: tuple[Finding, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "list": [f.to_dict() for f in self.list]}


@dataclass(frozen=True)
class NotFoundResult:
    """Manifest fetched and parsed; nothing in it matches the page."""

    type: ClassVar[str] = "notFound"

    base_url: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "baseurl": self.base_url}


@dataclass(frozen=True)
class ErrorResult:
    """Manifest unreachable, Trust URI invalid, or validator unavailable."""

    type: ClassVar[str] = "error"

    base_url: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "baseurl": self.base_url, "message": self.message}


ResolutionResult = Union[AccountResult, MultipleResult, NotFoundResult, ErrorResult]

RESULT_TYPES: tuple[type, ...] = (AccountResult, MultipleResult, NotFoundResult, ErrorResult)


def result_from_dict(data: dict[str, Any]) -> ResolutionResult:
    """Rebuild a result from its to_dict() form. Raises ValueError on unknown type tags."""
    kind = data.get("type")
    if kind == AccountResult.type:
        return AccountResult(
            name=str(data.get("name") or ""),
            base_url=str(data.get("baseurl") or ""),
            version=str(data.get("version") or ""),
            account=AccountMatch.from_dict(data.get("account") or {}),
        )
    if kind == MultipleResult.type:
        return MultipleResult(tuple(Finding.from_dict(item) for item in data.get("list") or []))
    if kind == NotFoundResult.type:
        return NotFoundResult(base_url=str(data.get("baseurl") or ""))
    if kind == ErrorResult.type:
        return ErrorResult(
            base_url=str(data.get("baseurl") or ""),
            message=str(data.get("message") or ""),
        )
    raise ValueError(f"Unknown resolution result type: {kind!r}")
