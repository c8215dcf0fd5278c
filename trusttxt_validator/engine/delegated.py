"""
Delegated validator client.

Consulted only when a page sits on the manifest's own domain. Sends
POST <endpoint> {"url": page_url} and expects a JSON array of
{status, domain, message}. The endpoint is opaque: any failure (not
configured, timeout, transport, non-2xx, non-list body) raises
DelegatedValidatorUnavailable with the reason.
"""

from __future__ import annotations

from typing import Any

import httpx

from trusttxt_validator.config.env import DEFAULT_VALIDATOR_TIMEOUT_MS
from trusttxt_validator.core.exceptions import DelegatedValidatorUnavailable, FetchError
from trusttxt_validator.engine.models import Finding
from trusttxt_validator.manifest.fetcher import request_with_timeout
from trusttxt_validator.validator_logging import get_logger

logger = get_logger(__name__)


def _findings_from_payload(payload: Any) -> tuple[Finding, ...]:
    if not isinstance(payload, list):
        raise DelegatedValidatorUnavailable(
            f"unexpected response body ({type(payload).__name__}, expected list)"
        )
    return tuple(Finding.from_dict(item) for item in payload if isinstance(item, dict))


class DelegatedValidator:
    """POSTs page URLs to a remote validation endpoint."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str | None,
        *,
        timeout_ms: int = DEFAULT_VALIDATOR_TIMEOUT_MS,
    ) -> None:
        self._client = client
        self._url = (url or "").strip() or None
        self._timeout_ms = timeout_ms

    @property
    def configured(self) -> bool:
        return self._url is not None

    async def validate(self, page_url: str) -> tuple[Finding, ...]:
        """Findings for page_url, verbatim and in response order."""
        if self._url is None:
            raise DelegatedValidatorUnavailable("no validator endpoint configured")
        try:
            resp = await request_with_timeout(
                self._client,
                "POST",
                self._url,
                self._timeout_ms,
                json={"url": page_url},
            )
        except FetchError as e:
            logger.warning("delegated_validator_failed", url=self._url, error=str(e))
            raise DelegatedValidatorUnavailable(str(e)) from e
        try:
            payload = resp.json()
        except ValueError as e:
            logger.warning("delegated_validator_bad_json", url=self._url, error=str(e))
            raise DelegatedValidatorUnavailable(f"invalid JSON: {e}") from e
        findings = _findings_from_payload(payload)
        logger.info("delegated_validator_ok", url=self._url, finding_count=len(findings))
        return findings
