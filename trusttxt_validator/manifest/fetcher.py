"""
Manifest fetcher: Trust URI -> https://<domain>/.well-known/trust.txt -> TrustManifest.

One GET per call, bounded by a timeout. On timeout the in-flight request is
cancelled (asyncio.wait_for) and FetchTimeout raised; transport failures raise
TransportError, non-2xx responses HttpStatusError. No retries: the call is
idempotent and callers may simply repeat it.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import httpx

from trusttxt_validator.config.env import DEFAULT_DOWNLOAD_TIMEOUT_MS
from trusttxt_validator.core.exceptions import FetchTimeout, HttpStatusError, TransportError
from trusttxt_validator.manifest.models import TrustManifest
from trusttxt_validator.manifest.parser import parse_manifest
from trusttxt_validator.manifest.uri import parse_trust_uri
from trusttxt_validator.validator_logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FetchedManifest:
    """Parsed manifest plus the URL it was fetched from."""

    manifest: TrustManifest
    manifest_url: str


async def request_with_timeout(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    timeout_ms: int,
    **kwargs,
) -> httpx.Response:
    """
    Issue one request, cancelled after timeout_ms.

    The same budget is passed to httpx per request, overriding whatever
    default timeout the client was built with.

    Raises FetchTimeout, TransportError or HttpStatusError; returns only 2xx responses.
    """
    kwargs.setdefault("timeout", httpx.Timeout(timeout_ms / 1000.0))
    try:
        resp = await asyncio.wait_for(
            client.request(method, url, **kwargs),
            timeout=timeout_ms / 1000.0,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        raise FetchTimeout(url, timeout_ms) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise TransportError(str(e) or type(e).__name__) from e
    if not resp.is_success:
        raise HttpStatusError(resp.status_code)
    return resp


class ManifestFetcher:
    """
    Downloads and parses trust.txt manifests.

    The httpx.AsyncClient is owned by the caller so one connection pool can be
    shared by every concurrent lookup.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        timeout_ms: int = DEFAULT_DOWNLOAD_TIMEOUT_MS,
    ) -> None:
        self._client = client
        self._timeout_ms = timeout_ms

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    async def fetch_text(self, url: str) -> str:
        resp = await request_with_timeout(self._client, "GET", url, self._timeout_ms)
        return resp.text

    async def resolve_manifest(self, trust_uri: str) -> FetchedManifest:
        """
        Fetch and parse the manifest a Trust URI points to.

        Raises InvalidTrustUri before any network traffic when the URI is malformed.
        """
        uri = parse_trust_uri(trust_uri)
        url = uri.manifest_url
        logger.debug("manifest_fetch_start", trust_uri=trust_uri, url=url)
        try:
            text = await self.fetch_text(url)
        except FetchTimeout:
            logger.warning("manifest_fetch_timeout", url=url, timeout_ms=self._timeout_ms)
            raise
        except (TransportError, HttpStatusError) as e:
            logger.warning("manifest_fetch_failed", url=url, error=str(e))
            raise
        manifest = parse_manifest(text)
        logger.debug(
            "manifest_fetched",
            url=url,
            social_count=len(manifest.social),
            member_count=len(manifest.member),
        )
        return FetchedManifest(manifest=manifest, manifest_url=url)
