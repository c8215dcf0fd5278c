"""
Lookup service: the long-lived owner of resolver, result cache and flags.

Page scans and context-menu requests both go through lookup(); scans resolve
every Trust URI found on a page concurrently. Results are written to the
shared ResultCache. The persistent auto-verify flag gates automatic scans.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Iterable

import httpx

from trusttxt_validator.cache.store import JsonFileStore, KeyValueStore, ResultCache
from trusttxt_validator.config.settings import Settings, get_settings
from trusttxt_validator.engine.delegated import DelegatedValidator
from trusttxt_validator.engine.matcher import TrustResolver
from trusttxt_validator.engine.models import AccountResult, MultipleResult, ResolutionResult
from trusttxt_validator.manifest.fetcher import ManifestFetcher
from trusttxt_validator.manifest.uri import find_trust_uris
from trusttxt_validator.presentation.severity import Severity, result_severity
from trusttxt_validator.validator_logging import get_logger

logger = get_logger(__name__)

AUTO_VERIFY_KEY = "autoVerifyTrustUris"


class LookupSource(str, Enum):
    SCAN = "scan"
    CONTEXT_MENU = "context_menu"


def should_store(source: LookupSource, result: ResolutionResult) -> bool:
    """Scans store every outcome; context-menu lookups store only positive/delegated ones."""
    if source == LookupSource.SCAN:
        return True
    return isinstance(result, (AccountResult, MultipleResult))


class TrustLookupService:
    def __init__(
        self,
        resolver: TrustResolver,
        cache: ResultCache,
        local_store: KeyValueStore,
    ) -> None:
        self.resolver = resolver
        self.cache = cache
        self.local_store = local_store

    async def lookup(
        self,
        page_url: str,
        trust_uri: str,
        source: LookupSource = LookupSource.SCAN,
    ) -> ResolutionResult:
        result = await self.resolver.resolve(page_url, trust_uri)
        if should_store(source, result):
            await self.cache.put(page_url, trust_uri, result)
        logger.info(
            "lookup_done",
            page_url=page_url,
            trust_uri=trust_uri,
            source=source.value,
            result_type=result.type,
        )
        return result

    async def scan(
        self,
        page_url: str,
        texts: Iterable[str],
        *,
        force: bool = False,
    ) -> dict[str, ResolutionResult]:
        """
        Resolve every distinct Trust URI found in the page's text units.

        Skipped (empty result) when auto-verify is off, unless force=True.
        """
        if not force and not await self.auto_verify_enabled():
            logger.debug("scan_skipped_auto_verify_off", page_url=page_url)
            return {}
        uris: list[str] = []
        for text in texts:
            for uri in find_trust_uris(text):
                if uri not in uris:
                    uris.append(uri)
        if not uris:
            return {}
        results = await asyncio.gather(*(self.lookup(page_url, uri) for uri in uris))
        return dict(zip(uris, results))

    async def results_for_page(self, page_url: str) -> dict[str, ResolutionResult]:
        return await self.cache.get(page_url)

    async def page_severity(self, page_url: str) -> Severity | None:
        """Severity of the first stored result for the page; None when nothing is stored."""
        first = await self.cache.first(page_url)
        return result_severity(first) if first is not None else None

    async def ensure_defaults(self) -> None:
        """First run: turn automatic verification on."""
        if not await self.local_store.has(AUTO_VERIFY_KEY):
            await self.local_store.set({AUTO_VERIFY_KEY: True})
            logger.info("auto_verify_default_set", enabled=True)

    async def auto_verify_enabled(self) -> bool:
        data = await self.local_store.get(AUTO_VERIFY_KEY)
        return data.get(AUTO_VERIFY_KEY) is True

    async def set_auto_verify(self, enabled: bool) -> None:
        await self.local_store.set({AUTO_VERIFY_KEY: bool(enabled)})
        logger.info("auto_verify_updated", enabled=bool(enabled))


def build_service(
    client: httpx.AsyncClient,
    settings: Settings | None = None,
    *,
    cache: ResultCache | None = None,
    local_store: KeyValueStore | None = None,
) -> TrustLookupService:
    """Wire fetcher, validator, resolver and stores from settings around one HTTP client."""
    settings = settings or get_settings()
    fetcher = ManifestFetcher(client, timeout_ms=settings.download_timeout_ms)
    validator = DelegatedValidator(
        client,
        settings.validator_url,
        timeout_ms=settings.validator_timeout_ms,
    )
    return TrustLookupService(
        TrustResolver(fetcher, validator),
        cache if cache is not None else ResultCache(),
        local_store if local_store is not None else JsonFileStore(settings.local_store_path),
    )


def new_http_client(settings: Settings | None = None) -> httpx.AsyncClient:
    """Shared client with no client-level timeout; each request carries its own budget."""
    settings = settings or get_settings()
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=None,
        headers={"User-Agent": settings.user_agent},
    )
