"""
Matching engine: (page URL, Trust URI) -> ResolutionResult.

Steps:
1. Fetch and parse the manifest; fetch failures become ErrorResult.
2. Same domain (page host without www. == manifest host): ask the delegated
   validator and wrap its findings in MultipleResult.
3. Cross domain, first hit wins:
   a. social entries in manifest order, compared through the platform registry;
   b. member entries containing the page domain, or naming a parent domain of it;
   c. otherwise NotFoundResult.

Stateless: safe to run concurrently for any number of keys. Never raises for
fetch, URL or validator problems.
"""

from __future__ import annotations

from trusttxt_validator.core.exceptions import DelegatedValidatorUnavailable, FetchError
from trusttxt_validator.engine.delegated import DelegatedValidator
from trusttxt_validator.engine.models import (
    FETCH_ERROR_PREFIX,
    TRUST_TXT_VERSION,
    AccountResult,
    ErrorResult,
    MultipleResult,
    NotFoundResult,
    ResolutionResult,
)
from trusttxt_validator.manifest.fetcher import ManifestFetcher
from trusttxt_validator.manifest.models import TrustManifest
from trusttxt_validator.manifest.uri import get_base_url, hostname_of, strip_www
from trusttxt_validator.platforms.registry import DEFAULT_REGISTRY, AccountMatch, PlatformRegistry
from trusttxt_validator.validator_logging.logger import bind_lookup

MEMBER_PLATFORM = "member"


def match_social(
    page_url: str,
    manifest: TrustManifest,
    registry: PlatformRegistry = DEFAULT_REGISTRY,
) -> AccountMatch | None:
    """
    First social entry naming the same account as page_url, canonicalized.

    Known platform: account is the canonical handle, platform its display name.
    Unknown platform: account is the raw entry, platform is ''.
    """
    for entry in manifest.social:
        platform = registry.platform_for_account_url(entry)
        if platform.matches(page_url, entry):
            match = platform.canonicalize_account_url(entry)
            return AccountMatch(platform=match.platform, account=match.account, url=entry)
    return None


def _entry_host(entry: str) -> str:
    """Host named by a member entry, which may be a bare domain or a URL."""
    value = entry.strip().lower()
    if "://" in value:
        return strip_www(hostname_of(value))
    return strip_www(value.split("/", 1)[0])


def match_member(page_domain: str, manifest: TrustManifest) -> str | None:
    """
    First member entry containing page_domain as a substring, or whose host
    page_domain is a subdomain of.

    Loose: member=notexample.org matches example.org.
    """
    if not page_domain:
        return None
    for entry in manifest.member:
        if page_domain in entry:
            return entry
        host = _entry_host(entry)
        if host and page_domain.endswith("." + host):
            return entry
    return None


class TrustResolver:
    """Resolves a page against the manifest its Trust URI points to."""

    def __init__(
        self,
        fetcher: ManifestFetcher,
        validator: DelegatedValidator,
        *,
        registry: PlatformRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self._fetcher = fetcher
        self._validator = validator
        self._registry = registry

    @property
    def fetcher(self) -> ManifestFetcher:
        return self._fetcher

    @property
    def validator(self) -> DelegatedValidator:
        return self._validator

    async def resolve(self, page_url: str, trust_uri: str) -> ResolutionResult:
        log = bind_lookup(page_url, trust_uri)
        log.debug("resolve_start")

        try:
            fetched = await self._fetcher.resolve_manifest(trust_uri)
        except FetchError as e:
            log.info("resolve_fetch_error", error=str(e))
            return ErrorResult(
                base_url=trust_uri,
                message=f"{FETCH_ERROR_PREFIX} {e}",
            )

        page_domain = strip_www(hostname_of(page_url))
        manifest_domain = hostname_of(fetched.manifest_url)
        if not page_domain:
            log.info("resolve_invalid_page_url")
            return ErrorResult(base_url=trust_uri, message=f"Invalid page URL: {page_url}")

        if page_domain == manifest_domain:
            return await self._resolve_same_domain(page_url, trust_uri, log)

        try:
            page_base = get_base_url(page_url)
        except ValueError as e:
            log.info("resolve_invalid_page_url", error=str(e))
            return ErrorResult(base_url=trust_uri, message=f"Invalid page URL: {page_url}")

        account = match_social(page_base, fetched.manifest, self._registry)
        if account is not None:
            log.info("resolve_social_match", platform=account.platform, account=account.account)
            return AccountResult(
                name=manifest_domain,
                base_url=manifest_domain,
                version=TRUST_TXT_VERSION,
                account=account,
            )

        member = match_member(page_domain, fetched.manifest)
        if member is not None:
            log.info("resolve_member_match", member=member)
            return AccountResult(
                name=page_domain,
                base_url=fetched.manifest_url,
                version=TRUST_TXT_VERSION,
                account=AccountMatch(platform=MEMBER_PLATFORM, account=page_domain, url=member),
            )

        log.info("resolve_not_found")
        return NotFoundResult(base_url=trust_uri)

    async def _resolve_same_domain(self, page_url: str, trust_uri: str, log) -> ResolutionResult:
        try:
            findings = await self._validator.validate(page_url)
        except DelegatedValidatorUnavailable as e:
            log.warning("resolve_validator_unavailable", error=str(e))
            return ErrorResult(
                base_url=trust_uri,
                message=f"Delegated validator unavailable: {e}",
            )
        log.info("resolve_delegated", finding_count=len(findings))
        return MultipleResult(findings)
