"""
Platform canonicalization registry.

Maps a social account URL to the platform that owns it and normalizes it to
a (platform, handle) pair so page URLs and manifest entries can be compared
case-insensitively. Each platform is a capability object exposing
is_valid_account_url() and canonicalize_account_url(); URLs no known platform
claims go to FallbackPlatform, which compares base URLs literally.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable
from urllib.parse import urlsplit

from trusttxt_validator.manifest.uri import get_base_url


@dataclass(frozen=True)
class AccountMatch:
    """Canonical identity extracted from a matched manifest entry."""

    platform: str
    account: str
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"platform": self.platform, "account": self.account, "url": self.url}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AccountMatch":
        return cls(
            platform=str(data.get("platform") or ""),
            account=str(data.get("account") or ""),
            url=str(data.get("url") or ""),
        )


def _host_and_path(url: str) -> tuple[str, str] | None:
    """(lower-cased host, path without trailing slash) for http(s) URLs; None otherwise."""
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return None
    if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
        return None
    path = parts.path or "/"
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    return parts.hostname.lower(), path


class Platform:
    """Base capability: decide whether a page URL and a manifest entry are the same account."""

    display_name: str = ""

    def is_valid_account_url(self, url: str) -> bool:
        raise NotImplementedError

    def canonicalize_account_url(self, url: str) -> AccountMatch:
        raise NotImplementedError

    def matches(self, page_url: str, account_url: str) -> bool:
        """
        Handles compared case-insensitively when this platform accepts the page
        URL; otherwise exact base-URL equality.
        """
        if self.is_valid_account_url(page_url):
            page = self.canonicalize_account_url(page_url)
            entry = self.canonicalize_account_url(account_url)
            return page.account.lower() == entry.account.lower()
        try:
            return get_base_url(page_url) == get_base_url(account_url)
        except ValueError:
            return False


@dataclass(frozen=True, kw_only=True)
class HostPathPlatform(Platform):
    """
    A platform recognized by hostname plus an account-path pattern.

    Each pattern is matched against the URL path (trailing slash removed) and
    must define an 'account' group; the first matching pattern wins.
    Fields are keyword-only.
    """

    display_name: str
    hosts: frozenset[str]
    patterns: tuple[re.Pattern[str], ...]
    canonical_host: str
    reserved: frozenset[str] = field(default_factory=frozenset)

    def _account(self, url: str) -> tuple[str, str] | None:
        hp = _host_and_path(url)
        if hp is None:
            return None
        host, path = hp
        if host not in self.hosts:
            return None
        for pattern in self.patterns:
            m = pattern.match(path)
            if m is None:
                continue
            account = m.group("account")
            if account.lower().lstrip("@") in self.reserved:
                return None
            return account, path
        return None

    def is_valid_account_url(self, url: str) -> bool:
        return self._account(url) is not None

    def canonicalize_account_url(self, url: str) -> AccountMatch:
        found = self._account(url)
        if found is None:
            raise ValueError(f"Not a {self.display_name} account URL: {url}")
        account, path = found
        return AccountMatch(
            platform=self.display_name,
            account=account,
            url=f"https://{self.canonical_host}{path}",
        )


class FallbackPlatform(Platform):
    """Unknown platform: no handle extraction, base URLs compared literally."""

    display_name = ""

    def is_valid_account_url(self, url: str) -> bool:
        return False

    def canonicalize_account_url(self, url: str) -> AccountMatch:
        try:
            base = get_base_url(url)
        except ValueError:
            base = url
        return AccountMatch(platform="", account=url, url=base)


def _hosts(*domains: str, prefixes: Iterable[str] = ("", "www.")) -> frozenset[str]:
    return frozenset(f"{p}{d}" for d in domains for p in prefixes)


def _p(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p) for p in patterns)


KNOWN_PLATFORMS: tuple[HostPathPlatform, ...] = (
    HostPathPlatform(
        display_name="Twitter",
        hosts=_hosts("twitter.com", "x.com", prefixes=("", "www.", "mobile.")),
        patterns=_p(r"^/(?P<account>[A-Za-z0-9_]{1,15})$"),
        canonical_host="twitter.com",
        reserved=frozenset({
            "home", "explore", "search", "settings", "notifications", "messages",
            "i", "intent", "share", "hashtag", "login", "signup", "tos", "privacy",
        }),
    ),
    HostPathPlatform(
        display_name="YouTube",
        hosts=_hosts("youtube.com", prefixes=("", "www.", "m.")),
        patterns=_p(
            r"^/(?P<account>@[A-Za-z0-9._-]{3,30})$",
            r"^/channel/(?P<account>UC[A-Za-z0-9_-]{22})$",
            r"^/(?:c|user)/(?P<account>[A-Za-z0-9._-]{1,100})$",
        ),
        canonical_host="www.youtube.com",
    ),
    HostPathPlatform(
        display_name="Facebook",
        hosts=_hosts("facebook.com", prefixes=("", "www.", "m.")) | frozenset({"fb.com"}),
        patterns=_p(r"^/(?P<account>[A-Za-z0-9.]{5,50})$"),
        canonical_host="www.facebook.com",
        reserved=frozenset({
            "profile.php", "groups", "pages", "watch", "events", "marketplace", "login", "help",
        }),
    ),
    HostPathPlatform(
        display_name="Instagram",
        hosts=_hosts("instagram.com"),
        patterns=_p(r"^/(?P<account>[A-Za-z0-9._]{1,30})$"),
        canonical_host="www.instagram.com",
        reserved=frozenset({"p", "reel", "reels", "explore", "accounts", "stories", "direct"}),
    ),
    HostPathPlatform(
        display_name="TikTok",
        hosts=_hosts("tiktok.com", prefixes=("", "www.", "m.")),
        patterns=_p(r"^/(?P<account>@[A-Za-z0-9._]{2,24})$"),
        canonical_host="www.tiktok.com",
    ),
    HostPathPlatform(
        display_name="LinkedIn",
        hosts=_hosts("linkedin.com"),
        patterns=_p(r"^/(?P<account>(?:in|company|school)/[A-Za-z0-9_%-]{2,100})$"),
        canonical_host="www.linkedin.com",
    ),
    HostPathPlatform(
        display_name="GitHub",
        hosts=_hosts("github.com"),
        patterns=_p(r"^/(?P<account>[A-Za-z0-9][A-Za-z0-9-]{0,38})$"),
        canonical_host="github.com",
        reserved=frozenset({
            "about", "features", "pricing", "login", "join", "settings", "orgs",
            "topics", "marketplace", "explore", "sponsors",
        }),
    ),
    HostPathPlatform(
        display_name="Medium",
        hosts=_hosts("medium.com"),
        patterns=_p(r"^/(?P<account>@[A-Za-z0-9._-]{1,50})$"),
        canonical_host="medium.com",
    ),
    HostPathPlatform(
        display_name="Threads",
        hosts=_hosts("threads.net", "threads.com"),
        patterns=_p(r"^/(?P<account>@[A-Za-z0-9._]{1,30})$"),
        canonical_host="www.threads.net",
    ),
    HostPathPlatform(
        display_name="Telegram",
        hosts=frozenset({"t.me", "telegram.me"}),
        patterns=_p(r"^/(?P<account>[A-Za-z0-9_]{5,32})$"),
        canonical_host="t.me",
        reserved=frozenset({"joinchat", "addstickers", "share"}),
    ),
    HostPathPlatform(
        display_name="Twitch",
        hosts=_hosts("twitch.tv", prefixes=("", "www.", "m.")),
        patterns=_p(r"^/(?P<account>[A-Za-z0-9_]{4,25})$"),
        canonical_host="www.twitch.tv",
        reserved=frozenset({"directory", "settings", "videos", "downloads"}),
    ),
    HostPathPlatform(
        display_name="Rumble",
        hosts=_hosts("rumble.com"),
        patterns=_p(r"^/(?:c|user)/(?P<account>[A-Za-z0-9_-]{1,50})$"),
        canonical_host="rumble.com",
    ),
    HostPathPlatform(
        display_name="Reddit",
        hosts=_hosts("reddit.com", prefixes=("", "www.", "old.")),
        patterns=_p(r"^/(?:u|user)/(?P<account>[A-Za-z0-9_-]{3,20})$"),
        canonical_host="www.reddit.com",
    ),
)


class PlatformRegistry:
    """Ordered set of known platforms plus a fallback for everything else."""

    def __init__(
        self,
        platforms: Iterable[Platform] = KNOWN_PLATFORMS,
        fallback: Platform | None = None,
    ) -> None:
        self._platforms: list[Platform] = list(platforms)
        self._fallback = fallback or FallbackPlatform()

    @property
    def fallback(self) -> Platform:
        return self._fallback

    def register(self, platform: Platform) -> None:
        """Add a platform; later registrations are consulted after earlier ones."""
        self._platforms.append(platform)

    def names(self) -> list[str]:
        return [p.display_name for p in self._platforms]

    def get(self, display_name: str) -> Platform | None:
        wanted = display_name.lower()
        for p in self._platforms:
            if p.display_name.lower() == wanted:
                return p
        return None

    def is_supported_account_url(self, url: str) -> bool:
        return any(p.is_valid_account_url(url) for p in self._platforms)

    def platform_for_account_url(self, url: str) -> Platform:
        """Platform owning url; the fallback when none does."""
        for p in self._platforms:
            if p.is_valid_account_url(url):
                return p
        return self._fallback


DEFAULT_REGISTRY = PlatformRegistry()
