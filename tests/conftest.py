"""
Pytest fixtures for trust.txt validator tests. HTTP is served by httpx.MockTransport;
no test touches the network.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

MANIFEST_URL = "https://acme.example/.well-known/trust.txt"
VALIDATOR_URL = "https://validator.test/validate"
TRUST_URI = "trust://acme.example!"


class FakeWeb:
    """URL -> canned (status, body) or handler(request). Unknown URLs answer 404."""

    def __init__(self) -> None:
        self.routes: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []

    def route(self, url: str, body: Any = "", status: int = 200) -> None:
        self.routes[url] = (status, body)

    def route_handler(self, url: str, handler: Callable[[httpx.Request], Any]) -> None:
        self.routes[url] = handler

    def manifest(self, text: str, url: str = MANIFEST_URL) -> None:
        self.route(url, text)

    def handle(self, request: httpx.Request):
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, text="not found")
        if callable(route):
            return route(request)
        status, body = route
        if isinstance(body, (list, dict)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)

    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


@pytest.fixture
def web() -> FakeWeb:
    return FakeWeb()


@pytest.fixture
def http_client(web):
    return httpx.AsyncClient(transport=httpx.MockTransport(web.handle))


@pytest.fixture
def make_resolver(http_client):
    """Factory: TrustResolver over the fake web with optional validator URL and timeout."""
    from trusttxt_validator.engine import DelegatedValidator, TrustResolver
    from trusttxt_validator.manifest import ManifestFetcher

    def _make(validator_url: str | None = VALIDATOR_URL, timeout_ms: int = 5000, validator_timeout_ms: int = 5000):
        fetcher = ManifestFetcher(http_client, timeout_ms=timeout_ms)
        validator = DelegatedValidator(http_client, validator_url, timeout_ms=validator_timeout_ms)
        return TrustResolver(fetcher, validator)

    return _make


@pytest.fixture
def service(make_resolver, tmp_path):
    """TrustLookupService with an in-memory cache and a temp JSON flag store."""
    from trusttxt_validator.cache import JsonFileStore, ResultCache
    from trusttxt_validator.lookup import TrustLookupService

    return TrustLookupService(
        make_resolver(),
        ResultCache(),
        JsonFileStore(tmp_path / "local.json"),
    )
