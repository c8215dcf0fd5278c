"""
Tests for manifest fetching: URL rewriting, status and transport failures,
and timeout cancellation. HTTP is faked with httpx.MockTransport; timeout
budgets are also checked against a slow local asyncio server.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx
import pytest

from trusttxt_validator.config import Settings
from trusttxt_validator.core.exceptions import (
    FetchTimeout,
    HttpStatusError,
    InvalidTrustUri,
    TransportError,
)
from trusttxt_validator.lookup import new_http_client
from trusttxt_validator.manifest import ManifestFetcher
from trusttxt_validator.manifest.fetcher import request_with_timeout

from conftest import MANIFEST_URL


def test_resolve_manifest_fetches_well_known_path(web, http_client):
    web.manifest("social=https://twitter.com/acme\n")
    fetcher = ManifestFetcher(http_client)

    fetched = asyncio.run(fetcher.resolve_manifest("trust://acme.example/some/path!"))

    assert fetched.manifest_url == MANIFEST_URL
    assert fetched.manifest.social == ("https://twitter.com/acme",)
    assert web.urls() == [MANIFEST_URL]
    assert web.requests[0].method == "GET"


def test_invalid_uri_fails_without_network(web, http_client):
    fetcher = ManifestFetcher(http_client)
    with pytest.raises(InvalidTrustUri):
        asyncio.run(fetcher.resolve_manifest("https://acme.example"))
    assert web.requests == []


def test_non_success_status(web, http_client):
    web.route(MANIFEST_URL, "gone", status=410)
    fetcher = ManifestFetcher(http_client)
    with pytest.raises(HttpStatusError) as exc:
        asyncio.run(fetcher.resolve_manifest("trust://acme.example!"))
    assert exc.value.status_code == 410
    assert str(exc.value) == "HTTP error: 410"


def test_missing_manifest_is_http_404(http_client):
    fetcher = ManifestFetcher(http_client)
    with pytest.raises(HttpStatusError, match="404"):
        asyncio.run(fetcher.resolve_manifest("trust://acme.example!"))


def test_transport_error(web, http_client):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    web.route_handler(MANIFEST_URL, refuse)
    fetcher = ManifestFetcher(http_client)
    with pytest.raises(TransportError, match="connection refused"):
        asyncio.run(fetcher.resolve_manifest("trust://acme.example!"))


def test_timeout_cancels_request(web, http_client):
    cancelled = []

    async def hang(request):
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise
        return httpx.Response(200, text="")

    web.route_handler(MANIFEST_URL, hang)
    fetcher = ManifestFetcher(http_client, timeout_ms=50)
    with pytest.raises(FetchTimeout) as exc:
        asyncio.run(fetcher.resolve_manifest("trust://acme.example!"))
    assert "timeout" in str(exc.value)
    assert "50ms" in str(exc.value)
    assert cancelled == [True]


def test_default_timeout_is_5000ms(http_client):
    assert ManifestFetcher(http_client).timeout_ms == 5000


async def _slow_server(delay: float):
    """Local HTTP server that answers every request after `delay` seconds."""

    async def handle(reader, writer):
        try:
            await reader.readuntil(b"\r\n\r\n")
            await asyncio.sleep(delay)
            writer.write(b"HTTP/1.1 200 OK\r\nContent-Length: 2\r\nConnection: close\r\n\r\nok")
            await writer.drain()
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    return server, f"http://127.0.0.1:{port}/"


def test_budget_overrides_short_client_default():
    async def run():
        server, url = await _slow_server(0.4)
        async with server:
            async with httpx.AsyncClient(timeout=0.1, trust_env=False) as client:
                resp = await request_with_timeout(client, "GET", url, 3000)
        return resp.text

    assert asyncio.run(run()) == "ok"


def test_budget_still_enforced_against_slow_server():
    async def run():
        server, url = await _slow_server(1.0)
        async with server:
            async with httpx.AsyncClient(timeout=None, trust_env=False) as client:
                with pytest.raises(FetchTimeout, match="200ms"):
                    await request_with_timeout(client, "GET", url, 200)

    asyncio.run(run())


def test_shared_client_has_no_client_level_timeout():
    settings = Settings(
        download_timeout_ms=10000,
        validator_url=None,
        validator_timeout_ms=10000,
        local_store_path=Path("unused.json"),
    )
    client = new_http_client(settings)
    assert client.timeout == httpx.Timeout(None)
    asyncio.run(client.aclose())
