"""
FastAPI server: message channel between page-side collaborators and the lookup service.

POST /lookup resolves one Trust URI for a page (scan or context-menu source),
POST /scan resolves every Trust URI in a batch of page text units, GET
/results and GET /severity read the session cache, and /settings/auto-verify
reads or writes the persistent auto-verify flag.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Query
from pydantic import BaseModel, Field

from trusttxt_validator import __version__
from trusttxt_validator.lookup.service import (
    LookupSource,
    TrustLookupService,
    build_service,
    new_http_client,
)
from trusttxt_validator.presentation.messages import render
from trusttxt_validator.presentation.severity import icon_for
from trusttxt_validator.validator_logging import get_logger

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Request / response models
# -----------------------------------------------------------------------------


class LookupRequest(BaseModel):
    """POST /lookup body."""

    page_url: str = Field(..., min_length=1, description="URL of the page showing the Trust URI")
    trust_uri: str = Field(..., min_length=1, description="trust://domain[/path]! text found on the page")
    source: LookupSource = Field(LookupSource.SCAN, description="scan | context_menu")


class ScanRequest(BaseModel):
    """POST /scan body: text units of one page."""

    page_url: str = Field(..., min_length=1)
    texts: list[str] = Field(default_factory=list, description="Page text units to search for Trust URIs")
    force: bool = Field(False, description="Scan even when auto-verify is off")


class AutoVerifyBody(BaseModel):
    enabled: bool


class SeverityResponse(BaseModel):
    page_url: str
    severity: str | None = Field(None, description="checkmark | warning | invalid; null when nothing stored")
    icon: str


def _result_payload(result) -> dict[str, Any]:
    return {"result": result.to_dict(), "popup": render(result).to_dict()}


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------


def create_app(service: TrustLookupService | None = None) -> FastAPI:
    """
    Build the ASGI app. With no service given, one is wired from settings in
    the lifespan around a shared httpx.AsyncClient that is closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        if service is None:
            client = new_http_client()
            app.state.service = build_service(client)
        else:
            app.state.service = service
        await app.state.service.ensure_defaults()
        logger.info("api_started", version=__version__)
        try:
            yield
        finally:
            if client is not None:
                await client.aclose()
            logger.info("api_stopped")

    app = FastAPI(title="trust.txt validator", version=__version__, lifespan=lifespan)

    def _svc() -> TrustLookupService:
        return app.state.service

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @app.post("/lookup")
    async def lookup(body: LookupRequest) -> dict[str, Any]:
        result = await _svc().lookup(body.page_url, body.trust_uri, body.source)
        return _result_payload(result)

    @app.post("/scan")
    async def scan(body: ScanRequest) -> dict[str, Any]:
        results = await _svc().scan(body.page_url, body.texts, force=body.force)
        return {
            "page_url": body.page_url,
            "results": {uri: _result_payload(r) for uri, r in results.items()},
        }

    @app.get("/results")
    async def results(page_url: str = Query(..., min_length=1)) -> dict[str, Any]:
        stored = await _svc().results_for_page(page_url)
        return {"page_url": page_url, "results": {uri: r.to_dict() for uri, r in stored.items()}}

    @app.get("/severity", response_model=SeverityResponse)
    async def page_severity(page_url: str = Query(..., min_length=1)) -> SeverityResponse:
        level = await _svc().page_severity(page_url)
        return SeverityResponse(
            page_url=page_url,
            severity=level.value if level is not None else None,
            icon=icon_for(level),
        )

    @app.get("/settings/auto-verify", response_model=AutoVerifyBody)
    async def get_auto_verify() -> AutoVerifyBody:
        return AutoVerifyBody(enabled=await _svc().auto_verify_enabled())

    @app.put("/settings/auto-verify", response_model=AutoVerifyBody)
    async def put_auto_verify(body: AutoVerifyBody) -> AutoVerifyBody:
        await _svc().set_auto_verify(body.enabled)
        return AutoVerifyBody(enabled=body.enabled)

    return app


app = create_app()
