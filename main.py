"""
Main entrypoint: resolve a Trust URI from the command line, or serve the HTTP API.

    python main.py resolve https://twitter.com/acme 'trust://acme.example!'
    python main.py serve --host 127.0.0.1 --port 8000

Env: DOWNLOAD_TIMEOUT, TRUST_VALIDATOR_URL, VALIDATOR_TIMEOUT, API_HOST, API_PORT, LOG_LEVEL, LOG_FORMAT.

API-only: uvicorn trusttxt_validator.api_server.app:app --host 127.0.0.1 --port 8000
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

# Configure structured logging before other imports that may log
from trusttxt_validator.validator_logging import get_logger

logger = get_logger("main")


async def _resolve(page_url: str, trust_uri: str) -> dict:
    from trusttxt_validator.lookup.service import build_service, new_http_client
    from trusttxt_validator.cache.store import MemoryStore
    from trusttxt_validator.presentation.messages import render

    async with new_http_client() as client:
        service = build_service(client, local_store=MemoryStore())
        result = await service.resolver.resolve(page_url, trust_uri)
    return {"result": result.to_dict(), "popup": render(result).to_dict()}


def cmd_resolve(args: argparse.Namespace) -> int:
    payload = asyncio.run(_resolve(args.page_url, args.trust_uri))
    print(json.dumps(payload, indent=2))
    return 0 if payload["result"]["type"] in ("account", "multiple") else 1


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from trusttxt_validator.config import get_settings

    settings = get_settings()
    host = args.host or settings.api_host
    port = args.port or settings.api_port
    logger.info("main_server_starting", host=host, port=port)
    uvicorn.run("trusttxt_validator.api_server.app:app", host=host, port=port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="trust.txt validator")
    sub = parser.add_subparsers(dest="command", required=True)

    p_resolve = sub.add_parser("resolve", help="Resolve a Trust URI for a page URL and print the result")
    p_resolve.add_argument("page_url")
    p_resolve.add_argument("trust_uri")
    p_resolve.set_defaults(func=cmd_resolve)

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.set_defaults(func=cmd_serve)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
