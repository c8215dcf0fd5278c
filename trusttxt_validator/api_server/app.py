"""
FastAPI/ASGI application entrypoint.

Run with: uvicorn trusttxt_validator.api_server.app:app --host 127.0.0.1 --port 8000
"""

from trusttxt_validator.api_server.server import app

__all__ = ["app"]
