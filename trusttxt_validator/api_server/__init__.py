"""
HTTP API over the lookup service (FastAPI).
"""
