"""
Structured logging for the trust.txt validator.

JSON logs with timestamp, event_type and per-event fields (trust_uri, page_url, ...).
Use get_logger() in every module.
"""

from trusttxt_validator.validator_logging.logger import get_logger

__all__ = ["get_logger"]
