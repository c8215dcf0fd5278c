"""
Trust resolution engine.

Matches a page URL against a fetched manifest and yields one of four
ResolutionResult variants. Delegates same-domain pages to a remote validator.
"""

from trusttxt_validator.engine.delegated import DelegatedValidator
from trusttxt_validator.engine.matcher import TrustResolver, match_member, match_social
from trusttxt_validator.engine.models import (
    RESULT_TYPES,
    TRUST_TXT_VERSION,
    AccountResult,
    ErrorResult,
    Finding,
    MultipleResult,
    NotFoundResult,
    ResolutionResult,
    result_from_dict,
)

__all__ = [
    "AccountResult",
    "DelegatedValidator",
    "ErrorResult",
    "Finding",
    "MultipleResult",
    "NotFoundResult",
    "RESULT_TYPES",
    "ResolutionResult",
    "TRUST_TXT_VERSION",
    "TrustResolver",
    "match_member",
    "match_social",
    "result_from_dict",
]
