"""
trust.txt parser: raw manifest text to TrustManifest.

Total function: blank lines and comments are skipped, malformed lines are
dropped, unknown variables are logged as warnings. A forward-compatible or
broken manifest still yields a usable (possibly empty) record.
"""

from __future__ import annotations

from dataclasses import dataclass

from trusttxt_validator.manifest.models import (
    CATEGORY_FIELDS,
    DATA_TRAINING_VARIABLE,
    TrustManifest,
)
from trusttxt_validator.validator_logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ParseWarning:
    """Non-fatal anomaly found while parsing; the line was ignored."""

    line_number: int
    variable: str
    reason: str


def _split_line(line: str) -> tuple[str, str] | None:
    """variable, value for a 'variable=value' line; None when either side is missing."""
    variable, sep, value = line.partition("=")
    if not sep:
        return None
    variable = variable.strip().lower()
    value = value.strip()
    if not variable or not value:
        return None
    return variable, value


def parse_manifest_with_warnings(text: str) -> tuple[TrustManifest, list[ParseWarning]]:
    """Parse manifest text; return the record and the warnings raised along the way."""
    buckets: dict[str, list[str]] = {attr: [] for attr in CATEGORY_FIELDS.values()}
    data_training_allowed = False
    warnings: list[ParseWarning] = []

    for line_number, raw_line in enumerate((text or "").splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        pair = _split_line(line)
        if pair is None:
            continue
        variable, value = pair
        attr = CATEGORY_FIELDS.get(variable)
        if attr is not None:
            buckets[attr].append(value)
        elif variable == DATA_TRAINING_VARIABLE:
            data_training_allowed = value.lower() == "yes"
        else:
            warnings.append(ParseWarning(line_number, variable, "unknown variable"))

    manifest = TrustManifest(
        **{attr: tuple(values) for attr, values in buckets.items()},
        data_training_allowed=data_training_allowed,
    )
    return manifest, warnings


def parse_manifest(text: str) -> TrustManifest:
    """Parse manifest text into a TrustManifest. Never raises."""
    manifest, warnings = parse_manifest_with_warnings(text)
    for w in warnings:
        logger.warning(
            "manifest_unknown_variable",
            variable=w.variable,
            line_number=w.line_number,
        )
    return manifest
