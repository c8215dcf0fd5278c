"""
Data model for a parsed trust.txt manifest.

TrustManifest is immutable: list-valued categories are tuples in encounter
order. Only social, member and datatrainingallowed drive matching; the other
categories are carried so the record is complete and serializable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Manifest variable name -> TrustManifest attribute, in serialization order
CATEGORY_FIELDS: dict[str, str] = {
    "member": "member",
    "belongto": "belong_to",
    "control": "control",
    "controlledby": "controlled_by",
    "social": "social",
    "vendor": "vendor",
    "customer": "customer",
    "disclosure": "disclosure",
    "contact": "contact",
}
DATA_TRAINING_VARIABLE = "datatrainingallowed"


@dataclass(frozen=True)
class TrustManifest:
    """A trust.txt file."""

    member: tuple[str, ...] = ()
    belong_to: tuple[str, ...] = ()
    control: tuple[str, ...] = ()
    controlled_by: tuple[str, ...] = ()
    social: tuple[str, ...] = ()
    vendor: tuple[str, ...] = ()
    customer: tuple[str, ...] = ()
    disclosure: tuple[str, ...] = ()
    contact: tuple[str, ...] = ()
    data_training_allowed: bool = False

    def is_empty(self) -> bool:
        return not any(getattr(self, attr) for attr in CATEGORY_FIELDS.values())

    def to_text(self) -> str:
        """Serialize back to manifest line format."""
        lines: list[str] = []
        for variable, attr in CATEGORY_FIELDS.items():
            for value in getattr(self, attr):
                lines.append(f"{variable}={value}")
        if self.data_training_allowed:
            lines.append(f"{DATA_TRAINING_VARIABLE}=yes")
        return "\n".join(lines) + ("\n" if lines else "")

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            variable: list(getattr(self, attr)) for variable, attr in CATEGORY_FIELDS.items()
        }
        out[DATA_TRAINING_VARIABLE] = self.data_training_allowed
        return out
