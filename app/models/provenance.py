"""
Provenance tagging shared by all parsed records.

Every record produced from AI text keeps a per-field map telling whether a
value was read from the text or filled in by the parser, so callers can
decide whether to show or discard placeholder data.
"""

from enum import Enum
from typing import Any, Dict, Iterable

from pydantic import BaseModel, Field, computed_field


class Provenance(str, Enum):
    """Origin of a single field value."""

    EXTRACTED = "extracted"
    DEFAULT = "default"
    SYNTHESIZED = "synthesized"
    MISSING = "missing"


class ParsedRecord(BaseModel):
    """Base model for records built from free-form AI text."""

    provenance: Dict[str, Provenance] = Field(
        default_factory=dict, description="Origin of each field value"
    )

    @computed_field
    @property
    def synthetic(self) -> bool:
        """True when at least one field holds a synthesized value."""
        return Provenance.SYNTHESIZED in self.provenance.values()

    def tag(self, field: str, provenance: Provenance) -> None:
        self.provenance[field] = provenance

    def tag_many(self, fields: Iterable[str], provenance: Provenance) -> None:
        for field in fields:
            self.provenance[field] = provenance

    def tag_value(self, field: str, value: Any) -> None:
        """Tag a field EXTRACTED when it holds a value, MISSING otherwise."""
        if value in (None, "", []):
            self.provenance[field] = Provenance.MISSING
        else:
            self.provenance[field] = Provenance.EXTRACTED

    def extracted_fields(self) -> list[str]:
        return [
            name for name, origin in self.provenance.items()
            if origin == Provenance.EXTRACTED
        ]
