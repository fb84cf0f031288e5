"""Data models for schema line classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

SCALAR_TYPES: frozenset[str] = frozenset({
    "double", "float",
    "int32", "int64", "uint32", "uint64",
    "sint32", "sint64",
    "fixed32", "fixed64", "sfixed32", "sfixed64",
    "bool", "string", "bytes",
})


class PresenceLabel(str, Enum):
    NONE = "none"
    OPTIONAL = "optional"
    REPEATED = "repeated"

    @classmethod
    def from_qualifier(cls, qualifier: Optional[str]) -> "PresenceLabel":
        """Map the raw regex qualifier group (``'optional '`` etc.) to a label."""
        if not qualifier:
            return cls.NONE
        return cls(qualifier.strip())


class LineKind(str, Enum):
    FIELD = "field"
    MAP = "map"
    ONEOF_START = "oneof_start"
    BLOCK_END = "block_end"
    BLANK = "blank"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class FieldDeclaration:
    """A field declaration extracted from one added schema line."""

    presence_label: PresenceLabel
    field_type: str
    field_name: str

    @property
    def is_scalar(self) -> bool:
        return self.field_type in SCALAR_TYPES


@dataclass(frozen=True, slots=True)
class LineClassification:
    """Result of classifying one diff line."""

    kind: LineKind
    indent: int = 0
    field: Optional[FieldDeclaration] = None  # set only when kind is FIELD
