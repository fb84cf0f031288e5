"""Compiled patterns for surface-level .proto line recognition.

Patterns apply to line *content*: the diff ``+`` marker has already been
removed and the trailing ``//`` comment stripped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from protopresence.proto.models import SCALAR_TYPES

_SCALAR_ALTERNATION = "|".join(sorted(SCALAR_TYPES))

FIELD_PATTERN = (
    r"^\s*(optional\s+|repeated\s+)?"
    rf"({_SCALAR_ALTERNATION}|[A-Z][A-Za-z0-9_]*)\s+"
    r"([a-z_][A-Za-z0-9_]*)\s*=\s*\d+"
)
MAP_PATTERN = r"^\s*map\s*<.*>\s+[a-z_][A-Za-z0-9_]*\s*="
ONEOF_START_PATTERN = r"^\s*oneof\s+[a-z_][A-Za-z0-9_]*\s*\{\s*$"
BLOCK_END_PATTERN = r"^\s*\}"
COMMENT_PATTERN = r"//.*$"


@dataclass(frozen=True)
class SchemaPatterns:
    """Immutable bundle of compiled patterns, built once per process."""

    field: re.Pattern[str]
    map: re.Pattern[str]
    oneof_start: re.Pattern[str]
    block_end: re.Pattern[str]
    comment: re.Pattern[str]


def build_patterns() -> SchemaPatterns:
    """Compile the schema patterns."""
    return SchemaPatterns(
        field=re.compile(FIELD_PATTERN),
        map=re.compile(MAP_PATTERN),
        oneof_start=re.compile(ONEOF_START_PATTERN),
        block_end=re.compile(BLOCK_END_PATTERN),
        comment=re.compile(COMMENT_PATTERN),
    )
