"""Field recognizer — classify one added diff line of .proto text."""

from __future__ import annotations

from typing import Optional

from protopresence.proto.models import (
    FieldDeclaration,
    LineClassification,
    LineKind,
    PresenceLabel,
)
from protopresence.proto.patterns import SchemaPatterns, build_patterns


def content_of(line: str) -> str:
    """Drop the leading ``+`` diff marker and any UTF-8 BOM."""
    if line.startswith("+"):
        line = line[1:]
    return line.lstrip("\ufeff")


def indentation(content: str) -> int:
    """Count leading spaces/tabs (a tab counts as one column)."""
    return len(content) - len(content.lstrip(" \t"))


class FieldRecognizer:
    """Pattern-based classifier for a single line of schema text.

    Not a protobuf parser: a line is judged on its own, after the trailing
    ``//`` comment has been removed.
    """

    def __init__(self, patterns: Optional[SchemaPatterns] = None) -> None:
        self._patterns = patterns or build_patterns()

    @property
    def patterns(self) -> SchemaPatterns:
        return self._patterns

    def strip_comment(self, content: str) -> str:
        return self._patterns.comment.sub("", content).rstrip()

    def classify(self, line: str) -> LineClassification:
        """Classify *line* (diff text, including its ``+`` marker)."""
        content = self.strip_comment(content_of(line))
        if not content.strip():
            return LineClassification(kind=LineKind.BLANK)

        indent = indentation(content)
        p = self._patterns

        if p.oneof_start.match(content):
            return LineClassification(kind=LineKind.ONEOF_START, indent=indent)
        if p.block_end.match(content):
            return LineClassification(kind=LineKind.BLOCK_END, indent=indent)
        if p.map.match(content):
            return LineClassification(kind=LineKind.MAP, indent=indent)

        field = self.parse_field(content)
        if field is not None:
            return LineClassification(kind=LineKind.FIELD, indent=indent, field=field)
        return LineClassification(kind=LineKind.OTHER, indent=indent)

    def parse_field(self, content: str) -> Optional[FieldDeclaration]:
        """Extract a FieldDeclaration from decommented content, or None."""
        m = self._patterns.field.match(content)
        if m is None:
            return None
        return FieldDeclaration(
            presence_label=PresenceLabel.from_qualifier(m.group(1)),
            field_type=m.group(2),
            field_name=m.group(3),
        )
