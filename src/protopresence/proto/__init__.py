"""Schema line recognition — patterns, field recognizer, oneof tracking."""

from protopresence.proto.block_state import OneofTracker
from protopresence.proto.models import (
    SCALAR_TYPES,
    FieldDeclaration,
    LineClassification,
    LineKind,
    PresenceLabel,
)
from protopresence.proto.patterns import SchemaPatterns, build_patterns
from protopresence.proto.recognizer import FieldRecognizer

__all__ = [
    "SCALAR_TYPES",
    "FieldDeclaration",
    "FieldRecognizer",
    "LineClassification",
    "LineKind",
    "OneofTracker",
    "PresenceLabel",
    "SchemaPatterns",
    "build_patterns",
]
