"""Violation policy — decide whether a recognized field needs ``optional``."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from protopresence.findings.models import Violation
from protopresence.proto.models import LineClassification, LineKind, PresenceLabel


class PolicyScope(str, Enum):
    """Which unqualified fields are flagged.

    ``SCALAR`` flags only the fifteen scalar types; message and enum typed
    fields pass. ``ALL`` flags every field type.
    """

    SCALAR = "scalar"
    ALL = "all"


class ViolationPolicy:
    def __init__(self, scope: PolicyScope | str = PolicyScope.SCALAR) -> None:
        self.scope = PolicyScope(scope)

    def evaluate(
        self,
        line: LineClassification,
        *,
        file: str,
        line_no: int,
        in_oneof: bool,
    ) -> Optional[Violation]:
        """Return a Violation for *line*, or None when it passes."""
        # oneof members and map entries cannot carry a presence label
        if in_oneof or line.kind is LineKind.MAP:
            return None
        if line.kind is not LineKind.FIELD or line.field is None:
            return None

        decl = line.field
        if decl.presence_label is not PresenceLabel.NONE:
            return None
        if self.scope is PolicyScope.SCALAR and not decl.is_scalar:
            return None

        return Violation(
            file=file,
            line_no=line_no,
            field_name=decl.field_name,
            field_type=decl.field_type,
        )
