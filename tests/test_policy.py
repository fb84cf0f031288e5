"""Tests for the violation policy."""

import pytest

from protopresence.findings.models import Violation
from protopresence.proto.models import (
    FieldDeclaration,
    LineClassification,
    LineKind,
    PresenceLabel,
)
from protopresence.rules.policy import PolicyScope, ViolationPolicy


def _field(label: PresenceLabel, ftype: str = "string", name: str = "value") -> LineClassification:
    return LineClassification(
        kind=LineKind.FIELD,
        indent=2,
        field=FieldDeclaration(presence_label=label, field_type=ftype, field_name=name),
    )


def _evaluate(policy: ViolationPolicy, line: LineClassification, *, in_oneof: bool = False):
    return policy.evaluate(line, file="a.proto", line_no=7, in_oneof=in_oneof)


class TestScalarScope:
    policy = ViolationPolicy()

    def test_unqualified_scalar_violates(self):
        v = _evaluate(self.policy, _field(PresenceLabel.NONE, "int32", "count"))
        assert v == Violation(file="a.proto", line_no=7, field_name="count", field_type="int32")
        assert v.message == "a.proto:7: field 'count' of type 'int32' is missing 'optional' keyword"

    def test_optional_passes(self):
        assert _evaluate(self.policy, _field(PresenceLabel.OPTIONAL)) is None

    def test_repeated_passes(self):
        assert _evaluate(self.policy, _field(PresenceLabel.REPEATED)) is None

    def test_inside_oneof_passes(self):
        assert _evaluate(self.policy, _field(PresenceLabel.NONE), in_oneof=True) is None

    def test_map_passes(self):
        assert _evaluate(self.policy, LineClassification(kind=LineKind.MAP, indent=2)) is None

    @pytest.mark.parametrize("kind", [LineKind.OTHER, LineKind.ONEOF_START, LineKind.BLOCK_END])
    def test_non_field_passes(self, kind):
        assert _evaluate(self.policy, LineClassification(kind=kind)) is None

    def test_message_type_passes(self):
        assert _evaluate(self.policy, _field(PresenceLabel.NONE, "Address")) is None


class TestAllScope:
    policy = ViolationPolicy(PolicyScope.ALL)

    def test_message_type_violates(self):
        v = _evaluate(self.policy, _field(PresenceLabel.NONE, "Address", "home"))
        assert v is not None
        assert v.field_type == "Address"

    def test_optional_message_passes(self):
        assert _evaluate(self.policy, _field(PresenceLabel.OPTIONAL, "Address")) is None

    def test_repeated_message_passes(self):
        assert _evaluate(self.policy, _field(PresenceLabel.REPEATED, "Address")) is None

    def test_oneof_message_passes(self):
        assert _evaluate(self.policy, _field(PresenceLabel.NONE, "Address"), in_oneof=True) is None


class TestScopeParsing:
    def test_accepts_strings(self):
        assert ViolationPolicy("all").scope is PolicyScope.ALL
        assert ViolationPolicy("scalar").scope is PolicyScope.SCALAR

    def test_rejects_unknown_scope(self):
        with pytest.raises(ValueError):
            ViolationPolicy("everything")
