"""Violation policy."""

from protopresence.rules.policy import PolicyScope, ViolationPolicy

__all__ = ["PolicyScope", "ViolationPolicy"]
