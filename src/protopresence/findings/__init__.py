"""Violation models and baseline."""

from protopresence.findings.baseline import Baseline, BaselineEntry, BaselineError
from protopresence.findings.models import CheckResult, Violation

__all__ = ["Baseline", "BaselineEntry", "BaselineError", "CheckResult", "Violation"]
