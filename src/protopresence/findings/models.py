"""Violation and check-result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True, slots=True)
class Violation:
    """A newly added field that is missing the ``optional`` keyword."""

    file: str
    line_no: int
    field_name: str
    field_type: str

    @property
    def message(self) -> str:
        return (
            f"{self.file}:{self.line_no}: field '{self.field_name}' "
            f"of type '{self.field_type}' is missing 'optional' keyword"
        )

    def __str__(self) -> str:
        return self.message


@dataclass
class CheckResult:
    """Complete result of one check run."""

    violations: List[Violation] = field(default_factory=list)
    accepted: List[Violation] = field(default_factory=list)  # matched by the baseline
    ignored_files: List[str] = field(default_factory=list)
    files_checked: int = 0
    duration_ms: float = 0.0

    @property
    def total_violations(self) -> int:
        return len(self.violations)

    @property
    def failed(self) -> bool:
        return bool(self.violations)

    @property
    def messages(self) -> List[str]:
        return [v.message for v in self.violations]
