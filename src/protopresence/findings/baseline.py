"""Baseline of accepted violations, loaded from YAML.

File format (a list of entries)::

    - file: proto/legacy/*.proto   # fnmatch glob, required
      field: legacy_id             # field name glob, optional (default: all)
"""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import Path
from typing import List, Tuple

import yaml

from protopresence.findings.models import Violation


class BaselineError(Exception):
    """Raised when the baseline file is malformed or unreadable."""


@dataclass(frozen=True)
class BaselineEntry:
    file: str
    field: str = "*"

    def matches(self, violation: Violation) -> bool:
        return fnmatch(violation.file, self.file) and fnmatch(violation.field_name, self.field)


class Baseline:
    """Set of accepted legacy violations."""

    def __init__(self, entries: List[BaselineEntry] | None = None) -> None:
        self.entries: List[BaselineEntry] = list(entries or [])

    def __len__(self) -> int:
        return len(self.entries)

    def accepts(self, violation: Violation) -> bool:
        return any(e.matches(violation) for e in self.entries)

    def split(self, violations: List[Violation]) -> Tuple[List[Violation], List[Violation]]:
        """Partition *violations* into (remaining, accepted), preserving order."""
        remaining: List[Violation] = []
        accepted: List[Violation] = []
        for v in violations:
            (accepted if self.accepts(v) else remaining).append(v)
        return remaining, accepted

    @classmethod
    def from_file(cls, path: Path) -> "Baseline":
        """Load a baseline. A missing file yields an empty baseline."""
        if not path.is_file():
            return cls()
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise BaselineError(f"Failed to parse {path}: {exc}") from exc

        if data is None:
            return cls()
        if not isinstance(data, list):
            data = [data]

        entries: List[BaselineEntry] = []
        for idx, entry in enumerate(data, start=1):
            if not isinstance(entry, dict) or "file" not in entry:
                raise BaselineError(f"{path}: entry {idx} must be a mapping with a 'file' key")
            entries.append(
                BaselineEntry(file=str(entry["file"]), field=str(entry.get("field", "*")))
            )
        return cls(entries)
