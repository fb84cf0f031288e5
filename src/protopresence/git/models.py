"""Data models for diff walking."""

from __future__ import annotations

from dataclasses import dataclass, field

from protopresence.proto.block_state import OneofTracker


@dataclass(frozen=True)
class DiffFile:
    """A file header (``+++ b/<path>``) seen in the diff."""

    path: str


@dataclass
class ScanContext:
    """Mutable state threaded through one walk of a diff."""

    current_file: str = ""
    current_line_num: int = 0  # new-file line number of the line being evaluated
    oneof: OneofTracker = field(default_factory=OneofTracker)

    @property
    def in_oneof_block(self) -> bool:
        return self.oneof.in_block

    @property
    def oneof_block_indent(self) -> int:
        return self.oneof.block_indent
