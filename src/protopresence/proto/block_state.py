"""Oneof block tracking by indentation.

The tracker keeps a single threshold: the indentation of the line that
opened the current ``oneof``. A closing brace at that indentation or less
ends the block. It assumes one extra level of indentation per nested block.

Known limitations:
  - Braces in the middle of a line are not seen. ``oneof x { int32 a = 1; }``
    on one line is not an opener, since its ``{`` is not the last token.
  - State never stacks. A oneof opened while another is open replaces the
    threshold, and the first qualifying ``}`` closes both.
  - Irregular indentation (a ``}`` shallower than its fields but deeper than
    the opener, or vice versa) produces wrong membership.
"""

from __future__ import annotations

from dataclasses import dataclass

from protopresence.proto.models import LineClassification, LineKind


@dataclass
class OneofTracker:
    in_block: bool = False
    block_indent: int = 0

    def update(self, line: LineClassification) -> None:
        """Advance the state with one classified, non-blank line."""
        if line.kind is LineKind.ONEOF_START:
            self.in_block = True
            self.block_indent = line.indent
            return

        if self.in_block and line.kind is LineKind.BLOCK_END:
            if line.indent <= self.block_indent:
                self.in_block = False

    def reset(self) -> None:
        self.in_block = False
        self.block_indent = 0
