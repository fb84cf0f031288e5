"""Unified diff walker — single pass over the diff, yields violations.

Only added lines are evaluated. File context comes from ``+++ b/<path>``
headers and the new-file line number from ``@@`` hunk headers; context and
removed lines do not advance the counter. Anything that is not diff syntax
(binary markers, stray text) is ignored.
"""

from __future__ import annotations

import re
from typing import Generator, List, Optional

from protopresence.findings.models import Violation
from protopresence.git.models import DiffFile, ScanContext
from protopresence.proto.models import LineKind
from protopresence.proto.patterns import SchemaPatterns
from protopresence.proto.recognizer import FieldRecognizer
from protopresence.rules.policy import ViolationPolicy

# --- Regex patterns for diff structure ---

# git appends a tab to header paths containing spaces
_FILE_HEADER_RE = re.compile(r'^\+\+\+ (?:b/(.+?)|"b/(.+)")\t?$')
_HUNK_HEADER_RE = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@"
)


def _split_lines(diff_text: str) -> List[str]:
    """Split on newlines only; unified diff has no other line separator."""
    return [line[:-1] if line.endswith("\r") else line for line in diff_text.split("\n")]


def _is_added_line(line: str) -> bool:
    return line.startswith("+") and not line.startswith("+++")


class DiffWalker:
    """Walk unified diff text and yield DiffFile / Violation objects.

    Usage::

        walker = DiffWalker(diff_text)
        for item in walker.parse():
            if isinstance(item, DiffFile):
                ...
            elif isinstance(item, Violation):
                ...
    """

    def __init__(
        self,
        diff_text: str,
        *,
        patterns: Optional[SchemaPatterns] = None,
        policy: Optional[ViolationPolicy] = None,
    ) -> None:
        self._lines = _split_lines(diff_text)
        self._recognizer = FieldRecognizer(patterns)
        self._policy = policy or ViolationPolicy()

    def parse(self) -> Generator[DiffFile | Violation, None, None]:
        """Yield a DiffFile per new file header, and each Violation in order."""
        ctx = ScanContext()
        seen_files: set[str] = set()

        for raw_line in self._lines:
            # --- File header → new file context ---
            fm = _FILE_HEADER_RE.match(raw_line)
            if fm:
                ctx.current_file = fm.group(1) or fm.group(2)
                if ctx.current_file not in seen_files:
                    seen_files.add(ctx.current_file)
                    yield DiffFile(path=ctx.current_file)
                continue

            # --- Hunk header → next added line is at the new-file start ---
            hm = _HUNK_HEADER_RE.match(raw_line)
            if hm:
                ctx.current_line_num = int(hm.group(3)) - 1
                continue

            # --- Context, removed, and non-diff lines → skip ---
            if not _is_added_line(raw_line):
                continue

            ctx.current_line_num += 1
            classified = self._recognizer.classify(raw_line)
            if classified.kind is LineKind.BLANK:
                continue

            ctx.oneof.update(classified)

            violation = self._policy.evaluate(
                classified,
                file=ctx.current_file,
                line_no=ctx.current_line_num,
                in_oneof=ctx.in_oneof_block,
            )
            if violation is not None:
                yield violation


def parse_diff(
    diff_text: str,
    *,
    patterns: Optional[SchemaPatterns] = None,
    policy: Optional[ViolationPolicy] = None,
) -> List[Violation]:
    """Return the violations in *diff_text*, in scan order."""
    walker = DiffWalker(diff_text, patterns=patterns, policy=policy)
    return [item for item in walker.parse() if isinstance(item, Violation)]
