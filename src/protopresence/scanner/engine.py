"""Check engine — diff walk, ignore globs, baseline, timing."""

from __future__ import annotations

import time
from fnmatch import fnmatch
from typing import List, Optional

from protopresence.config.schema import ProtoPresenceConfig
from protopresence.findings.baseline import Baseline
from protopresence.findings.models import CheckResult, Violation
from protopresence.git.diff_walker import DiffWalker
from protopresence.git.models import DiffFile
from protopresence.proto.patterns import SchemaPatterns, build_patterns
from protopresence.rules.policy import ViolationPolicy


class CheckError(Exception):
    """Raised on an internal error while walking the diff."""


def check(
    diff_text: str,
    config: ProtoPresenceConfig,
    *,
    baseline: Optional[Baseline] = None,
    patterns: Optional[SchemaPatterns] = None,
) -> CheckResult:
    """Run the full check on *diff_text*. Returns a CheckResult."""
    start = time.perf_counter()

    patterns = patterns or build_patterns()
    policy = ViolationPolicy(config.policy.scope)
    ignore_globs = config.ignore.files

    walker = DiffWalker(diff_text, patterns=patterns, policy=policy)

    violations: List[Violation] = []
    ignored_files: List[str] = []
    checked_files: set[str] = set()

    try:
        for item in walker.parse():
            if isinstance(item, DiffFile):
                if any(fnmatch(item.path, g) for g in ignore_globs):
                    ignored_files.append(item.path)
                else:
                    checked_files.add(item.path)
                continue

            if item.file in ignored_files:
                continue
            violations.append(item)
    except Exception as exc:
        raise CheckError(f"Internal error while walking the diff: {exc}") from exc

    accepted: List[Violation] = []
    if baseline is not None and len(baseline):
        violations, accepted = baseline.split(violations)

    elapsed = (time.perf_counter() - start) * 1000

    return CheckResult(
        violations=violations,
        accepted=accepted,
        ignored_files=ignored_files,
        files_checked=len(checked_files),
        duration_ms=round(elapsed, 2),
    )
