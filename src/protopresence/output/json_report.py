"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from protopresence.findings.models import CheckResult, Violation


def _violation_dict(v: Violation) -> Dict[str, Any]:
    return {
        "file": v.file,
        "line": v.line_no,
        "field": v.field_name,
        "type": v.field_type,
        "message": v.message,
    }


def to_dict(result: CheckResult) -> Dict[str, Any]:
    """Convert CheckResult to a JSON-serialisable dict."""
    violations: List[Dict[str, Any]] = [_violation_dict(v) for v in result.violations]

    return {
        "version": "1.0",
        "files_checked": result.files_checked,
        "total_violations": result.total_violations,
        "failed": result.failed,
        "violations": violations,
        "accepted": [_violation_dict(v) for v in result.accepted],
        "ignored_files": result.ignored_files,
        "duration_ms": result.duration_ms,
    }


def render(result: CheckResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)
