"""SARIF v2.1.0 reporter — GitHub Code Scanning upload."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from protopresence import __version__
from protopresence.findings.models import CheckResult

RULE_ID = "PROTO_MISSING_OPTIONAL"

_RULE = {
    "id": RULE_ID,
    "name": "ProtoFieldMissingOptional",
    "shortDescription": {"text": "New proto field is missing the 'optional' keyword"},
    "fullDescription": {
        "text": (
            "Newly added fields outside oneof blocks that are not repeated "
            "or map entries must declare explicit presence with 'optional'."
        )
    },
    "defaultConfiguration": {"level": "error"},
}


def to_dict(result: CheckResult) -> Dict[str, Any]:
    """Convert CheckResult to a SARIF v2.1.0 dict."""
    results: List[Dict[str, Any]] = []

    for v in result.violations:
        results.append({
            "ruleId": RULE_ID,
            "level": "error",
            "message": {
                "text": f"field '{v.field_name}' of type '{v.field_type}' is missing 'optional' keyword",
            },
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {"uri": v.file},
                        "region": {"startLine": max(v.line_no, 1)},
                    }
                }
            ],
        })

    return {
        "$schema": "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/main/sarif-2.1/schema/sarif-schema-2.1.0.json",
        "version": "2.1.0",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": "protopresence",
                        "version": __version__,
                        "rules": [_RULE],
                    }
                },
                "results": results,
            }
        ],
    }


def render(result: CheckResult) -> str:
    """Return SARIF JSON string."""
    return json.dumps(to_dict(result), indent=2)
