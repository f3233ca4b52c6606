"""Load analysis findings from a JSON report.

Two shapes are accepted: a bare list of issues, or an object with an
``issues`` list (the shape of SonarQube's ``api/issues/search``). Field names
from both the plain format and SonarQube are understood:

    {"rule": "python:S1481", "severity": "MAJOR", "message": "...",
     "file": "src/app.py", "line": 12, "is_new": true}
"""

from __future__ import annotations

import json
from pathlib import Path

from commitlens_core.models import SEVERITIES, FileRef, Finding


def _parse_issue(raw: dict, index: int) -> Finding:
    if not isinstance(raw, dict):
        raise ValueError(f"Issue #{index} must be an object, got {type(raw).__name__}.")

    rule_key = raw.get("rule") or raw.get("rule_key")
    if not rule_key:
        raise ValueError(f"Issue #{index} has no rule key.")

    severity = str(raw.get("severity", "")).upper()
    if severity not in SEVERITIES:
        raise ValueError(f"Issue #{index} ({rule_key}) has unknown severity {raw.get('severity')!r}.")

    path = raw.get("file") or raw.get("component")
    file = None
    if path:
        file = FileRef(path=path, is_file=raw.get("component_type", "file") == "file")

    line = raw.get("line")
    if line is not None:
        try:
            line = int(line)
        except (TypeError, ValueError):
            raise ValueError(f"Issue #{index} ({rule_key}) has a non-integer line {line!r}.")

    is_new = raw.get("is_new", raw.get("new", True))
    if not isinstance(is_new, bool):
        raise ValueError(f"Issue #{index} ({rule_key}) has a non-boolean is_new {is_new!r}.")

    return Finding(
        rule_key=rule_key,
        severity=severity,
        message=raw.get("message", ""),
        file=file,
        line=line,
        is_new=is_new,
    )


def parse_findings(data) -> list[Finding]:
    if isinstance(data, dict):
        data = data.get("issues")
    if not isinstance(data, list):
        raise ValueError("Findings must be a list of issues or an object with an 'issues' list.")
    return [_parse_issue(raw, i) for i, raw in enumerate(data)]


def load_findings(path: str) -> list[Finding]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Findings file not found: {path}")
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Findings file {path} is not valid JSON: {e}")
    return parse_findings(data)
