"""Deterministic ordering of findings.

Inline comment bodies are the concatenation of every finding on a line, so the
order findings are processed in is visible to reviewers. Sorting with this key
makes repeated runs over the same findings produce identical comments no matter
how the analysis engine ordered them.
"""

from __future__ import annotations

from commitlens_core.models import SEVERITIES, Finding

_SEVERITY_RANK = {severity: rank for rank, severity in enumerate(SEVERITIES)}


def finding_sort_key(finding: Finding) -> tuple:
    """Most severe first, then project-level findings, then by path, line and rule."""
    severity_rank = _SEVERITY_RANK.get(finding.severity, len(SEVERITIES))
    if finding.file is None:
        component = (0, "", False)
    else:
        component = (1, finding.file.path, finding.file.is_file)
    line = (0, 0) if finding.line is None else (1, finding.line)
    return (severity_rank, finding.severity, component, line, finding.rule_key, finding.message)


def compare_findings(left: Finding, right: Finding) -> int:
    """Three-way comparison consistent with finding_sort_key."""
    left_key = finding_sort_key(left)
    right_key = finding_sort_key(right)
    if left_key < right_key:
        return -1
    if left_key > right_key:
        return 1
    return 0
