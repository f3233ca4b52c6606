"""Run-wide report: severity counts, quality gate status and the summary comment."""

from __future__ import annotations

from commitlens_core.markdown import MarkdownRenderer
from commitlens_core.models import FAILED, SEVERITIES, SUCCESS, Finding


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class GlobalReport:
    """Accumulates every reported finding of one run.

    Findings are fed in by the aggregator through process(), once each. The
    summary lists the findings that could not be placed inline (up to
    ``max_global_issues`` of them); the rest are visible as inline comments.
    """

    def __init__(self, config: dict, markdown: MarkdownRenderer | None = None):
        self._markdown = markdown or MarkdownRenderer.from_config(config)
        self._max_global_issues = config.get("max_global_issues", 10)
        self._gates = {s: config.get(f"max_{s.lower()}_issues_gate", -1) for s in SEVERITIES}
        self._counts = {s: 0 for s in SEVERITIES}
        self._inline_count = 0
        self._not_reported: list[str] = []
        self._not_reported_count = 0

    def process(self, finding: Finding, link: str | None, placed_inline: bool) -> None:
        if finding.severity in self._counts:
            self._counts[finding.severity] += 1
        if placed_inline:
            self._inline_count += 1
            return
        self._not_reported_count += 1
        if len(self._not_reported) < self._max_global_issues:
            component = finding.file.path if finding.file is not None else None
            self._not_reported.append(
                self._markdown.global_issue(finding.severity, finding.message, finding.rule_key, link, component)
            )

    def new_issue_count(self, severity: str | None = None) -> int:
        if severity is not None:
            return self._counts.get(severity, 0)
        return sum(self._counts.values())

    def has_new_issue(self) -> bool:
        return self._inline_count + self._not_reported_count > 0

    def _gate_exceeded(self, severity: str) -> bool:
        gate = self._gates[severity]
        return gate >= 0 and self._counts[severity] > gate

    def status(self) -> str:
        if any(self._gate_exceeded(s) for s in SEVERITIES):
            return FAILED
        return SUCCESS

    def status_description(self) -> str:
        total = self.new_issue_count()
        if total == 0:
            return "Static analysis reported no issues"
        parts = []
        for severity in SEVERITIES:
            count = self._counts[severity]
            if count:
                part = f"{count} {severity.lower()}"
                if self._gate_exceeded(severity):
                    part += " (fail)"
                parts.append(part)
        if len(parts) > 1:
            detail = ", ".join(parts[:-1]) + " and " + parts[-1]
        else:
            detail = parts[0] if parts else ""
        description = f"Static analysis reported {_plural(total, 'issue')}"
        return f"{description}, with {detail}" if detail else description

    def format_for_markdown(self) -> str:
        total = self.new_issue_count()
        if not self.has_new_issue():
            return "Static analysis reported no issues."

        lines = [f"Static analysis reported {_plural(total, 'issue')}", ""]
        for severity in SEVERITIES:
            count = self._counts[severity]
            if count:
                lines.append(f"* {self._markdown.severity_icon(severity)} {count} {severity.lower()}")

        if self._inline_count:
            lines.append("")
            lines.append("Watch the comments in this commit to review them.")

        if self._not_reported_count:
            lines.append("")
            lines.append(f"#### {_plural(self._not_reported_count, 'extra issue')}")
            lines.append("")
            lines.append(
                "Note: the following issues could not be reported as comments "
                "because they are located on lines that are not displayed in this commit:"
            )
            lines.append("")
            lines.extend(f"1. {entry}" for entry in self._not_reported)
            hidden = self._not_reported_count - len(self._not_reported)
            if hidden > 0:
                lines.append(f"* ... {hidden} more")

        return "\n".join(lines) + "\n"
