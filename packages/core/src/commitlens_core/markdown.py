"""Markdown fragments for inline and summary comments."""

from __future__ import annotations

from urllib.parse import quote

from commitlens_core.models import BLOCKER, CRITICAL, INFO, MAJOR, MINOR

_SEVERITY_ICON = {
    BLOCKER: ":no_entry:",
    CRITICAL: ":no_entry_sign:",
    MAJOR: ":warning:",
    MINOR: ":arrow_down_small:",
    INFO: ":information_source:",
}


class MarkdownRenderer:
    """Renders one finding as a markdown fragment.

    ``rules_url`` is the base URL of the rule documentation (for SonarQube,
    the server URL). Without it the rule key is shown as inline code.
    """

    def __init__(self, rules_url: str | None = None):
        self._rules_url = rules_url.rstrip("/") if rules_url else None

    @classmethod
    def from_config(cls, config: dict) -> MarkdownRenderer:
        return cls(rules_url=config.get("rules_url"))

    def inline_issue(self, severity: str, message: str, rule_key: str) -> str:
        return f"{self.severity_icon(severity)} {message} {self.rule_ref(rule_key)}"

    def global_issue(
        self,
        severity: str,
        message: str,
        rule_key: str,
        url: str | None,
        component: str | None,
    ) -> str:
        if url:
            text = f"[{message}]({url})"
        elif component:
            text = f"{message} ({component})"
        else:
            text = message
        return f"{self.severity_icon(severity)} {text} {self.rule_ref(rule_key)}"

    def rule_ref(self, rule_key: str) -> str:
        if self._rules_url is None:
            return f"`{rule_key}`"
        return f"[:blue_book:]({self._rules_url}/coding_rules#rule_key={quote(rule_key, safe='')})"

    @staticmethod
    def severity_icon(severity: str) -> str:
        return _SEVERITY_ICON.get(severity, ":grey_question:")
