"""Group findings into one inline comment per (file, line)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable, Iterator

from commitlens_core.models import FileRef, Finding
from commitlens_core.ordering import finding_sort_key
from commitlens_core.placement import inline_line, select_findings

if TYPE_CHECKING:
    from commitlens_core.facade import CommitFacade
    from commitlens_core.markdown import MarkdownRenderer
    from commitlens_core.report import GlobalReport

logger = logging.getLogger(__name__)

PositionKey = tuple[FileRef, int]


class CommentTable:
    """Inline comment bodies keyed by (file, line).

    Each body is the list of fragments appended so far; body() renders them
    with a trailing newline after every fragment.
    """

    def __init__(self):
        self._bodies: dict[PositionKey, list[str]] = {}

    def append(self, file: FileRef, line: int, fragment: str) -> None:
        self._bodies.setdefault((file, line), []).append(fragment)

    def body(self, file: FileRef, line: int) -> str:
        return "".join(f"{fragment}\n" for fragment in self._bodies.get((file, line), []))

    def __len__(self) -> int:
        return len(self._bodies)

    def __contains__(self, key: PositionKey) -> bool:
        return key in self._bodies

    def __iter__(self) -> Iterator[tuple[FileRef, int, str]]:
        """Yield (file, line, body) in path then line order."""
        for file, line in sorted(self._bodies, key=lambda k: (k[0].path, k[1])):
            yield file, line, self.body(file, line)


def aggregate(
    findings: Iterable[Finding],
    report: GlobalReport,
    facade: CommitFacade,
    markdown: MarkdownRenderer,
    config: dict,
    order: Callable[[Finding], object] = finding_sort_key,
) -> CommentTable:
    """Build the comment table and feed every reported finding to ``report``.

    Findings that cannot be placed inline still reach the report with
    ``placed_inline=False`` so they show up in the summary comment.
    """
    table = CommentTable()
    selected = select_findings(findings, facade, config.get("only_issue_from_commit_file", False))
    try_inline = config.get("try_report_issues_inline", True)

    for finding in sorted(selected, key=order):
        line = inline_line(finding, facade, try_inline)
        placed_inline = line is not None
        if placed_inline:
            table.append(
                finding.file,
                line,
                markdown.inline_issue(finding.severity, finding.message, finding.rule_key),
            )
        else:
            logger.debug("Finding %s on %s:%s kept for the summary only", finding.rule_key, finding.file, finding.line)
        report.process(finding, facade.get_link(finding.file, finding.line), placed_inline)

    return table
