"""Which findings are reported at all, and which of them can go inline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator

from commitlens_core.models import Finding

if TYPE_CHECKING:
    from commitlens_core.facade import CommitFacade


def select_findings(
    findings: Iterable[Finding],
    facade: CommitFacade,
    only_changed_files: bool,
) -> Iterator[Finding]:
    """Yield the new findings that belong to this commit.

    With ``only_changed_files`` set, findings on files the commit did not touch
    are dropped. Findings without a file, or on a non-file component, are
    always kept: there is nothing to check them against.
    """
    for finding in findings:
        if not finding.is_new:
            continue
        file = finding.file
        if not only_changed_files or file is None or not file.is_file or facade.has_file(file):
            yield finding


def inline_line(finding: Finding, facade: CommitFacade, try_inline: bool) -> int | None:
    """Return the line the finding can be commented on, or None when it cannot go inline."""
    if not try_inline:
        return None
    file = finding.file
    if file is None or not file.is_file or finding.line is None:
        return None
    if not facade.has_file_line(file, finding.line):
        return None
    return finding.line
