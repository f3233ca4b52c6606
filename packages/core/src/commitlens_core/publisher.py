"""Publish a run's findings on the reviewed commit.

    aggregate() → inline comments → summary comment → commit status / exit signal

The order of the three writes matters: the summary and the status are derived
from the report after every finding has been processed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable

from rich.console import Console

from commitlens_core.aggregator import CommentTable, aggregate
from commitlens_core.config import notification_mode
from commitlens_core.markdown import MarkdownRenderer
from commitlens_core.models import FAILED, Aborted, Completed, Finding, NotificationMode, RunResult, Terminated
from commitlens_core.ordering import finding_sort_key
from commitlens_core.report import GlobalReport

if TYPE_CHECKING:
    from commitlens_core.facade import CommitFacade

console = Console()
logger = logging.getLogger(__name__)

FAILURE_PREAMBLE = "Static analysis failed to complete the review of this commit"


def publish_inline_comments(table: CommentTable, facade: CommitFacade) -> int:
    """Post one inline comment per table entry; returns how many were posted."""
    posted = 0
    for file, line, body in table:
        if not body:
            continue
        facade.create_or_update_review_comment(file, line, body)
        posted += 1
    return posted


def _report_failure(facade: CommitFacade, description: str) -> None:
    try:
        facade.create_or_update_status(FAILED, description)
    except Exception as e:
        logger.warning("Could not report the failure as a commit status (%s): %s", type(e).__name__, e)


def publish_findings(
    findings: Iterable[Finding],
    config: dict,
    facade: CommitFacade,
    markdown: MarkdownRenderer | None = None,
    order: Callable[[Finding], object] = finding_sort_key,
) -> RunResult:
    """Run the whole publishing pipeline for one commit.

    Returns Terminated when the quality gate failed in exit-code mode (the
    caller decides how to exit), Aborted when an unexpected error stopped the
    run, and Completed otherwise. Errors are not raised: they are logged and,
    in commit-status mode, reported as a failed status.
    """
    mode = notification_mode(config)
    markdown = markdown or MarkdownRenderer.from_config(config)
    report = GlobalReport(config, markdown)

    try:
        table = aggregate(findings, report, facade, markdown, config, order=order)

        posted = publish_inline_comments(table, facade)
        if posted:
            console.print(f"  {posted} inline comment(s) published.")

        if not config.get("disable_global_comment", False) and (
            report.has_new_issue() or config.get("comment_no_issue", False)
        ):
            facade.create_or_update_global_comment(report.format_for_markdown())
            console.print("  Summary comment published.")

        status = report.status()
        description = report.status_description()
        message = f"Report status={status}, desc={description}"

        if mode is NotificationMode.COMMIT_STATUS:
            logger.info(message)
            facade.create_or_update_status(status, description)
        elif mode is NotificationMode.EXIT_CODE:
            if status == FAILED:
                return Terminated(message)
            logger.info(message)

        return Completed(status=status, description=description)
    except Exception as e:
        logger.exception(FAILURE_PREAMBLE)
        message = f"{FAILURE_PREAMBLE}: {e}"
        # Exit-code mode posts nothing here; the error is only logged.
        if mode is NotificationMode.COMMIT_STATUS:
            _report_failure(facade, message)
        return Aborted(message)
