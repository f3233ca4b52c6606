"""Tests for the publishing pipeline: comments, summary, status and failure handling."""

from unittest.mock import MagicMock

import pytest

from commitlens_core.config import DEFAULT_CONFIG
from commitlens_core.models import BLOCKER, MAJOR, Aborted, Completed, FileRef, Finding, Terminated
from commitlens_core.publisher import FAILURE_PREAMBLE, publish_findings, publish_inline_comments
from commitlens_core.aggregator import CommentTable

A = FileRef("src/a.py")
B = FileRef("src/b.py")


def make_finding(rule="R1", severity=MAJOR, file=A, line=10, is_new=True):
    return Finding(rule_key=rule, severity=severity, message=f"message {rule}", file=file, line=line, is_new=is_new)


def make_facade(changed_lines=((A, 10), (B, 2))):
    facade = MagicMock()
    facade.has_file.side_effect = lambda f: any(f == file for file, _ in changed_lines)
    facade.has_file_line.side_effect = lambda f, line: (f, line) in changed_lines
    facade.get_link.return_value = "https://example.test/link"
    return facade


def _config(**overrides):
    return {**DEFAULT_CONFIG, **overrides}


class TestPublishInlineComments:
    def test_posts_each_entry(self):
        table = CommentTable()
        table.append(B, 2, "b")
        table.append(A, 10, "a")
        facade = MagicMock()
        assert publish_inline_comments(table, facade) == 2
        assert [c.args for c in facade.create_or_update_review_comment.call_args_list] == [
            (A, 10, "a\n"),
            (B, 2, "b\n"),
        ]


class TestCommitStatusMode:
    def test_inline_summary_and_status_in_order(self):
        facade = make_facade()
        result = publish_findings([make_finding(), make_finding(rule="R2", line=99)], _config(), facade)

        names = [name for name, _, _ in facade.method_calls if name.startswith("create_or_update")]
        assert names == [
            "create_or_update_review_comment",
            "create_or_update_global_comment",
            "create_or_update_status",
        ]
        assert result == Completed(status="success", description="Static analysis reported 2 issues, with 2 major")
        facade.create_or_update_status.assert_called_once_with(
            "success", "Static analysis reported 2 issues, with 2 major"
        )

    def test_no_findings_no_summary_comment(self):
        facade = make_facade()
        result = publish_findings([], _config(comment_no_issue=False, disable_global_comment=False), facade)

        facade.create_or_update_global_comment.assert_not_called()
        facade.create_or_update_review_comment.assert_not_called()
        facade.create_or_update_status.assert_called_once_with("success", "Static analysis reported no issues")
        assert isinstance(result, Completed)

    def test_comment_no_issue_forces_summary(self):
        facade = make_facade()
        publish_findings([], _config(comment_no_issue=True), facade)
        facade.create_or_update_global_comment.assert_called_once_with("Static analysis reported no issues.")

    def test_disable_global_comment(self):
        facade = make_facade()
        publish_findings([make_finding()], _config(disable_global_comment=True, comment_no_issue=True), facade)
        facade.create_or_update_global_comment.assert_not_called()
        facade.create_or_update_review_comment.assert_called_once()

    def test_old_findings_not_published(self):
        facade = make_facade()
        publish_findings([make_finding(is_new=False)], _config(), facade)
        facade.create_or_update_review_comment.assert_not_called()
        facade.create_or_update_global_comment.assert_not_called()

    def test_merged_body_for_shared_line(self):
        facade = make_facade()
        publish_findings([make_finding(rule="R2"), make_finding(rule="R1")], _config(), facade)

        facade.create_or_update_review_comment.assert_called_once()
        file, line, body = facade.create_or_update_review_comment.call_args.args
        assert (file, line) == (A, 10)
        assert body == ":warning: message R1 `R1`\n:warning: message R2 `R2`\n"

    def test_failed_gate_reported_as_status(self):
        facade = make_facade()
        result = publish_findings([make_finding(severity=BLOCKER)], _config(), facade)
        assert result.status == "failed"
        assert facade.create_or_update_status.call_args.args[0] == "failed"


class TestExitCodeMode:
    def test_failed_status_terminates_without_status_call(self):
        facade = make_facade()
        result = publish_findings(
            [make_finding(severity=BLOCKER)], _config(status_notifications_mode="exit-code"), facade
        )

        assert result == Terminated(
            "Report status=failed, desc=Static analysis reported 1 issue, with 1 blocker (fail)"
        )
        facade.create_or_update_status.assert_not_called()
        facade.create_or_update_review_comment.assert_called_once()

    def test_success_completes_without_status_call(self):
        facade = make_facade()
        result = publish_findings([make_finding()], _config(status_notifications_mode="exit-code"), facade)
        assert isinstance(result, Completed)
        facade.create_or_update_status.assert_not_called()

    def test_fault_is_logged_but_not_posted(self):
        facade = make_facade()
        facade.create_or_update_review_comment.side_effect = RuntimeError("boom")
        result = publish_findings([make_finding()], _config(status_notifications_mode="exit-code"), facade)
        assert isinstance(result, Aborted)
        facade.create_or_update_status.assert_not_called()


class TestFailureHandling:
    def test_fault_during_aggregation_reports_one_failed_status(self):
        facade = make_facade()
        facade.get_link.side_effect = RuntimeError("link service down")

        result = publish_findings([make_finding()], _config(), facade)

        expected = f"{FAILURE_PREAMBLE}: link service down"
        facade.create_or_update_status.assert_called_once_with("failed", expected)
        facade.create_or_update_review_comment.assert_not_called()
        facade.create_or_update_global_comment.assert_not_called()
        assert result == Aborted(expected)

    def test_fault_during_summary_stops_before_status(self):
        facade = make_facade()
        facade.create_or_update_global_comment.side_effect = RuntimeError("422")

        publish_findings([make_finding()], _config(), facade)

        facade.create_or_update_status.assert_called_once_with("failed", f"{FAILURE_PREAMBLE}: 422")

    def test_fault_is_logged(self, caplog):
        facade = make_facade()
        facade.create_or_update_review_comment.side_effect = RuntimeError("boom")
        with caplog.at_level("ERROR"):
            publish_findings([make_finding()], _config(), facade)
        assert FAILURE_PREAMBLE in caplog.text

    def test_failing_failure_status_not_raised(self):
        facade = make_facade()
        facade.create_or_update_review_comment.side_effect = RuntimeError("boom")
        facade.create_or_update_status.side_effect = RuntimeError("still down")

        result = publish_findings([make_finding()], _config(), facade)

        assert isinstance(result, Aborted)
        facade.create_or_update_status.assert_called_once()

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValueError, match="status_notifications_mode"):
            publish_findings([], _config(status_notifications_mode="email"), make_facade())
