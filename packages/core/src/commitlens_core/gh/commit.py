"""GitHub implementation of the commit facade, on top of PyGithub."""

from __future__ import annotations

import logging

from github import Github
from rich.console import Console
from rich.markup import escape

from commitlens_core.facade import CommitFacade
from commitlens_core.models import FAILED, SUCCESS, FileRef
from commitlens_core.utils.diff import get_diff_positions

console = Console()
logger = logging.getLogger(__name__)

SUMMARY_MARKER = "<!-- commitlens-summary -->"

# GitHub rejects commit status descriptions longer than this.
_MAX_STATUS_DESCRIPTION = 140

_GITHUB_STATE = {FAILED: "failure", SUCCESS: "success"}


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def github_state(status: str) -> str:
    return _GITHUB_STATE.get(status, "error")


class GitHubCommitFacade(CommitFacade):
    """Reads the diff of one commit and writes commit comments and statuses on it.

    The commit, its patches and its existing comments are fetched once, when
    first needed; a facade is meant to serve a single run.
    """

    def __init__(self, repo, sha: str, config: dict):
        self._repo = repo
        self._sha = sha
        self._context = config.get("status_context", "commitlens")
        self._target_url = config.get("status_target_url")
        self._commit = None
        self._positions: dict[str, dict[int, int]] | None = None
        self._comments: list | None = None

    @property
    def commit(self):
        if self._commit is None:
            self._commit = self._repo.get_commit(self._sha)
        return self._commit

    def _file_positions(self) -> dict[str, dict[int, int]]:
        if self._positions is None:
            self._positions = {f.filename: get_diff_positions(f.patch or "") for f in self.commit.files}
            logger.debug("Commit %s touches %d file(s)", self._sha[:7], len(self._positions))
        return self._positions

    def _existing_comments(self) -> list:
        if self._comments is None:
            self._comments = list(self.commit.get_comments())
        return self._comments

    # ------------------------------------------------------------------ #
    # Queries                                                             #
    # ------------------------------------------------------------------ #

    def has_file(self, file: FileRef) -> bool:
        return file.path in self._file_positions()

    def has_file_line(self, file: FileRef, line: int) -> bool:
        return line in self._file_positions().get(file.path, {})

    def get_link(self, file: FileRef | None, line: int | None) -> str | None:
        base = self._repo.html_url
        if file is None or not file.is_file:
            return f"{base}/commit/{self._sha}"
        link = f"{base}/blob/{self._sha}/{file.path}"
        if line is not None:
            link += f"#L{line}"
        return link

    # ------------------------------------------------------------------ #
    # Writes                                                              #
    # ------------------------------------------------------------------ #

    def create_or_update_review_comment(self, file: FileRef, line: int, body: str) -> None:
        text = body.strip()
        position = self._file_positions()[file.path][line]
        for c in self._existing_comments():
            if c.path == file.path and c.position == position and c.body.strip() == text:
                logger.debug("Inline comment on %s:%d already posted", file.path, line)
                return
        comment = self.commit.create_comment(body, path=file.path, position=position)
        self._existing_comments().append(comment)

    def create_or_update_global_comment(self, body: str) -> None:
        full_body = f"{body}\n{SUMMARY_MARKER}"
        for c in self._existing_comments():
            if c.path is None and SUMMARY_MARKER in (c.body or ""):
                c.edit(full_body)
                return
        comment = self.commit.create_comment(full_body)
        self._existing_comments().append(comment)

    def create_or_update_status(self, status: str, description: str) -> None:
        if len(description) > _MAX_STATUS_DESCRIPTION:
            description = description[: _MAX_STATUS_DESCRIPTION - 3] + "..."
        kwargs = {"state": github_state(status), "description": description, "context": self._context}
        if self._target_url:
            kwargs["target_url"] = self._target_url
        self.commit.create_status(**kwargs)


class ShadowCommitFacade(GitHubCommitFacade):
    """Dry run: reads the commit from GitHub but prints comments and status instead of posting."""

    def create_or_update_review_comment(self, file: FileRef, line: int, body: str) -> None:
        console.print(f"[bold cyan]{escape(file.path)}[/bold cyan]  line [bold]{line}[/bold]")
        console.print(body, markup=False)

    def create_or_update_global_comment(self, body: str) -> None:
        console.print("[bold]Summary comment[/bold]")
        console.print(body, markup=False)

    def create_or_update_status(self, status: str, description: str) -> None:
        color = "red" if status == FAILED else "green"
        console.print(f"Commit status: [{color}]{github_state(status)}[/{color}]  {escape(description)}")
