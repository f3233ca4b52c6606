"""publish command: post analysis findings on a GitHub commit."""

from __future__ import annotations

import click
from github import GithubException
from rich.console import Console
from rich.markup import escape

from commitlens_core.config import load_config, notification_mode
from commitlens_core.findings import load_findings
from commitlens_core.gh.commit import GitHubCommitFacade, ShadowCommitFacade, get_repo
from commitlens_core.models import Aborted, NotificationMode, Terminated
from commitlens_core.publisher import publish_findings
from commitlens_cli.auth import resolve_github_token

console = Console()


@click.command("publish")
@click.option("--repo", required=True, help="GitHub repository in owner/name format.")
@click.option("--sha", required=True, help="SHA of the analysed commit.")
@click.option(
    "--findings",
    "findings_path",
    required=True,
    type=click.Path(dir_okay=False),
    help="JSON file with the analysis findings.",
)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in NotificationMode]),
    default=None,
    help="How the result is reported: a commit status, or the process exit code. Overrides config file.",
)
@click.option(
    "--only-changed-files/--all-files",
    "only_changed_files",
    default=None,
    help="Drop findings on files the commit did not touch. Overrides config file.",
)
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print comments and status without posting to GitHub.",
)
@click.pass_context
def publish_cmd(
    ctx,
    repo: str,
    sha: str,
    findings_path: str,
    mode: str | None,
    only_changed_files: bool | None,
    shadow: bool,
):
    """Publish static-analysis findings on a GitHub commit.

    Findings on lines changed by the commit become inline commit comments;
    the rest are listed in one summary comment. The result is reported as a
    commit status, or with --mode exit-code as the exit code of this command.

    \b
    Required environment variables:
      GITHUB_TOKEN   GitHub token with repo:status scope (or use gh CLI)
    """
    config_path = ctx.obj.get("config_path", ".commitlens.yml") if ctx.obj else ".commitlens.yml"
    try:
        config = load_config(
            config_path,
            cli_overrides={
                "status_notifications_mode": mode,
                "only_issue_from_commit_file": only_changed_files,
            },
        )
        notification_mode(config)
    except ValueError as e:
        raise click.UsageError(str(e))

    token = resolve_github_token()
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    config["github_token"] = token

    try:
        findings = load_findings(findings_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.UsageError(str(e))

    console.print(f"Publishing {len(findings)} finding(s) on {repo}@{sha[:7]}")

    try:
        this_repo = get_repo(repo, token=token)
    except GithubException as e:
        raise click.ClickException(f"Could not open repository {repo}: {e}")
    facade_cls = ShadowCommitFacade if shadow else GitHubCommitFacade
    facade = facade_cls(this_repo, sha, config)

    result = publish_findings(findings, config, facade)

    if isinstance(result, Terminated):
        raise click.ClickException(result.message)
    if isinstance(result, Aborted):
        console.print(f"[red]{escape(result.message)}[/red]")
        return
    console.print(f"[green]Report status: {result.status}[/green] ({result.description})")
