"""GitHub token resolution for the CLI.

Resolution order (stops at first success):
  1. COMMITLENS_GITHUB_TOKEN, for a token scoped to commit statuses only
  2. GITHUB_TOKEN (injected by GitHub Actions)
  3. `gh auth token` (the GitHub CLI session of a local developer)
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

TOKEN_ENV_VARS = ("COMMITLENS_GITHUB_TOKEN", "GITHUB_TOKEN")


def _token_from_gh_cli() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        logger.debug("gh CLI unavailable; no token from it.")
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def resolve_github_token() -> str | None:
    """Return a GitHub token or None; callers turn None into a UsageError."""
    for name in TOKEN_ENV_VARS:
        token = os.environ.get(name)
        if token:
            logger.debug("Using GitHub token from %s.", name)
            return token
    return _token_from_gh_cli()
