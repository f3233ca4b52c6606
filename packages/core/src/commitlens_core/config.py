import os
from pathlib import Path
from typing import Optional

import yaml

from commitlens_core.models import NotificationMode

DEFAULT_CONFIG: dict = {
    "only_issue_from_commit_file": False,  # drop findings on files the commit did not touch
    "try_report_issues_inline": True,
    "disable_global_comment": False,
    "comment_no_issue": False,  # post the summary comment even when nothing was found
    "status_notifications_mode": NotificationMode.COMMIT_STATUS.value,
    "max_global_issues": 10,  # findings listed in the summary comment; the rest are counted
    # Quality gates: the run fails when more new findings than this exist. -1 disables a gate.
    "max_blocker_issues_gate": 0,
    "max_critical_issues_gate": 0,
    "max_major_issues_gate": -1,
    "max_minor_issues_gate": -1,
    "max_info_issues_gate": -1,
    "status_context": "commitlens",
    "status_target_url": None,
    "rules_url": None,  # base URL for rule documentation links, e.g. the SonarQube server
}


def load_config(config_path: str = ".commitlens.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .commitlens.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ValueError(f"{config_path} must contain a mapping, got {type(file_config).__name__}.")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config


def notification_mode(config: dict) -> NotificationMode:
    """Parse ``status_notifications_mode``; raises ValueError for unknown modes."""
    raw = config.get("status_notifications_mode", NotificationMode.COMMIT_STATUS.value)
    try:
        return NotificationMode(raw)
    except ValueError:
        choices = ", ".join(repr(m.value) for m in NotificationMode)
        raise ValueError(f"Unknown status_notifications_mode: {raw!r}. Choose {choices}.")
