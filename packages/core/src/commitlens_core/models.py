"""Value types shared across the publishing pipeline.

Findings arrive from the analysis engine and are never mutated afterwards, so
every type here is a frozen dataclass. FileRef compares by value: two refs to
the same path are the same annotation target regardless of where they were
created.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

BLOCKER = "BLOCKER"
CRITICAL = "CRITICAL"
MAJOR = "MAJOR"
MINOR = "MINOR"
INFO = "INFO"

# Most severe first.
SEVERITIES = (BLOCKER, CRITICAL, MAJOR, MINOR, INFO)

FAILED = "failed"
SUCCESS = "success"


class NotificationMode(Enum):
    COMMIT_STATUS = "commit-status"
    EXIT_CODE = "exit-code"


@dataclass(frozen=True)
class FileRef:
    """A component of the analysed commit.

    ``is_file`` is False for directory- or project-level components, which can
    carry findings but never an inline comment.
    """

    path: str
    is_file: bool = True


@dataclass(frozen=True)
class Finding:
    rule_key: str
    severity: str
    message: str
    file: FileRef | None = None
    line: int | None = None
    is_new: bool = True


@dataclass(frozen=True)
class Completed:
    """The run published everything it had to."""

    status: str
    description: str


@dataclass(frozen=True)
class Terminated:
    """Exit-code mode and the gate failed; the caller must exit non-zero."""

    message: str


@dataclass(frozen=True)
class Aborted:
    """An unexpected fault stopped the run; already logged and reported."""

    message: str


RunResult = Completed | Terminated | Aborted
