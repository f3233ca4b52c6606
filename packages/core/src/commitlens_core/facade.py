"""Abstract commit facade.

The publishing pipeline never talks to a code host directly. It asks the
facade whether a file or line belongs to the reviewed commit, how to link to a
component, and hands it finished comment bodies and statuses to write. The
GitHub implementation lives in commitlens_core.gh.commit; tests use mocks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from commitlens_core.models import FileRef


class CommitFacade(ABC):
    """Read access to the reviewed commit and write access to its comments and status.

    Write methods are upserts: calling one twice with the same arguments must
    not produce a second comment or status.
    """

    @abstractmethod
    def has_file(self, file: FileRef) -> bool:
        """Return True if the file was touched by the commit."""

    @abstractmethod
    def has_file_line(self, file: FileRef, line: int) -> bool:
        """Return True if the line is part of the commit's diff and can take a comment."""

    @abstractmethod
    def get_link(self, file: FileRef | None, line: int | None) -> str | None:
        """Return a browsable URL for the component, or None when none can be built."""

    @abstractmethod
    def create_or_update_review_comment(self, file: FileRef, line: int, body: str) -> None:
        """Post ``body`` as the inline comment for file+line."""

    @abstractmethod
    def create_or_update_global_comment(self, body: str) -> None:
        """Post ``body`` as the single summary comment of the commit."""

    @abstractmethod
    def create_or_update_status(self, status: str, description: str) -> None:
        """Set the commit status reported by the analysis."""
