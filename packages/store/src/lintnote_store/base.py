"""Abstract comment-store and diff-source interfaces.

The pipeline depends on these interfaces, not on GitHub, so the same run can
target the GitHub API, an in-memory store in tests, or any other backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lintnote_store.models import IssueCommentRecord, ReviewCommentRecord


class BaseDiffSource(ABC):
    @abstractmethod
    def fetch_diff(self) -> str:
        """Return the unified diff of the whole pull request (``a/`` and ``b/`` prefixed paths)."""


class BaseCommentStore(ABC):
    """List, create and delete pull-request comments.

    Every method may raise CommentStoreError. There is no update primitive:
    callers replace a comment by deleting it and creating a new one.
    """

    @abstractmethod
    def list_comments(self) -> list[IssueCommentRecord]:
        """Return the conversation-level comments of the pull request."""

    @abstractmethod
    def list_review_comments(self) -> list[ReviewCommentRecord]:
        """Return the inline review comments of the pull request."""

    @abstractmethod
    def create_comment(self, body: str) -> IssueCommentRecord: ...

    @abstractmethod
    def create_review_comment(self, path: str, body: str, line: int) -> ReviewCommentRecord:
        """Create an inline comment on new-revision ``line`` of ``path``."""

    @abstractmethod
    def delete_comment(self, comment_id: int) -> None: ...

    @abstractmethod
    def delete_review_comment(self, comment_id: int) -> None: ...

    def close(self) -> None:
        """Release any resources held by the store.

        Default is a no-op so callers can always call close() safely.
        """
