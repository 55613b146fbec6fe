"""Records returned by comment-stores.

Kept free of lintnote_core types so a store only speaks in the hosting
platform's terms; the pipeline maps them to its own comment records.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IssueCommentRecord:
    """A conversation-level comment on the pull request."""

    id: int
    body: str


@dataclass(frozen=True)
class ReviewCommentRecord:
    """An inline review comment anchored to a file in the diff."""

    id: int
    path: str
    body: str
    line: int | None = None  # None once the commented line is outdated
