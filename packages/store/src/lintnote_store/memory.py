"""In-process comment-store for offline runs and tests.

Holds comments in plain lists and hands out sequential ids, so a pipeline run
against it behaves like a run against a real pull request, minus the network.
Failures can be injected per comment id or per path to exercise partial
application.
"""

from __future__ import annotations

import itertools
from typing import Iterable

from lintnote_core.errors import CommentStoreError
from lintnote_store.base import BaseCommentStore, BaseDiffSource
from lintnote_store.models import IssueCommentRecord, ReviewCommentRecord


class MemoryStore(BaseCommentStore, BaseDiffSource):
    def __init__(
        self,
        diff: str = "",
        comments: Iterable[IssueCommentRecord] = (),
        review_comments: Iterable[ReviewCommentRecord] = (),
        failing_paths: Iterable[str] = (),
        failing_ids: Iterable[int] = (),
    ):
        self.diff = diff
        self.comments = list(comments)
        self.review_comments = list(review_comments)
        self.failing_paths = set(failing_paths)
        self.failing_ids = set(failing_ids)
        self.diff_fetches = 0
        existing = [c.id for c in self.comments] + [c.id for c in self.review_comments]
        self._ids = itertools.count(max(existing, default=0) + 1)

    def fetch_diff(self) -> str:
        self.diff_fetches += 1
        return self.diff

    def list_comments(self) -> list[IssueCommentRecord]:
        return list(self.comments)

    def list_review_comments(self) -> list[ReviewCommentRecord]:
        return list(self.review_comments)

    def create_comment(self, body: str) -> IssueCommentRecord:
        record = IssueCommentRecord(id=next(self._ids), body=body)
        self.comments.append(record)
        return record

    def create_review_comment(self, path: str, body: str, line: int) -> ReviewCommentRecord:
        if path in self.failing_paths:
            raise CommentStoreError(f"Failed to add comment on {path}")
        record = ReviewCommentRecord(
            id=next(self._ids),
            path=path,
            body=body,
            line=line,
        )
        self.review_comments.append(record)
        return record

    def delete_comment(self, comment_id: int) -> None:
        self.comments = self._remove(self.comments, comment_id)

    def delete_review_comment(self, comment_id: int) -> None:
        self.review_comments = self._remove(self.review_comments, comment_id)

    def _remove(self, records: list, comment_id: int) -> list:
        if comment_id in self.failing_ids:
            raise CommentStoreError(f"Failed to delete comment {comment_id}")
        remaining = [r for r in records if r.id != comment_id]
        if len(remaining) == len(records):
            raise CommentStoreError(f"Comment {comment_id} not found")
        return remaining
