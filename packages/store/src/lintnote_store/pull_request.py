"""PullRequestStore: a GitHub pull request as comment-store and diff-source.

Conversation comments go through the issue-comment API; inline comments
through the review-comment API, pinned to the head commit of the pull request.
Every PyGithub failure is re-raised as CommentStoreError so the pipeline only
has one failure type to handle.
"""

from __future__ import annotations

import logging
from functools import cached_property

from github import Auth, Github, GithubException

from lintnote_core.errors import CommentStoreError
from lintnote_store.base import BaseCommentStore, BaseDiffSource
from lintnote_store.models import IssueCommentRecord, ReviewCommentRecord

logger = logging.getLogger(__name__)


def _review_record(comment) -> ReviewCommentRecord:
    return ReviewCommentRecord(
        id=comment.id,
        path=comment.path,
        body=comment.body or "",
        line=comment.line,
    )


def _file_diff(file) -> str:
    """Rebuild the unified diff section of one pull-request file from its patch."""
    old_path = file.previous_filename or file.filename
    lines = [f"diff --git a/{old_path} b/{file.filename}"]
    lines.append("--- /dev/null" if file.status == "added" else f"--- a/{old_path}")
    lines.append("+++ /dev/null" if file.status == "removed" else f"+++ b/{file.filename}")
    if file.patch:
        lines.append(file.patch)
    return "\n".join(lines)


class PullRequestStore(BaseCommentStore, BaseDiffSource):
    """Comments and diff of one GitHub pull request.

    ``repo_obj`` lets callers (and tests) hand in an already-resolved PyGithub
    repository instead of a token.
    """

    def __init__(self, repo: str, pr_number: int, token: str | None = None, per_page: int = 100, repo_obj=None):
        self._repo_name = repo
        self._pr_number = pr_number
        if repo_obj is None:
            try:
                repo_obj = Github(auth=Auth.Token(token), per_page=per_page).get_repo(repo)
            except GithubException as e:
                raise CommentStoreError(f"Could not open repository {repo}: {e}") from e
        self._repo = repo_obj

    def __repr__(self) -> str:
        return f"PullRequestStore({self._repo_name}#{self._pr_number})"

    @cached_property
    def pull(self):
        try:
            return self._repo.get_pull(self._pr_number)
        except GithubException as e:
            raise CommentStoreError(f"PR #{self._pr_number} not found in {self._repo_name}: {e}") from e

    @cached_property
    def head_commit(self):
        try:
            return self._repo.get_commit(self.pull.head.sha)
        except GithubException as e:
            raise CommentStoreError(f"Could not resolve head commit of PR #{self._pr_number}: {e}") from e

    # ------------------------------------------------------------------ #
    # Diff source                                                          #
    # ------------------------------------------------------------------ #

    def fetch_diff(self) -> str:
        try:
            files = list(self.pull.get_files())
        except GithubException as e:
            raise CommentStoreError(f"Failed to fetch the diff of PR #{self._pr_number}: {e}") from e
        logger.debug("Fetched %d changed file(s) for PR #%d", len(files), self._pr_number)
        return "\n".join(_file_diff(f) for f in files)

    # ------------------------------------------------------------------ #
    # Comment store                                                        #
    # ------------------------------------------------------------------ #

    def list_comments(self) -> list[IssueCommentRecord]:
        try:
            return [IssueCommentRecord(id=c.id, body=c.body or "") for c in self.pull.get_issue_comments()]
        except GithubException as e:
            raise CommentStoreError(f"Failed to list comments: {e}") from e

    def list_review_comments(self) -> list[ReviewCommentRecord]:
        try:
            return [_review_record(c) for c in self.pull.get_review_comments()]
        except GithubException as e:
            raise CommentStoreError(f"Failed to list review comments: {e}") from e

    def create_comment(self, body: str) -> IssueCommentRecord:
        try:
            comment = self.pull.create_issue_comment(body)
        except GithubException as e:
            raise CommentStoreError(f"Failed to create comment: {e}") from e
        return IssueCommentRecord(id=comment.id, body=comment.body or body)

    def create_review_comment(self, path: str, body: str, line: int) -> ReviewCommentRecord:
        try:
            comment = self.pull.create_review_comment(body, self.head_commit, path, line=line, side="RIGHT")
        except GithubException as e:
            raise CommentStoreError(f"Failed to add comment on {path}: {e}") from e
        return _review_record(comment)

    def delete_comment(self, comment_id: int) -> None:
        try:
            self.pull.get_issue_comment(comment_id).delete()
        except GithubException as e:
            raise CommentStoreError(f"Failed to delete comment {comment_id}: {e}") from e

    def delete_review_comment(self, comment_id: int) -> None:
        try:
            self.pull.get_comment(comment_id).delete()
        except GithubException as e:
            raise CommentStoreError(f"Failed to delete review comment {comment_id}: {e}") from e
