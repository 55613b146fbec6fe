"""Core commenter pipeline: findings in, pull-request comments reconciled."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from rich.console import Console
from rich.markup import escape

from lintnote_core.comments import (
    MAX_ISSUES_MARKER,
    OUTSIDE_DIFF_MARKER,
    REVIEW_MARKER,
    build_review_comments,
    render_max_issues_summary,
    render_outside_diff_summary,
)
from lintnote_core.config import validate_config
from lintnote_core.diff.index import DiffIndex
from lintnote_core.errors import CommentStoreError
from lintnote_core.locator import locate_findings
from lintnote_core.models import Finding, ReconcilePlan, RemoteComment
from lintnote_core.reconcile import reconcile

if TYPE_CHECKING:
    from lintnote_store.base import BaseCommentStore, BaseDiffSource

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """What a run did. ``exceeded`` means the issue ceiling short-circuited it."""

    total_findings: int
    max_issues: int
    exceeded: bool = False
    located: int = 0
    outside_diff: int = 0
    added: int = 0
    deleted: int = 0
    failures: list[str] = field(default_factory=list)
    plan: ReconcilePlan | None = None

    @property
    def ok(self) -> bool:
        return not self.exceeded and not self.failures


def to_remote_comments(records) -> list[RemoteComment]:
    """Keep only review comments this tool posted, addressed by new-revision line.

    A comment on an outdated line has no line and can never match a desired one.
    """
    return [
        RemoteComment(id=r.id, path=r.path, coordinate=r.line, body=r.body)
        for r in records
        if REVIEW_MARKER in (r.body or "")
    ]


def delete_marked_comments(store: BaseCommentStore, marker: str, summary: RunSummary, strict: bool = False) -> int:
    """Delete every conversation comment carrying ``marker``; return how many went.

    Listing failures always propagate. Deletion failures propagate when
    ``strict`` and are recorded in the summary otherwise.
    """
    deleted = 0
    for comment in store.list_comments():
        if marker not in comment.body:
            continue
        try:
            store.delete_comment(comment.id)
            deleted += 1
        except CommentStoreError as e:
            if strict:
                raise
            logger.error("%s", e)
            summary.failures.append(str(e))
    return deleted


def apply_plan(store: BaseCommentStore, plan: ReconcilePlan, summary: RunSummary) -> None:
    """Create then delete, one comment at a time; a failing comment doesn't stop the rest."""
    for comment in plan.to_add:
        try:
            store.create_review_comment(comment.path, comment.body, comment.coordinate)
            summary.added += 1
        except CommentStoreError as e:
            logger.error("%s", e)
            summary.failures.append(str(e))

    for remote in plan.to_delete:
        try:
            store.delete_review_comment(remote.id)
            summary.deleted += 1
        except CommentStoreError as e:
            logger.error("%s", e)
            summary.failures.append(str(e))


def print_plan(plan: ReconcilePlan, outside_body: str | None) -> None:
    """Print what a run would change without touching the pull request."""
    console.print(f"\n[bold]Shadow run — {len(plan.to_add)} to add, {len(plan.to_delete)} to delete[/bold]\n")
    for c in plan.to_add:
        console.print(f"  [green]+[/green] [bold cyan]{escape(c.path)}[/bold cyan]:{c.coordinate}")
        console.print(f"    {c.body}", markup=False, highlight=False)
    for r in plan.to_delete:
        console.print(f"  [red]-[/red] [bold cyan]{escape(r.path)}[/bold cyan]:{r.coordinate}  (id {r.id})")
    if outside_body:
        console.print("\n[bold]Outside-diff summary:[/bold]")
        console.print(outside_body, markup=False, highlight=False)


def run_commenter(
    findings: Sequence[Finding],
    store: BaseCommentStore,
    diff_source: BaseDiffSource,
    config: dict,
    shadow: bool = False,
) -> RunSummary:
    """Reconcile the pull request's comments with ``findings``.

    Failures while reading remote state abort the run by raising
    CommentStoreError; failures on individual comments are collected in the
    returned summary.
    """
    validate_config(config)
    max_issues = config["max_issues"]
    summary = RunSummary(total_findings=len(findings), max_issues=max_issues)

    # A stale "too many issues" notice must never outlive the condition.
    if not shadow:
        removed = delete_marked_comments(store, MAX_ISSUES_MARKER, summary, strict=True)
        logger.debug("Removed %d previous max-issues summary comment(s)", removed)

    if len(findings) > max_issues:
        summary.exceeded = True
        body = render_max_issues_summary(len(findings), max_issues)
        console.print(f"[red]Number of issues exceeds maximum: {len(findings)} > {max_issues}[/red]")
        if shadow:
            console.print(body, markup=False, highlight=False)
        else:
            try:
                store.create_comment(body)
            except CommentStoreError as e:
                logger.error("%s", e)
                summary.failures.append(str(e))
        return summary

    diff_text = diff_source.fetch_diff()
    index = DiffIndex.from_diff(diff_text)
    logger.debug("Diff touches %d file(s)", len(index))
    located, outside = locate_findings(findings, diff_text, index=index)
    summary.located = len(located)
    summary.outside_diff = len(outside)
    console.print(f"{len(located)} finding(s) in the diff, {len(outside)} outside it.")

    desired = build_review_comments(located)
    remote = to_remote_comments(store.list_review_comments())
    plan = reconcile(desired, remote)
    summary.plan = plan
    outside_body = render_outside_diff_summary(outside)

    if shadow:
        print_plan(plan, outside_body)
        return summary

    delete_marked_comments(store, OUTSIDE_DIFF_MARKER, summary)
    if outside_body:
        try:
            store.create_comment(outside_body)
        except CommentStoreError as e:
            logger.error("%s", e)
            summary.failures.append(str(e))

    apply_plan(store, plan, summary)
    console.print(
        f"[green]Comments reconciled: {summary.added} added, {summary.deleted} deleted"
        + (f", {len(summary.failures)} failed" if summary.failures else "")
        + ".[/green]"
    )
    return summary
