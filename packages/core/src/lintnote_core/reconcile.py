"""Diff the desired review comments against what is already posted."""

from __future__ import annotations

from typing import Sequence

from lintnote_core.models import Comment, ReconcilePlan, RemoteComment


def comments_match(desired: Comment, remote: RemoteComment) -> bool:
    """Structural equality: same file, same coordinate, same body. Ids are ignored."""
    return desired.path == remote.path and desired.coordinate == remote.coordinate and desired.body == remote.body


def reconcile(desired: Sequence[Comment], remote: Sequence[RemoteComment]) -> ReconcilePlan:
    """Compute the creates and deletes that make ``remote`` equal to ``desired``.

    There is no update: a comment whose body changed is deleted and re-created.
    """
    to_add = [d for d in desired if not any(comments_match(d, r) for r in remote)]
    to_delete = [r for r in remote if not any(comments_match(d, r) for d in desired)]
    return ReconcilePlan(to_add=to_add, to_delete=to_delete)
