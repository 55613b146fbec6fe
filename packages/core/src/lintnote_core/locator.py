"""Split findings into those that can be anchored in the diff and those that can't."""

from __future__ import annotations

import logging
from typing import Sequence

from lintnote_core.diff.index import DiffIndex
from lintnote_core.models import Finding, LocatedFinding

logger = logging.getLogger(__name__)


def locate_findings(
    findings: Sequence[Finding],
    diff_text: str,
    index: DiffIndex | None = None,
) -> tuple[list[LocatedFinding], list[Finding]]:
    """Return (in-diff findings with their coordinate, out-of-diff findings).

    A finding is in the diff when its line was added by the diff; its
    coordinate is then that new-revision line. Both lists keep the input order.
    """
    if index is None:
        index = DiffIndex.from_diff(diff_text)

    located: list[LocatedFinding] = []
    outside: list[Finding] = []
    for finding in findings:
        if index.file_has_change(finding.path, finding.line):
            located.append(LocatedFinding(finding=finding, coordinate=finding.line))
        else:
            outside.append(finding)

    logger.debug("Located %d finding(s) in the diff, %d outside it", len(located), len(outside))
    return located, outside
