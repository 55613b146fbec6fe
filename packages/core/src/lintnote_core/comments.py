"""Render findings into comment bodies.

Every body is an HTML table followed by an HTML comment marker. The marker is
how a later run recognises its own comments, so it must never change for an
existing category.
"""

from __future__ import annotations

import html
from types import MappingProxyType
from typing import Mapping, Sequence

from lintnote_core.models import Comment, Finding, LocatedFinding

REVIEW_MARKER = "<!-- lintnote: review -->"
OUTSIDE_DIFF_MARKER = "<!-- lintnote: outside-diff -->"
MAX_ISSUES_MARKER = "<!-- lintnote: max-issues -->"

SEVERITY_ICONS: Mapping[str, str] = MappingProxyType(
    {
        "info": "ℹ️",
        "warning": "⚠️",
        "error": "❌",
    }
)


def _cell(text) -> str:
    return f"<td>{html.escape(str(text), quote=False)}</td>"


def render_review_body(findings: Sequence[Finding], icons: Mapping[str, str] = SEVERITY_ICONS) -> str:
    """One table row per finding: severity glyph, message."""
    rows = "".join(f"<tr><td>{icons[f.severity]}</td>{_cell(f.message)}</tr>" for f in findings)
    return f"<table>{rows}</table>{REVIEW_MARKER}"


def build_review_comments(
    located: Sequence[LocatedFinding],
    icons: Mapping[str, str] = SEVERITY_ICONS,
) -> list[Comment]:
    """Build the desired review comments for located findings.

    Every finding sharing (path, line) goes into one comment, in order of
    first appearance.
    """
    groups: dict[tuple[str, int], list[Finding]] = {}
    for lf in located:
        groups.setdefault((lf.path, lf.coordinate), []).append(lf.finding)
    return [
        Comment(path=path, coordinate=coordinate, body=render_review_body(findings, icons))
        for (path, coordinate), findings in groups.items()
    ]


def render_outside_diff_summary(
    findings: Sequence[Finding], icons: Mapping[str, str] = SEVERITY_ICONS
) -> str | None:
    """Summary of findings on lines this pull request didn't touch, or None if there are none."""
    if not findings:
        return None
    header = "<tr><th>Severity</th><th>File</th><th>Line</th><th>Message</th></tr>"
    rows = "".join(
        f"<tr><td>{icons[f.severity]}</td>{_cell(f.path)}{_cell(f.line)}{_cell(f.message)}</tr>" for f in findings
    )
    return (
        f"Found {len(findings)} issue(s) outside the lines changed by this pull request.\n\n"
        f"<table>{header}{rows}</table>{OUTSIDE_DIFF_MARKER}"
    )


def render_max_issues_summary(total: int, max_issues: int) -> str:
    return (
        f"lintnote found {total} issues, which exceeds the maximum of {max_issues}. "
        f"No line comments were posted.\n{MAX_ISSUES_MARKER}"
    )
