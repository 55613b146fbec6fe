"""Tests for comment body rendering."""

import pytest

from lintnote_core.comments import (
    MAX_ISSUES_MARKER,
    OUTSIDE_DIFF_MARKER,
    REVIEW_MARKER,
    SEVERITY_ICONS,
    build_review_comments,
    render_max_issues_summary,
    render_outside_diff_summary,
    render_review_body,
)
from lintnote_core.models import Comment, Finding, LocatedFinding


def _located(line, message, severity="warning", path="lib/main.dart"):
    return LocatedFinding(Finding(severity, message, path, line, 1), line)


class TestRenderReviewBody:
    def test_single_row(self):
        body = render_review_body([Finding("warning", "unused_import", "lib/main.dart", 10, 3)])
        assert body == "<table><tr><td>⚠️</td><td>unused_import</td></tr></table>" + REVIEW_MARKER

    def test_rows_in_order_with_icons(self):
        body = render_review_body(
            [Finding("error", "first", "a.dart", 1, 1), Finding("info", "second", "a.dart", 1, 5)]
        )
        assert body.index("❌") < body.index("ℹ️")
        assert body.index("first") < body.index("second")
        assert body.count("<tr>") == 2

    def test_message_is_html_escaped(self):
        body = render_review_body([Finding("info", "Use List<int> & Map", "a.dart", 1, 1)])
        assert "List&lt;int&gt; &amp; Map" in body

    def test_custom_icons(self):
        body = render_review_body([Finding("error", "x", "a.dart", 1, 1)], icons={"error": "E"})
        assert "<td>E</td>" in body

    def test_icon_table_is_immutable(self):
        with pytest.raises(TypeError):
            SEVERITY_ICONS["info"] = "i"


class TestBuildReviewComments:
    def test_groups_by_path_and_line(self):
        located = [
            _located(10, "first"),
            _located(12, "other line"),
            _located(10, "second", severity="error"),
            _located(10, "other file", path="lib/b.dart"),
        ]
        comments = build_review_comments(located)
        assert [(c.path, c.coordinate) for c in comments] == [
            ("lib/main.dart", 10),
            ("lib/main.dart", 12),
            ("lib/b.dart", 10),
        ]
        grouped = comments[0].body
        assert grouped.count("<tr>") == 2
        assert grouped.index("first") < grouped.index("second")

    def test_single_finding_gets_single_row(self):
        (comment,) = build_review_comments([_located(10, "only")])
        assert comment.body.count("<tr>") == 1

    def test_message_change_changes_body(self):
        a = build_review_comments([_located(10, "unused_import")])
        b = build_review_comments([_located(10, "unused_imports")])
        assert a[0].body != b[0].body

    def test_empty(self):
        assert build_review_comments([]) == []

    def test_returns_comment_records(self):
        (comment,) = build_review_comments([_located(3, "x")])
        assert isinstance(comment, Comment)


class TestSummaries:
    def test_outside_diff_summary_none_when_empty(self):
        assert render_outside_diff_summary([]) is None

    def test_outside_diff_summary_table(self):
        body = render_outside_diff_summary(
            [Finding("error", "broken", "lib/a.dart", 3, 1), Finding("info", "style", "lib/b.dart", 9, 2)]
        )
        assert body.endswith(OUTSIDE_DIFF_MARKER)
        assert "<th>Severity</th><th>File</th><th>Line</th><th>Message</th>" in body
        assert "<tr><td>❌</td><td>lib/a.dart</td><td>3</td><td>broken</td></tr>" in body
        assert "Found 2 issue(s)" in body

    def test_max_issues_summary(self):
        body = render_max_issues_summary(15, 10)
        assert "15" in body and "10" in body
        assert body.endswith(MAX_ISSUES_MARKER)

    def test_markers_are_distinct(self):
        markers = [REVIEW_MARKER, OUTSIDE_DIFF_MARKER, MAX_ISSUES_MARKER]
        for marker in markers:
            assert sum(marker in other for other in markers) == 1
