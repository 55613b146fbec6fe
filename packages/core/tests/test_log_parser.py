"""Tests for analyzer log parsing."""

import json

import pytest

from lintnote_core.errors import LogReadError
from lintnote_core.log_parser import (
    collect_findings,
    load_findings,
    normalize_path,
    parse_log,
    parse_structured_log,
    parse_text_log,
    read_log,
)
from lintnote_core.models import Finding

TEXT_LOG = """\
Analyzing app...
[warning] Unused import: 'package:flutter/material.dart' (/home/runner/work/app/lib/main.dart:10:3)
[info] Prefer const constructors (/home/runner/work/app/lib/widgets/card.dart:22:14)
   not a finding line
[error] Undefined name 'foo' (/home/runner/work/app/test/foo_test.dart:5:1)
3 issues found.
"""

WORKSPACE = "/home/runner/work/app"


def _json_report(*diagnostics):
    return json.dumps({"version": 1, "diagnostics": list(diagnostics)})


def _diagnostic(severity="WARNING", message="Unused import", file=f"{WORKSPACE}/lib/main.dart", line=10, column=3):
    return {
        "code": "unused_import",
        "severity": severity,
        "type": "STATIC_WARNING",
        "location": {
            "file": file,
            "range": {"start": {"offset": 120, "line": line, "column": column}, "end": {"line": line, "column": 40}},
        },
        "problemMessage": message,
    }


class TestNormalizePath:
    def test_strips_working_dir_and_leading_slash(self):
        assert normalize_path("/home/runner/work/app/lib/main.dart", WORKSPACE) == "lib/main.dart"

    def test_working_dir_with_trailing_slash(self):
        assert normalize_path("/home/runner/work/app/lib/main.dart", WORKSPACE + "/") == "lib/main.dart"

    def test_backslashes_become_forward_slashes(self):
        assert normalize_path("C:\\work\\app\\lib\\main.dart", "C:\\work\\app") == "lib/main.dart"

    def test_relative_path_untouched(self):
        assert normalize_path("lib/main.dart", WORKSPACE) == "lib/main.dart"

    def test_leading_slash_stripped_without_working_dir(self):
        assert normalize_path("/lib/main.dart") == "lib/main.dart"

    def test_similar_prefix_not_stripped(self):
        # "/home/runner/work/app2" is a sibling directory, not inside the workspace.
        assert normalize_path("/home/runner/work/app2/lib/a.dart", WORKSPACE) == "home/runner/work/app2/lib/a.dart"


class TestParseTextLog:
    def test_extracts_all_findings_in_order(self):
        findings = parse_text_log(TEXT_LOG, WORKSPACE)
        assert [f.severity for f in findings] == ["warning", "info", "error"]
        assert findings[0] == Finding(
            severity="warning",
            message="Unused import: 'package:flutter/material.dart'",
            path="lib/main.dart",
            line=10,
            column=3,
        )
        assert findings[2].path == "test/foo_test.dart"

    def test_unmatched_lines_ignored(self):
        assert parse_text_log("Analyzing...\nNo issues found!\n") == []

    def test_unknown_severity_ignored(self):
        assert parse_text_log("[hint] Something (lib/a.dart:1:1)") == []

    def test_scenario_relative_path(self):
        findings = parse_text_log("[warning] unused_import (lib/main.dart:10:3)")
        assert findings == [Finding("warning", "unused_import", "lib/main.dart", 10, 3)]

    def test_zero_line_or_column_skipped(self):
        log = (
            "[info] File-level lint (lib/a.dart:0:0)\n"
            "[info] No column (lib/a.dart:4:0)\n"
            "[warning] real (lib/b.dart:3:1)\n"
        )
        assert parse_text_log(log) == [Finding("warning", "real", "lib/b.dart", 3, 1)]

    def test_load_findings_survives_zero_line(self, tmp_path):
        log = tmp_path / "analyze.log"
        log.write_text("[info] File-level lint (lib/a.dart:0:0)\n[error] kept (lib/b.dart:2:5)\n")
        assert [f.message for f in load_findings([str(log)])] == ["kept"]

    def test_message_with_parentheses(self):
        findings = parse_text_log("[info] Use 'const' (for performance) (lib/a.dart:4:2)")
        assert findings[0].message == "Use 'const' (for performance)"
        assert findings[0].path == "lib/a.dart"
        assert findings[0].line == 4


class TestParseStructuredLog:
    def test_parses_diagnostics(self):
        payload = _json_report(_diagnostic(), _diagnostic(severity="ERROR", message="Bad", line=3, column=1))
        findings = parse_structured_log(payload, WORKSPACE)
        assert findings == [
            Finding("warning", "Unused import", "lib/main.dart", 10, 3),
            Finding("error", "Bad", "lib/main.dart", 3, 1),
        ]

    def test_severity_is_case_insensitive(self):
        findings = parse_structured_log(_json_report(_diagnostic(severity="Info")), WORKSPACE)
        assert findings[0].severity == "info"

    def test_flat_location_and_message_key(self):
        entry = {"severity": "warning", "message": "flat", "location": {"file": "lib/a.dart", "line": 7, "column": 2}}
        findings = parse_structured_log(_json_report(entry))
        assert findings == [Finding("warning", "flat", "lib/a.dart", 7, 2)]

    def test_malformed_json_returns_empty(self):
        assert parse_structured_log("{not json") == []

    def test_empty_payload_returns_empty(self):
        assert parse_structured_log("") == []

    def test_missing_diagnostics_returns_empty(self):
        assert parse_structured_log(json.dumps({"version": 1})) == []

    def test_non_object_payload_returns_empty(self):
        assert parse_structured_log(json.dumps([1, 2, 3])) == []

    def test_invalid_entries_skipped(self):
        payload = _json_report(
            _diagnostic(severity="TODO"),
            {"severity": "error", "problemMessage": "no location"},
            "not a dict",
            _diagnostic(line=0),
            _diagnostic(message="kept"),
        )
        findings = parse_structured_log(payload, WORKSPACE)
        assert [f.message for f in findings] == ["kept"]


class TestParseLog:
    def test_detects_json(self):
        findings = parse_log("  \n" + _json_report(_diagnostic()), WORKSPACE)
        assert findings[0].path == "lib/main.dart"

    def test_detects_text(self):
        assert len(parse_log(TEXT_LOG, WORKSPACE)) == 3


def test_collect_findings_concatenates_in_source_order():
    sources = [
        "[error] first (lib/a.dart:1:1)",
        _json_report(_diagnostic(message="second", file="lib/b.dart")),
        "[info] third (lib/c.dart:3:3)",
    ]
    findings = collect_findings(sources)
    assert [f.message for f in findings] == ["first", "second", "third"]


def test_read_log_missing_file_raises(tmp_path):
    with pytest.raises(LogReadError):
        read_log(str(tmp_path / "missing.log"))


def test_log_read_error_is_an_os_error(tmp_path):
    with pytest.raises(OSError):
        read_log(str(tmp_path / "missing.log"))


def test_load_findings_reads_every_path(tmp_path):
    first = tmp_path / "analyze.log"
    first.write_text("[warning] unused_import (lib/main.dart:10:3)\n")
    second = tmp_path / "custom_lint.json"
    second.write_text(_json_report(_diagnostic(message="custom", file="lib/x.dart")))
    findings = load_findings([str(first), str(second)])
    assert [(f.path, f.message) for f in findings] == [("lib/main.dart", "unused_import"), ("lib/x.dart", "custom")]
