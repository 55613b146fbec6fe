"""Turn analyzer output into Findings.

Two formats are understood:

- the text report, one finding per line::

      [warning] Unused import (lib/main.dart:10:3)

- the machine-readable report (``dart analyze --format=json`` and
  ``custom_lint --format=json``), a JSON object with a ``diagnostics`` array.

Both are lenient: lines or entries that don't look like a finding are skipped.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Iterable

from lintnote_core.errors import LogReadError, StructuredLogError
from lintnote_core.models import SEVERITIES, Finding

logger = logging.getLogger(__name__)

_FINDING_RE = re.compile(r"\[(info|warning|error)\] (.+) \((.+):(\d+):(\d+)\)")


def read_log(path: str) -> str:
    """Return the content of an analyzer log file."""
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise LogReadError(f"Failed to read analyzer log {path}: {e}") from e


def normalize_path(raw_path: str, working_dir: str = "") -> str:
    """Make an analyzer path relative to the repository root, with forward slashes."""
    path = raw_path.strip().replace("\\", "/")
    prefix = (working_dir or "").replace("\\", "/").rstrip("/")
    if prefix and (path == prefix or path.startswith(prefix + "/")):
        path = path[len(prefix) :]
    return path.lstrip("/")


def parse_text_log(text: str, working_dir: str = "") -> list[Finding]:
    findings = []
    for raw in text.splitlines():
        match = _FINDING_RE.search(raw)
        if not match:
            continue
        severity, message, path, line, column = match.groups()
        line, column = int(line), int(column)
        if line < 1 or column < 1:
            logger.debug("Skipping finding with no usable location: %s", raw)
            continue
        findings.append(
            Finding(
                severity=severity,
                message=message,
                path=normalize_path(path, working_dir),
                line=line,
                column=column,
            )
        )
    return findings


def _load_diagnostics(payload: str) -> list:
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise StructuredLogError(f"Invalid JSON analyzer report: {e}") from e
    if not isinstance(data, dict):
        raise StructuredLogError("Analyzer report must be a JSON object.")
    diagnostics = data.get("diagnostics")
    if not isinstance(diagnostics, list):
        raise StructuredLogError("Analyzer report has no 'diagnostics' array.")
    return diagnostics


def _diagnostic_to_finding(entry, working_dir: str) -> Finding | None:
    if not isinstance(entry, dict):
        return None
    severity = str(entry.get("severity", "")).lower()
    if severity not in SEVERITIES:
        logger.debug("Skipping diagnostic with severity %r", entry.get("severity"))
        return None

    message = entry.get("problemMessage") or entry.get("message")
    location = entry.get("location")
    if not message or not isinstance(location, dict) or not location.get("file"):
        return None

    start = (location.get("range") or {}).get("start") or location
    try:
        line = int(start.get("line"))
        column = int(start.get("column") or 1)
    except (TypeError, ValueError):
        return None
    if line < 1 or column < 1:
        return None

    return Finding(
        severity=severity,
        message=str(message),
        path=normalize_path(str(location["file"]), working_dir),
        line=line,
        column=column,
    )


def parse_structured_log(payload: str, working_dir: str = "") -> list[Finding]:
    """Parse a JSON analyzer report. A missing or malformed payload yields []."""
    try:
        diagnostics = _load_diagnostics(payload or "")
    except StructuredLogError as e:
        logger.debug("Ignoring structured analyzer report: %s", e)
        return []

    findings = []
    for entry in diagnostics:
        finding = _diagnostic_to_finding(entry, working_dir)
        if finding is not None:
            findings.append(finding)
    return findings


def parse_log(text: str, working_dir: str = "") -> list[Finding]:
    """Parse one analyzer log, picking the format from its first character."""
    if text.lstrip().startswith("{"):
        return parse_structured_log(text, working_dir)
    return parse_text_log(text, working_dir)


def collect_findings(sources: Iterable[str], working_dir: str = "") -> list[Finding]:
    """Concatenate findings from several logs, keeping source order."""
    findings: list[Finding] = []
    for text in sources:
        findings.extend(parse_log(text, working_dir))
    return findings


def load_findings(paths: Iterable[str], working_dir: str = "") -> list[Finding]:
    """Read and parse every log in ``paths``. Raises LogReadError on the first unreadable one."""
    findings = collect_findings((read_log(p) for p in paths), working_dir)
    logger.debug("Parsed %d finding(s)", len(findings))
    return findings
