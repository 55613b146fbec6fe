"""Line-oriented state machine over a unified diff.

The walker understands just enough of the unified format to tell, for every
line inside a hunk, which file it belongs to, whether it was added, removed or
kept, and its new-revision line number.

States::

    AWAITING_FILE_HEADER --"+++ b/path"--> AWAITING_HUNK --"@@"--> IN_HUNK
            ^                                                        |
            +------------------"diff " / "--- " / "+++ "---------------+

Inside a hunk, "--- " and "+++ " only start a new file once the line counts
from the ``@@`` header are used up, so a removed line that happens to start
with ``--`` stays part of the hunk. Lines past the declared length are still
read as hunk body.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Iterator

_HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_DEV_NULL = "/dev/null"


class ParserState(enum.Enum):
    AWAITING_FILE_HEADER = "awaiting_file_header"
    AWAITING_HUNK = "awaiting_hunk"
    IN_HUNK = "in_hunk"


class LineKind(enum.Enum):
    ADDED = "+"
    REMOVED = "-"
    CONTEXT = " "


@dataclass(frozen=True)
class HunkHeader:
    old_start: int
    old_length: int
    new_start: int
    new_length: int


@dataclass(frozen=True)
class DiffLine:
    """One line of a hunk body."""

    path: str
    kind: LineKind
    new_line: int | None  # None for removed lines


def parse_hunk_header(line: str) -> HunkHeader | None:
    """Parse ``@@ -a[,b] +c[,d] @@``. A missing length means a length of 1."""
    match = _HUNK_RE.match(line)
    if not match:
        return None
    old_start, old_length, new_start, new_length = match.groups()
    return HunkHeader(
        old_start=int(old_start),
        old_length=int(old_length) if old_length is not None else 1,
        new_start=int(new_start),
        new_length=int(new_length) if new_length is not None else 1,
    )


def _target_path(header_line: str) -> str:
    """Extract the new-side path from a ``+++`` line; empty for deleted files."""
    path = header_line[4:].split("\t", 1)[0].strip()
    if path == _DEV_NULL:
        return ""
    if path.startswith("b/"):
        path = path[2:]
    return path


class DiffWalker:
    """Feeds diff lines through the state machine and yields hunk body lines."""

    def __init__(self):
        self._reset_file()

    def walk(self, diff_text: str) -> Iterator[DiffLine]:
        for line in diff_text.splitlines():
            diff_line = self.feed(line)
            if diff_line is not None:
                yield diff_line

    def feed(self, line: str) -> DiffLine | None:
        if self.state is ParserState.IN_HUNK:
            return self._in_hunk(line)
        if self.state is ParserState.AWAITING_HUNK:
            self._awaiting_hunk(line)
        else:
            self._awaiting_file_header(line)
        return None

    # ------------------------------------------------------------------ #
    # Transitions                                                          #
    # ------------------------------------------------------------------ #

    def _reset_file(self) -> None:
        self.path = ""
        self._new_line = 0
        self._old_remaining = 0
        self._new_remaining = 0
        self.state = ParserState.AWAITING_FILE_HEADER

    def _start_file(self, header_line: str) -> None:
        self._reset_file()
        self.path = _target_path(header_line)
        self.state = ParserState.AWAITING_HUNK

    def _start_hunk(self, header: HunkHeader) -> None:
        self._new_line = header.new_start - 1
        self._old_remaining = header.old_length
        self._new_remaining = header.new_length
        self.state = ParserState.IN_HUNK

    def _awaiting_file_header(self, line: str) -> None:
        if line.startswith("+++ "):
            self._start_file(line)
        elif line.startswith("diff ") or line.startswith("--- "):
            self._reset_file()

    def _awaiting_hunk(self, line: str) -> None:
        header = parse_hunk_header(line)
        if header is not None:
            self._start_hunk(header)
        elif line.startswith("+++ "):
            self._start_file(line)
        elif line.startswith("diff ") or line.startswith("--- "):
            self._reset_file()

    def _in_hunk(self, line: str) -> DiffLine | None:
        header = parse_hunk_header(line)
        if header is not None:
            self._start_hunk(header)
            return None
        if line.startswith("diff "):
            self._reset_file()
            return None
        if self._old_remaining <= 0 and self._new_remaining <= 0:
            if line.startswith("--- "):
                self._reset_file()
                return None
            if line.startswith("+++ "):
                self._start_file(line)
                return None

        prefix = line[:1]
        if prefix == "\\":
            # "\ No newline at end of file"
            return None
        if prefix == "+":
            self._new_line += 1
            self._new_remaining -= 1
            return DiffLine(self.path, LineKind.ADDED, self._new_line)
        if prefix == "-":
            self._old_remaining -= 1
            return DiffLine(self.path, LineKind.REMOVED, None)
        self._new_line += 1
        self._old_remaining -= 1
        self._new_remaining -= 1
        return DiffLine(self.path, LineKind.CONTEXT, self._new_line)


def walk_diff(diff_text: str) -> Iterator[DiffLine]:
    """Yield every hunk body line of a (possibly multi-file) unified diff."""
    return DiffWalker().walk(diff_text or "")
