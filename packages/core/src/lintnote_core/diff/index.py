"""Per-file index of added lines."""

from __future__ import annotations

from collections import defaultdict

from lintnote_core.diff.parser import LineKind, walk_diff


class DiffIndex:
    """Which new-revision lines of each file were added by a diff.

    Built once from the whole pull-request diff; read-only afterwards.
    """

    def __init__(self, changes: dict[str, frozenset[int]] | None = None):
        self._changes: dict[str, frozenset[int]] = dict(changes or {})

    @classmethod
    def from_diff(cls, diff_text: str) -> DiffIndex:
        touched: dict[str, set[int]] = defaultdict(set)
        for line in walk_diff(diff_text):
            if line.kind is LineKind.ADDED and line.path:
                touched[line.path].add(line.new_line)
        return cls({path: frozenset(lines) for path, lines in touched.items()})

    @property
    def files(self) -> list[str]:
        return sorted(self._changes)

    def changed_lines(self, path: str) -> frozenset[int]:
        return self._changes.get(path, frozenset())

    def file_has_change(self, path: str, line: int) -> bool:
        return line in self._changes.get(path, ())

    def __len__(self) -> int:
        return len(self._changes)
