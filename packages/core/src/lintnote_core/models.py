"""Records flowing through the commenter pipeline.

Every record is a frozen dataclass: findings, located findings and comments are
compared by value, never by identity, and nothing mutates them after parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, field

SEVERITIES = ("info", "warning", "error")


@dataclass(frozen=True)
class Finding:
    """One issue reported by the analyzer."""

    severity: str
    message: str
    path: str
    line: int
    column: int = 1

    def __post_init__(self):
        if self.severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {self.severity!r}. Expected one of {', '.join(SEVERITIES)}.")
        if self.line < 1 or self.column < 1:
            raise ValueError(f"Line and column must be positive, got {self.line}:{self.column}.")


@dataclass(frozen=True)
class LocatedFinding:
    """A finding that falls on an added line, plus the new-revision line to anchor its comment on."""

    finding: Finding
    coordinate: int

    @property
    def path(self) -> str:
        return self.finding.path


@dataclass(frozen=True)
class Comment:
    """A review comment we want to exist on the pull request."""

    path: str
    coordinate: int
    body: str


@dataclass(frozen=True)
class RemoteComment:
    """A review comment that already exists in the comment-store."""

    id: int
    path: str
    coordinate: int | None
    body: str


@dataclass
class ReconcilePlan:
    to_add: list[Comment] = field(default_factory=list)
    to_delete: list[RemoteComment] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_delete
