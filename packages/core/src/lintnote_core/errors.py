"""Exception hierarchy shared by the pipeline, the parsers and the stores."""

from __future__ import annotations


class LintnoteError(Exception):
    """Base class for every error raised by lintnote."""


class LogReadError(LintnoteError, OSError):
    """An analyzer log could not be read from disk."""


class StructuredLogError(LintnoteError, ValueError):
    """A structured (JSON) analyzer payload is malformed.

    Never escapes the log parser: callers get an empty finding list instead.
    """


class CommentStoreError(LintnoteError):
    """A call into the comment-store or diff-source failed."""
