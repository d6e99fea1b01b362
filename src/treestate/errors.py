"""Domain-specific errors for treestate."""

from __future__ import annotations


class TreeStateError(Exception):
    """Base error for treestate."""


class ProcessFailure(TreeStateError):
    """Raised when a repository backend query cannot be executed."""


class CommandExitError(ProcessFailure):
    """Raised when a backend command exits with an unexpected status."""

    def __init__(self, message: str, *, returncode: int, output: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class ProbeFailure(ProcessFailure):
    """Raised when the working-tree boundary of a directory cannot be determined."""


class UnexpectedOutputError(TreeStateError):
    """Raised when backend output does not follow its documented grammar."""


class ParseError(TreeStateError):
    """Raised when an object listing cannot be parsed into exactly one entry."""


class NotFoundError(TreeStateError):
    """Raised when a subtree does not exist at the referenced commit."""


class ContentReadError(TreeStateError, OSError):
    """Raised when a file cannot be read after its existence was confirmed."""
