"""Narrow query interface between the engine and a version-control backend."""

from __future__ import annotations

from typing import Protocol


class RepositoryBackend(Protocol):
    """Read-only queries against one directory of a working tree.

    Implementations:
    - GitBackend: runs the git CLI once per query.
    - MemoryBackend: answers from in-memory fixtures, for tests.

    Every query raises `ProcessFailure` when it cannot be executed and
    `CommandExitError` when it exits with a status that is not part of its
    contract. Text results are returned untrimmed; callers own the grammar.
    """

    def is_inside_work_tree(self) -> str:
        """Raw answer of the boundary probe ("true\\n" / "false\\n")."""
        ...

    def show_toplevel(self) -> str:
        """Absolute path of the repository top level."""
        ...

    def list_tracked(self) -> list[str]:
        """Tracked paths under the directory, relative to it, backend order."""
        ...

    def list_untracked(self) -> list[str]:
        """Untracked, not ignored paths under the directory, backend order."""
        ...

    def has_untracked(self) -> bool:
        """True if at least one untracked, not ignored file exists under the directory."""
        ...

    def has_diff(self, commit: str) -> bool:
        """True if tracked content under the directory differs from `commit`."""
        ...

    def list_tree(self, commit: str, path: str) -> str:
        """Object-model entries for root-relative `path` at `commit`."""
        ...

    def root_tree(self, commit: str) -> str:
        """Root tree object id of `commit`."""
        ...

    def rev_parse(self, commit: str) -> str:
        """Full object id of the commit `commit` points to."""
        ...

    def tags_at(self, commit: str) -> str:
        """Newline-separated tag names pointing at `commit`."""
        ...

    def describe_tag(self, pattern: str) -> str | None:
        """Nearest tag reachable from HEAD matching `pattern`, or None."""
        ...

    def count_commits(self, revision_range: str) -> str:
        """Number of commits in `revision_range`."""
        ...

    def head_stamp(self, abbrev: int) -> str:
        """`<UTC YYYYmmddHHMMSS>-<abbreviated id>` of HEAD."""
        ...
