"""Working-tree discovery and the handles shared by every query."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from .backend import GitBackend, RepositoryBackend
from .errors import CommandExitError, ProbeFailure, ProcessFailure, UnexpectedOutputError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitRef:
    """A revision as understood by the backend; resolved per query, never here."""

    name: str

    @property
    def is_head(self) -> bool:
        return self.name == "HEAD"

    def __str__(self) -> str:
        return self.name


HEAD = CommitRef("HEAD")

OBJECT_ID_RE = re.compile(r"^[0-9a-f]{40}$")

Revision = CommitRef | str


def as_commit(commit: Revision) -> CommitRef:
    if isinstance(commit, CommitRef):
        return commit
    return CommitRef(str(commit))


@dataclass(frozen=True)
class WorkingTree:
    """A directory bound to the top level of the repository that contains it."""

    path: Path
    root: Path
    backend: RepositoryBackend = field(compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.path != self.root and self.root not in self.path.parents:
            raise ProbeFailure(f"{self.path} is not inside repository root {self.root}")

    @property
    def is_root(self) -> bool:
        return self.path == self.root

    @property
    def relpath(self) -> str:
        return self.path.relative_to(self.root).as_posix()


def open_working_tree(
    path: str | Path,
    *,
    backend: RepositoryBackend | None = None,
) -> WorkingTree | None:
    """Open the working tree containing `path`.

    Returns None when `path` is not inside a working tree: either git answers
    "false" (e.g. inside a .git directory) or it cannot start a repository
    session there at all. Raises ProbeFailure when git itself cannot be run
    and UnexpectedOutputError when the probe answer is neither true nor false.
    """
    p = Path(path)
    if backend is None:
        backend = GitBackend(p)

    try:
        answer = backend.is_inside_work_tree().strip()
    except CommandExitError as e:
        log.debug("%s is not in a working tree: %s", p, e)
        return None
    except ProcessFailure as e:
        raise ProbeFailure(f"cannot determine working tree of {p}: {e}") from e

    if answer == "false":
        return None
    if answer != "true":
        raise UnexpectedOutputError(
            f"unexpected output from git rev-parse --is-inside-work-tree: {answer!r}"
        )

    try:
        top = backend.show_toplevel().strip()
    except ProcessFailure as e:
        raise ProbeFailure(f"cannot determine repository root of {p}: {e}") from e
    if not top:
        raise UnexpectedOutputError("empty output from git rev-parse --show-toplevel")
    p = p.resolve()
    return WorkingTree(path=p, root=Path(top).resolve(), backend=backend)
