"""Commit id and tag queries."""

from __future__ import annotations

from .errors import UnexpectedOutputError
from .probe import OBJECT_ID_RE, Revision, WorkingTree, as_commit


def commit_id(tree: WorkingTree, commit: Revision) -> str:
    """Resolve `commit` to its full 40-hex object id."""
    rev = as_commit(commit).name
    out = tree.backend.rev_parse(rev).strip()
    if not OBJECT_ID_RE.match(out):
        raise UnexpectedOutputError(f"unexpected output from git rev-parse {rev}: {out!r}")
    return out


def commit_tags(tree: WorkingTree, commit: Revision) -> list[str]:
    out = tree.backend.tags_at(as_commit(commit).name)
    return [ln.strip() for ln in out.splitlines() if ln.strip()]
