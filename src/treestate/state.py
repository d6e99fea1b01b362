"""One-call summary of every source-state signal for a subtree."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from .commits import commit_id, commit_tags
from .content import content_fingerprint
from .dirty import is_dirty
from .probe import HEAD, Revision, WorkingTree, as_commit
from .tree import tree_identity
from .version import derive_version


@dataclass(frozen=True)
class SourceState:
    path: str
    commit: str
    tree: str
    dirty: bool
    tags: list[str]
    fingerprint: str | None = None
    version: str | None = None

    @property
    def artifact_tag(self) -> str:
        """Tag for artifacts built from this state.

        Clean sources are identified by their tree id. Dirty sources have no
        committed identity, so the content fingerprint stands in for it.
        """
        if self.dirty and self.fingerprint:
            return f"{self.fingerprint[:40]}-dirty"
        return self.tree

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["artifact_tag"] = self.artifact_tag
        return d


def inspect_source(tree: WorkingTree, commit: Revision = HEAD) -> SourceState:
    """Gather every signal the build pipeline needs about a subtree at `commit`.

    The content fingerprint and version describe the live checkout, so they
    are only computed for HEAD.
    """
    ref = as_commit(commit)
    fingerprint = None
    version = None
    if ref.is_head:
        fingerprint = content_fingerprint(tree)
        version = derive_version(tree)
    return SourceState(
        path=tree.relpath,
        commit=commit_id(tree, ref),
        tree=tree_identity(tree, ref),
        dirty=is_dirty(tree, ref),
        tags=commit_tags(tree, ref),
        fingerprint=fingerprint,
        version=version,
    )
