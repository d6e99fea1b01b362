"""treestate: source-state fingerprints for subtrees of a git working tree."""

from __future__ import annotations

from . import errors
from .commits import commit_id, commit_tags
from .content import content_fingerprint
from .dirty import is_dirty
from .probe import HEAD, CommitRef, WorkingTree, open_working_tree
from .state import SourceState, inspect_source
from .tree import TreeEntryParser, tree_identity
from .version import derive_version

__all__ = [
    "HEAD",
    "CommitRef",
    "SourceState",
    "TreeEntryParser",
    "WorkingTree",
    "commit_id",
    "commit_tags",
    "content_fingerprint",
    "derive_version",
    "errors",
    "inspect_source",
    "is_dirty",
    "open_working_tree",
    "tree_identity",
]
