"""Uncommitted-change detection for a subtree of the live checkout."""

from __future__ import annotations

import logging

from .probe import Revision, WorkingTree, as_commit

log = logging.getLogger(__name__)


def is_dirty(tree: WorkingTree, commit: Revision) -> bool:
    """Return True if the subtree differs from `commit` in the live checkout.

    Only meaningful for HEAD: any other reference returns False without
    querying the backend. Tracked changes are checked first, then untracked
    files that are not ignored.
    """
    ref = as_commit(commit)
    if not ref.is_head:
        return False

    if tree.backend.has_diff(ref.name):
        log.debug("%s: tracked changes against %s", tree.path, ref)
        return True

    if tree.backend.has_untracked():
        log.debug("%s: untracked files present", tree.path)
        return True

    return False
