"""History-independent content fingerprints of a subtree."""

from __future__ import annotations

import hashlib
import logging
import os
import stat

from .errors import ContentReadError
from .probe import WorkingTree

log = logging.getLogger(__name__)

_CHUNK = 1024 * 1024


def content_fingerprint(tree: WorkingTree) -> str:
    """Compute a history-independent content fingerprint for a subtree.

    Hashes, with SHA-256, the bytes of every tracked file followed by every
    untracked, not ignored file, each listing in backend order. Only regular
    files contribute; directories and symlinks are skipped. Entries that vanish
    between listing and stat are skipped; a file that cannot be read once it
    was stat'ed raises ContentReadError rather than yield a wrong digest.
    """
    h = hashlib.sha256()
    paths = tree.backend.list_tracked() + tree.backend.list_untracked()

    for rel in paths:
        p = tree.path / rel
        try:
            st = os.lstat(p)
        except OSError as e:
            log.debug("cannot stat %s: %s, skipped", p, e)
            continue
        if not stat.S_ISREG(st.st_mode):
            continue
        try:
            with open(p, "rb") as f:
                for chunk in iter(lambda: f.read(_CHUNK), b""):
                    h.update(chunk)
        except OSError as e:
            raise ContentReadError(e.errno, f"cannot read {p}: {e.strerror or e}") from e

    return h.hexdigest()
