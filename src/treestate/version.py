"""Version strings derived from tags and commit history."""

from __future__ import annotations

import logging
import re

from .config import ABBREV_WIDTH, BASE_TAG, version_tag_pattern
from .errors import UnexpectedOutputError
from .probe import WorkingTree

log = logging.getLogger(__name__)

_COUNT_RE = re.compile(r"^[0-9]+$")
_STAMP_RE = re.compile(r"^[0-9]{14}-[0-9a-f]{%d,}$" % ABBREV_WIDTH)


def derive_version(tree: WorkingTree) -> str:
    """Return a Go-module-compatible version for the current checkout.

    This is either:

    - the nearest version tag, if HEAD is that tag's commit
    - `<tag>-<UTC YYYYmmddHHMMSS>-<12-hex commit id>` otherwise

    `v0.0.0` stands in for the tag when no version tag is reachable.
    """
    found = (tree.backend.describe_tag(version_tag_pattern()) or "").strip()
    if found:
        tag = found
        revision_range = f"{tag}..HEAD"
    else:
        log.debug("no version tag reachable from HEAD, using %s", BASE_TAG)
        tag = BASE_TAG
        revision_range = "HEAD"

    count = tree.backend.count_commits(revision_range).strip()
    if not _COUNT_RE.match(count):
        raise UnexpectedOutputError(f"unexpected output from git rev-list --count: {count!r}")
    if int(count) == 0:
        return tag

    stamp = tree.backend.head_stamp(ABBREV_WIDTH).strip()
    if not _STAMP_RE.match(stamp):
        raise UnexpectedOutputError(f"unexpected commit date/id output: {stamp!r}")
    return f"{tag}-{stamp}"
