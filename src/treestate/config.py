from __future__ import annotations

import os

BASE_TAG = "v0.0.0"
ABBREV_WIDTH = 12


def git_executable() -> str:
    """Return the git executable used by the process backend.

    Override with `TREESTATE_GIT`.
    """
    return os.environ.get("TREESTATE_GIT") or "git"


def version_tag_pattern() -> str:
    """Return the glob that selects version tags for `git describe --match`.

    Override with `TREESTATE_TAG_PATTERN`.
    """
    return os.environ.get("TREESTATE_TAG_PATTERN") or "v[0-9]*.[0-9]*.[0-9]*"
