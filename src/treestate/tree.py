"""Git object ids of a subtree as recorded in a commit."""

from __future__ import annotations

import re

from .errors import NotFoundError, ParseError, UnexpectedOutputError
from .probe import OBJECT_ID_RE, Revision, WorkingTree, as_commit


class TreeEntryParser:
    """Parse a single object-model entry into its object id.

    Accepts the line form `<mode> <type> <id>\\t<path>\\n` and the
    NUL-terminated form produced by `ls-tree -z`, where the path may itself
    contain tabs or newlines.
    """

    def __init__(self) -> None:
        # 040000 tree 7804129bd06218b72c298139a25698a748d253c6\tpkg/init
        self.line_re = re.compile(r"^[0-7]{6} [^ ]+ ([0-9a-f]{40})\t.+\n$")
        self.record_re = re.compile(r"^[0-7]{6} [^ ]+ ([0-9a-f]{40})\t[^\x00]+\x00$")

    def parse(self, out: str) -> str:
        pattern = self.record_re if out.endswith("\x00") else self.line_re
        m = pattern.fullmatch(out)
        if m is None:
            raise ParseError(f"unable to parse ls-tree output: {out!r}")
        return m.group(1)


def tree_identity(
    tree: WorkingTree,
    commit: Revision,
    *,
    parser: TreeEntryParser | None = None,
) -> str:
    """Return the git object id of the subtree as recorded in `commit`."""
    rev = as_commit(commit).name

    # The repository root is not listed by ls-tree; use the commit's own tree.
    if tree.is_root:
        out = tree.backend.root_tree(rev).strip()
        if not OBJECT_ID_RE.match(out):
            raise UnexpectedOutputError(f"unexpected root tree id for {rev}: {out!r}")
        return out

    out = tree.backend.list_tree(rev, tree.relpath)
    if out == "":
        raise NotFoundError(f"{tree.relpath} is not in git at {rev}")
    return (parser or TreeEntryParser()).parse(out)
