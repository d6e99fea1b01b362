from __future__ import annotations

import argparse
import importlib.metadata
import json
import logging
import sys
from pathlib import Path


def _package_version() -> str:
    try:
        return importlib.metadata.version("treestate")
    except importlib.metadata.PackageNotFoundError:
        # Source checkout without installed metadata.
        return "0.0.0"


def _add_path(p: argparse.ArgumentParser) -> None:
    p.add_argument("path", nargs="?", default=".", help="Directory inside a git working tree (default: .).")


def _add_commit(p: argparse.ArgumentParser) -> None:
    p.add_argument("--commit", default="HEAD", help="Revision to query (default: HEAD).")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="treestate")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every git command executed.")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_probe = sub.add_parser("probe", help="Print the repository root containing PATH.")
    _add_path(p_probe)

    p_hash = sub.add_parser("hash", help="Print the content fingerprint of PATH.")
    _add_path(p_hash)

    p_tree = sub.add_parser("tree", help="Print the git tree id of PATH at a commit.")
    _add_path(p_tree)
    _add_commit(p_tree)

    p_dirty = sub.add_parser("dirty", help="Print 'true' if PATH has uncommitted changes.")
    _add_path(p_dirty)
    _add_commit(p_dirty)

    p_version = sub.add_parser("version", help="Print the version derived from tags and commits.")
    _add_path(p_version)

    p_state = sub.add_parser("state", help="Print every source-state signal for PATH as JSON.")
    _add_path(p_state)
    _add_commit(p_state)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from .errors import TreeStateError
    from .probe import open_working_tree

    try:
        tree = open_working_tree(Path(args.path))
        if tree is None:
            print(f"not a working tree: {args.path}", file=sys.stderr)
            raise SystemExit(2)

        if args.cmd == "probe":
            print(str(tree.root))
            return

        if args.cmd == "hash":
            from .content import content_fingerprint

            print(content_fingerprint(tree))
            return

        if args.cmd == "tree":
            from .tree import tree_identity

            print(tree_identity(tree, args.commit))
            return

        if args.cmd == "dirty":
            from .dirty import is_dirty

            print("true" if is_dirty(tree, args.commit) else "false")
            return

        if args.cmd == "version":
            from .version import derive_version

            print(derive_version(tree))
            return

        if args.cmd == "state":
            from .state import inspect_source

            state = inspect_source(tree, args.commit)
            print(json.dumps(state.to_dict(), indent=2, sort_keys=True))
            return
    except TreeStateError as e:
        print(f"treestate: {e}", file=sys.stderr)
        raise SystemExit(1) from e
