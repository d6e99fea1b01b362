from __future__ import annotations

from pathlib import Path

import pytest


def _tree(root: Path, backend):
    from treestate.probe import WorkingTree

    return WorkingTree(path=root / "pkg", root=root, backend=backend)


def test_non_head_commit_is_never_dirty(tmp_path: Path):
    from treestate.backend import MemoryBackend
    from treestate.dirty import is_dirty

    backend = MemoryBackend(changed=True, untracked=["new.txt"])
    tree = _tree(tmp_path, backend)
    assert is_dirty(tree, "HEAD~1") is False
    assert is_dirty(tree, "0123456789abcdef0123456789abcdef01234567") is False
    assert backend.calls == []


def test_tracked_change_short_circuits(tmp_path: Path):
    from treestate.backend import MemoryBackend
    from treestate.dirty import is_dirty
    from treestate.probe import HEAD

    backend = MemoryBackend(changed=True, untracked=["new.txt"])
    assert is_dirty(_tree(tmp_path, backend), HEAD) is True
    assert backend.calls == [("has_diff", "HEAD")]


def test_untracked_file_makes_dirty(tmp_path: Path):
    from treestate.backend import MemoryBackend
    from treestate.dirty import is_dirty

    backend = MemoryBackend(untracked=["new.txt"])
    assert is_dirty(_tree(tmp_path, backend), "HEAD") is True


def test_clean(tmp_path: Path):
    from treestate.backend import MemoryBackend
    from treestate.dirty import is_dirty

    backend = MemoryBackend()
    assert is_dirty(_tree(tmp_path, backend), "HEAD") is False
    assert [c[0] for c in backend.calls] == ["has_diff", "has_untracked"]


def test_backend_failure_propagates(tmp_path: Path):
    from treestate.dirty import is_dirty
    from treestate.errors import CommandExitError

    class Failing:
        def has_diff(self, commit: str) -> bool:
            raise CommandExitError("fatal: bad object HEAD", returncode=128)

    tree = _tree(tmp_path, Failing())
    with pytest.raises(CommandExitError):
        is_dirty(tree, "HEAD")


def test_real_repository_dirty_detection(repo):
    from treestate.dirty import is_dirty
    from treestate.probe import open_working_tree

    repo.write(".gitignore", "*.log\n")
    repo.write("pkg/foo/a.txt", "hello")
    repo.write("other/b.txt", "other")
    repo.commit("init")

    tree = open_working_tree(repo.root / "pkg" / "foo")
    assert tree is not None
    assert is_dirty(tree, "HEAD") is False

    repo.write("pkg/foo/a.txt", "hello, world")
    assert is_dirty(tree, "HEAD") is True
    assert is_dirty(tree, "HEAD~0") is False

    repo.write("pkg/foo/a.txt", "hello")
    assert is_dirty(tree, "HEAD") is False

    # Edits outside the subtree do not count.
    repo.write("other/b.txt", "changed")
    repo.write("other/new.txt", "new")
    assert is_dirty(tree, "HEAD") is False


def test_real_repository_ignore_interaction(repo):
    from treestate.dirty import is_dirty
    from treestate.probe import open_working_tree

    repo.write(".gitignore", "*.log\n")
    repo.write("pkg/foo/a.txt", "hello")
    repo.commit("init")

    tree = open_working_tree(repo.root / "pkg" / "foo")
    assert tree is not None

    repo.write("pkg/foo/build.log", "ignored")
    assert is_dirty(tree, "HEAD") is False

    repo.write("pkg/foo/notes.txt", "untracked")
    assert is_dirty(tree, "HEAD") is True


def test_real_repository_deleted_tracked_file_is_dirty(repo):
    from treestate.dirty import is_dirty
    from treestate.probe import open_working_tree

    repo.write("pkg/foo/a.txt", "hello")
    repo.write("pkg/foo/b.txt", "bye")
    repo.commit("init")

    tree = open_working_tree(repo.root / "pkg" / "foo")
    assert tree is not None
    (repo.root / "pkg" / "foo" / "b.txt").unlink()
    assert is_dirty(tree, "HEAD") is True
