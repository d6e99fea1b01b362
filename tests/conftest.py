from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

import pytest

# 2024-01-02 03:04:05 UTC
BASE_EPOCH = 1704164645


class GitRepo:
    """A throw-away git repository driven through the real git CLI."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self._epoch = BASE_EPOCH

    def git(self, *args: str) -> str:
        proc = subprocess.run(
            ["git", "-C", str(self.root), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=True,
        )
        return proc.stdout

    def write(self, rel: str, data: str | bytes) -> Path:
        p = self.root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, bytes):
            p.write_bytes(data)
        else:
            p.write_text(data, encoding="utf-8")
        return p

    def commit(self, message: str = "commit", *, epoch: int | None = None) -> str:
        if epoch is None:
            epoch = self._epoch
            self._epoch += 60
        date = f"{epoch} +0000"
        subprocess.run(
            ["git", "-C", str(self.root), "add", "-A"],
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        subprocess.run(
            ["git", "-C", str(self.root), "commit", "-q", "--allow-empty", "-m", message],
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=_commit_env(date),
        )
        return self.git("rev-parse", "HEAD").strip()


def _commit_env(date: str) -> dict[str, str]:
    env = dict(os.environ)
    env["GIT_AUTHOR_DATE"] = date
    env["GIT_COMMITTER_DATE"] = date
    return env


@pytest.fixture()
def git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.delenv("TREESTATE_GIT", raising=False)
    monkeypatch.delenv("TREESTATE_TAG_PATTERN", raising=False)
    for var in ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


@pytest.fixture()
def repo(git_env: Path) -> GitRepo:
    root = git_env / "repo"
    root.mkdir()
    r = GitRepo(root)
    r.git("init", "-q")
    return r
