"""Repository backend backed by the git CLI."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..config import git_executable
from ..errors import CommandExitError, ProcessFailure

log = logging.getLogger(__name__)

# `git describe` exits 128 both for "nothing matches" and for real failures.
_NO_TAG_MESSAGES = ("No names found", "No tags can describe")


@dataclass(frozen=True)
class _Result:
    returncode: int
    stdout: str
    stderr: str


def _decode(data: bytes | None) -> str:
    # surrogateescape keeps undecodable path bytes round-trippable through os.fsencode.
    return (data or b"").decode("utf-8", errors="surrogateescape")


def _split_z(out: str) -> list[str]:
    return [p for p in out.split("\x00") if p]


class GitBackend:
    """Repository backend that runs `git -C <directory> ...` per query."""

    def __init__(self, directory: str | Path, *, git: str | None = None) -> None:
        self.directory = Path(directory)
        self.git = git or git_executable()

    def _env(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        env = dict(os.environ)
        # Stable, parseable messages; never rewrite the index from a query.
        env["LC_ALL"] = "C"
        env["GIT_OPTIONAL_LOCKS"] = "0"
        if extra:
            env.update(extra)
        return env

    def _run(
        self,
        args: list[str],
        *,
        ok_codes: tuple[int, ...] = (0,),
        env: dict[str, str] | None = None,
    ) -> _Result:
        cmd = [self.git, "-C", str(self.directory), *args]
        log.debug("Executing: %s", cmd)
        try:
            proc = subprocess.run(
                cmd,
                env=self._env(env),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=False,
                check=False,
            )
        except FileNotFoundError as e:
            raise ProcessFailure(
                f"git executable not found: {self.git!r}. "
                "Install git or point TREESTATE_GIT at it."
            ) from e
        except OSError as e:
            raise ProcessFailure(f"failed to execute {' '.join(cmd)}: {e}") from e

        res = _Result(proc.returncode, _decode(proc.stdout), _decode(proc.stderr))
        if res.returncode not in ok_codes:
            raise CommandExitError(
                f"command failed (exit {res.returncode}): {' '.join(cmd)}\n{res.stderr.strip()}",
                returncode=res.returncode,
                output=res.stderr,
            )
        return res

    def is_inside_work_tree(self) -> str:
        return self._run(["rev-parse", "--is-inside-work-tree"]).stdout

    def show_toplevel(self) -> str:
        return self._run(["rev-parse", "--show-toplevel"]).stdout

    def list_tracked(self) -> list[str]:
        return _split_z(self._run(["ls-files", "-z"]).stdout)

    def list_untracked(self) -> list[str]:
        return _split_z(self._run(["ls-files", "-z", "--others", "--exclude-standard"]).stdout)

    def has_untracked(self) -> bool:
        out = self._run(["ls-files", "-z", "--others", "--exclude-standard", "--", "."]).stdout
        return bool(_split_z(out))

    def has_diff(self, commit: str) -> bool:
        # --quiet implies --exit-code: 1 means differences, anything else non-zero is a failure.
        res = self._run(
            ["diff", "--no-ext-diff", "--quiet", commit, "--", "."],
            ok_codes=(0, 1),
        )
        return res.returncode == 1

    def list_tree(self, commit: str, path: str) -> str:
        return self._run(["ls-tree", "-z", "--full-tree", commit, "--", path]).stdout

    def root_tree(self, commit: str) -> str:
        return self._run(["show", "-s", "--format=%T", commit]).stdout

    def rev_parse(self, commit: str) -> str:
        return self._run(["rev-parse", "--verify", "--quiet", f"{commit}^{{commit}}"]).stdout

    def tags_at(self, commit: str) -> str:
        return self._run(["tag", "-l", "--points-at", commit]).stdout

    def describe_tag(self, pattern: str) -> str | None:
        res = self._run(
            ["--no-pager", "describe", "--tags", "--abbrev=0", "--match", pattern],
            ok_codes=(0, 128),
        )
        if res.returncode == 0:
            return res.stdout
        if any(m in res.stderr for m in _NO_TAG_MESSAGES):
            log.debug("no tag matching %s: %s", pattern, res.stderr.strip())
            return None
        raise CommandExitError(
            f"git describe failed (exit {res.returncode})\n{res.stderr.strip()}",
            returncode=res.returncode,
            output=res.stderr,
        )

    def count_commits(self, revision_range: str) -> str:
        return self._run(["rev-list", "--count", revision_range]).stdout

    def head_stamp(self, abbrev: int) -> str:
        return self._run(
            [
                "--no-pager",
                "show",
                "--quiet",
                f"--abbrev={abbrev}",
                "--date=format-local:%Y%m%d%H%M%S",
                "--format=%cd-%h",
                "HEAD",
            ],
            env={"TZ": "UTC"},
        ).stdout
