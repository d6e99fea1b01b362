from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import CommandExitError


def _unknown(commit: str) -> CommandExitError:
    return CommandExitError(
        f"fatal: bad revision '{commit}'",
        returncode=128,
        output=f"fatal: bad revision '{commit}'\n",
    )


@dataclass
class MemoryBackend:
    """In-memory repository backend for exercising the engine without git.

    Fields hold the canned answer of each query. `inside=None` models a
    directory where git cannot start a repository session. Revisions missing
    from the lookup tables behave like unknown revisions. Every query is
    appended to `calls` as `(name, *args)`.
    """

    toplevel: str = "/repo"
    inside: str | None = "true\n"
    tracked: list[str] = field(default_factory=list)
    untracked: list[str] = field(default_factory=list)
    changed: bool = False
    trees: dict[tuple[str, str], str] = field(default_factory=dict)
    root_trees: dict[str, str] = field(default_factory=dict)
    commits: dict[str, str] = field(default_factory=dict)
    tags: dict[str, list[str]] = field(default_factory=dict)
    describe: str | None = None
    counts: dict[str, int | str] = field(default_factory=dict)
    stamp: str = ""
    calls: list[tuple[str, ...]] = field(default_factory=list)

    def is_inside_work_tree(self) -> str:
        self.calls.append(("is_inside_work_tree",))
        if self.inside is None:
            raise CommandExitError(
                "fatal: not a git repository (or any of the parent directories): .git",
                returncode=128,
            )
        return self.inside

    def show_toplevel(self) -> str:
        self.calls.append(("show_toplevel",))
        return self.toplevel + "\n"

    def list_tracked(self) -> list[str]:
        self.calls.append(("list_tracked",))
        return list(self.tracked)

    def list_untracked(self) -> list[str]:
        self.calls.append(("list_untracked",))
        return list(self.untracked)

    def has_untracked(self) -> bool:
        self.calls.append(("has_untracked",))
        return bool(self.untracked)

    def has_diff(self, commit: str) -> bool:
        self.calls.append(("has_diff", commit))
        return self.changed

    def list_tree(self, commit: str, path: str) -> str:
        self.calls.append(("list_tree", commit, path))
        if commit not in self.commits:
            raise _unknown(commit)
        return self.trees.get((commit, path), "")

    def root_tree(self, commit: str) -> str:
        self.calls.append(("root_tree", commit))
        if commit not in self.root_trees:
            raise _unknown(commit)
        return self.root_trees[commit] + "\n"

    def rev_parse(self, commit: str) -> str:
        self.calls.append(("rev_parse", commit))
        if commit not in self.commits:
            raise CommandExitError(f"unknown revision: {commit}", returncode=1)
        return self.commits[commit] + "\n"

    def tags_at(self, commit: str) -> str:
        self.calls.append(("tags_at", commit))
        if commit not in self.commits:
            raise _unknown(commit)
        return "".join(f"{t}\n" for t in self.tags.get(commit, []))

    def describe_tag(self, pattern: str) -> str | None:
        self.calls.append(("describe_tag", pattern))
        if self.describe is None:
            return None
        return self.describe + "\n"

    def count_commits(self, revision_range: str) -> str:
        self.calls.append(("count_commits", revision_range))
        if revision_range not in self.counts:
            raise _unknown(revision_range)
        return f"{self.counts[revision_range]}\n"

    def head_stamp(self, abbrev: int) -> str:
        self.calls.append(("head_stamp", str(abbrev)))
        return self.stamp + "\n"
