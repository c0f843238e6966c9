"""Shared fixtures: an in-memory stand-in for GitOperations."""

import pytest

from vcflow.config import Settings
from vcflow.engine import WorkflowEngine
from vcflow.git import GitError


READ_ONLY = {"branch_exists", "list_branches", "get_remote_url", "log"}


class FakeGit:
    """Just enough of GitOperations to drive the workflows without a repository."""

    def __init__(
        self,
        current: str = "master",
        branches: list[str] | None = None,
        remote_branches: list[str] | None = None,
        push_url: str = "git@github.com:acme/app.git",
        dirty: bool = False,
    ):
        self.remote = "origin"
        self._current = current
        self.local = set(branches or []) | {current}
        self.remote_branches = set(remote_branches or [])
        self.push_url = push_url
        self.dirty = dirty
        self.calls: list[tuple] = []
        self.fail_on: set[tuple] = set()
        self.listing: list[str] | None = None
        self.appear_after_fetch: set[str] = set()
        self.stash_depth = 0

    def _call(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if (name, *args) in self.fail_on:
            raise GitError(f"git {name} failed")

    @property
    def mutating_calls(self) -> list[tuple]:
        return [c for c in self.calls if c[0] not in READ_ONLY]

    @property
    def current_branch(self) -> str:
        return self._current

    def branch_exists(self, name: str) -> bool:
        self._call("branch_exists", name)
        if name.startswith("origin/"):
            return name[len("origin/"):] in self.remote_branches
        return name in self.local

    def list_branches(self) -> list[str]:
        self._call("list_branches")
        if self.listing is not None:
            return list(self.listing)

        lines = [f"* {b}" if b == self._current else f"  {b}" for b in sorted(self.local)]
        lines += [f"  remotes/origin/{b}" for b in sorted(self.remote_branches)]
        return lines

    def fetch(self, ref: str | None = None) -> None:
        self._call("fetch", ref)
        if ref and ref not in self.remote_branches:
            raise GitError(f"couldn't find remote ref {ref}")

    def fetch_all(self) -> None:
        self._call("fetch_all")
        self.remote_branches |= self.appear_after_fetch

    def checkout(self, ref: str) -> None:
        self._call("checkout", ref)
        if ref in self.local:
            self._current = ref
        elif ref in self.remote_branches:
            self.local.add(ref)
            self._current = ref
        else:
            raise GitError(f"pathspec '{ref}' did not match")

    def create_branch(self, name: str) -> None:
        self._call("create_branch", name)
        if name in self.local:
            raise GitError(f"a branch named '{name}' already exists")
        self.local.add(name)
        self._current = name

    def delete_branch(self, name: str, force: bool = True) -> None:
        self._call("delete_branch", name)
        self.local.discard(name)

    def delete_remote_branch(self, name: str) -> None:
        self._call("delete_remote_branch", name)
        self.remote_branches.discard(name)

    def rename_branch(self, new_name: str, old_name: str | None = None) -> None:
        self._call("rename_branch", new_name, old_name)
        old = old_name or self._current
        self.local.discard(old)
        self.local.add(new_name)
        if old == self._current:
            self._current = new_name

    def push_rename(self, old_name: str, new_name: str) -> None:
        self._call("push_rename", old_name, new_name)

    def pull(self) -> None:
        self._call("pull", self._current)

    def merge(self, ref: str) -> None:
        self._call("merge", ref)

    def push_branch(self, branch: str, set_upstream: bool = True) -> None:
        self._call("push_branch", branch)
        self.remote_branches.add(branch)

    def get_remote_url(self, push: bool = True) -> str:
        self._call("get_remote_url")
        return self.push_url

    def stash(self, include_untracked: bool = True) -> bool:
        self._call("stash")
        if not self.dirty:
            return False
        self.dirty = False
        self.stash_depth += 1
        return True

    def stash_pop(self) -> None:
        self._call("stash_pop")
        self.stash_depth -= 1
        self.dirty = True

    def stage_all(self) -> None:
        self._call("stage_all")

    def commit(self, message: str) -> str:
        self._call("commit", message)
        return "0123456789abcdef"

    def log(self, max_count: int = 5) -> str:
        self._call("log", max_count)
        return "commit 0123456789abcdef\n\n    Initial commit"

    def discard(self) -> None:
        self._call("discard")
        self.dirty = False


class FakeChooser:
    """Chooser that records what it was offered and picks a fixed index."""

    def __init__(self, index: int | None = 0):
        self.index = index
        self.offered: list[list[str]] = []

    def __call__(self, options: list[str]) -> int | None:
        self.offered.append(list(options))
        return self.index


class FakeOpener:
    def __init__(self, works: bool = True):
        self.works = works
        self.opened: list[str] = []

    def __call__(self, url: str) -> bool:
        self.opened.append(url)
        return self.works


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def chooser():
    return FakeChooser()


@pytest.fixture
def opener():
    return FakeOpener()


@pytest.fixture
def make_engine(settings, chooser, opener):
    """Build a WorkflowEngine around a FakeGit."""

    def _make(git: FakeGit, **overrides) -> WorkflowEngine:
        return WorkflowEngine(
            git,
            overrides.get("settings", settings),
            chooser=overrides.get("chooser", chooser),
            opener=overrides.get("opener", opener),
        )

    return _make
