"""Git operations for vcflow."""

import subprocess
from pathlib import Path

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from vcflow import display


class GitError(Exception):
    """Git operation failed."""

    pass


def forward(args: list[str], cwd: str | Path | None = None) -> int:
    """Run git with the given arguments untouched and return its exit code.

    Output is not captured so git can talk to the terminal directly.
    """
    try:
        return subprocess.run(["git", *args], cwd=cwd).returncode
    except FileNotFoundError:
        raise GitError("git executable not found")


class GitOperations:
    """Git operations wrapper."""

    def __init__(
        self,
        repo_path: str | Path | None = None,
        remote: str = "origin",
        verbose: bool = False,
    ):
        self.repo_path = Path(repo_path) if repo_path else Path.cwd()
        self.remote = remote
        self.verbose = verbose
        try:
            self.repo = Repo(self.repo_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError):
            raise GitError(f"Not a git repository: {self.repo_path}")

    def _git(self, command: str, *args: str) -> str:
        """Run a git command and return its output."""
        if self.verbose:
            display.print_command(["git", command, *args])
        try:
            return getattr(self.repo.git, command.replace("-", "_"))(*args)
        except GitCommandError as e:
            message = (e.stderr or "").strip() or str(e)
            raise GitError(f"git {command} failed: {message}")

    @property
    def current_branch(self) -> str:
        """Get the current branch name."""
        if self.repo.head.is_detached:
            return self.repo.head.commit.hexsha[:8]
        return self.repo.active_branch.name

    def branch_exists(self, name: str) -> bool:
        """Check if a ref resolves (local branch, remote branch or commit)."""
        try:
            self._git("rev-parse", "--verify", "--quiet", name)
        except GitError:
            return False
        return True

    def list_branches(self) -> list[str]:
        """Get the raw `git branch -a` listing, one entry per line."""
        return self._git("branch", "-a", "--no-color").splitlines()

    def fetch(self, ref: str | None = None) -> None:
        """Fetch a ref (or everything) from the remote."""
        if ref:
            self._git("fetch", self.remote, ref)
        else:
            self._git("fetch", self.remote)

    def fetch_all(self) -> None:
        """Fetch all remotes."""
        self._git("fetch", "--all")

    def checkout(self, ref: str) -> None:
        """Checkout a branch, remote branches get a local tracking branch."""
        self._git("checkout", ref)

    def create_branch(self, name: str) -> None:
        """Create a new branch from HEAD and check it out."""
        self._git("checkout", "-b", name)

    def delete_branch(self, name: str, force: bool = True) -> None:
        """Delete a local branch."""
        try:
            self.repo.delete_head(name, force=force)
        except GitCommandError as e:
            raise GitError(f"Failed to delete branch {name}: {e}")

    def delete_remote_branch(self, name: str) -> None:
        """Delete a branch from the remote."""
        self._git("push", self.remote, "--delete", name)

    def rename_branch(self, new_name: str, old_name: str | None = None) -> None:
        """Rename a local branch, the current one when no old name is given."""
        if old_name:
            self._git("branch", "-m", old_name, new_name)
        else:
            self._git("branch", "-m", new_name)

    def push_rename(self, old_name: str, new_name: str) -> None:
        """Replace a remote branch with a renamed local branch."""
        self._git("push", self.remote, f":{old_name}", new_name)

    def pull(self) -> None:
        """Pull the current branch."""
        self._git("pull")

    def merge(self, ref: str) -> None:
        """Merge a ref into the current branch."""
        self._git("merge", ref)

    def push_branch(self, branch: str, set_upstream: bool = True) -> None:
        """Push a branch to the remote."""
        if set_upstream:
            self._git("push", "-u", self.remote, branch)
        else:
            self._git("push", self.remote, branch)

    def get_remote_url(self, push: bool = True) -> str:
        """Get the (push) URL of the remote."""
        if push:
            return self._git("remote", "get-url", "--push", self.remote).strip()
        return self._git("remote", "get-url", self.remote).strip()

    def stash(self, include_untracked: bool = True) -> bool:
        """Stash current changes. Returns True if something was stashed."""
        args = ["push"]
        if include_untracked:
            args.append("--include-untracked")
        result = self._git("stash", *args)
        return "No local changes" not in result

    def stash_pop(self) -> None:
        """Pop the latest stash."""
        self._git("stash", "pop")

    def stage_all(self) -> None:
        """Stage all changes."""
        self._git("add", "-A")

    def commit(self, message: str) -> str:
        """Create a commit and return the commit hash."""
        self._git("commit", "-m", message)
        return self.repo.head.commit.hexsha

    def log(self, max_count: int = 5) -> str:
        """Get the recent commit log."""
        return self._git("log", "--decorate=short", f"--max-count={max_count}")

    def discard(self) -> None:
        """Throw away all local changes to tracked files."""
        self._git("checkout", ".")
        self.reset_hard("HEAD")

    def reset_hard(self, ref: str) -> None:
        """Hard reset to a ref."""
        self._git("reset", "--hard", ref)
