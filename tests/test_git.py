"""Tests for GitOperations against a throwaway repository."""

import shutil
from pathlib import Path

import pytest
from git import Repo

from vcflow.git import GitError, GitOperations


pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@pytest.fixture
def repo(tmp_path):
    repo = Repo.init(tmp_path)
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test")
        config.set_value("user", "email", "test@example.com")

    (tmp_path / "README.md").write_text("hello\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    repo.git.branch("-M", "master")
    return repo


@pytest.fixture
def git(repo):
    return GitOperations(repo.working_tree_dir)


def test_not_a_repository(tmp_path):
    with pytest.raises(GitError, match="Not a git repository"):
        GitOperations(tmp_path / "missing")


def test_current_branch(git):
    assert git.current_branch == "master"


def test_create_and_checkout(git):
    git.create_branch("sprint_70/Login")
    assert git.current_branch == "sprint_70/Login"

    git.checkout("master")
    assert git.current_branch == "master"


def test_branch_exists(git):
    assert git.branch_exists("master")
    assert not git.branch_exists("nope")


def test_list_branches_marks_current(git):
    git.create_branch("develop")

    lines = git.list_branches()

    assert "* develop" in lines
    assert "  master" in lines


def test_stash_reports_whether_anything_was_stashed(git, repo):
    assert git.stash() is False

    Path(repo.working_tree_dir, "new.txt").write_text("x")
    assert git.stash() is True
    assert repo.untracked_files == []

    git.stash_pop()
    assert repo.untracked_files == ["new.txt"]


def test_commit(git, repo):
    Path(repo.working_tree_dir, "README.md").write_text("hello\nmore\n")

    git.stage_all()
    sha = git.commit("Update readme")

    assert repo.head.commit.hexsha == sha
    assert "Update readme" in git.log(1)


def test_rename_and_delete(git):
    git.create_branch("old")
    git.rename_branch("new")
    assert git.current_branch == "new"

    git.checkout("master")
    git.delete_branch("new")
    assert not git.branch_exists("new")


def test_failed_command_raises(git):
    with pytest.raises(GitError, match="git checkout failed"):
        git.checkout("does-not-exist")


def test_remote_url(git, repo):
    repo.create_remote("origin", "git@github.com:acme/app.git")

    assert git.get_remote_url() == "git@github.com:acme/app.git"


def test_verbose_echoes_commands(repo, capsys):
    git = GitOperations(repo.working_tree_dir, verbose=True)

    git.branch_exists("master")

    assert "$ git rev-parse --verify --quiet master" in capsys.readouterr().out
