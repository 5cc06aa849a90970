"""Tests for GitRepository with a mocked command runner."""

from pathlib import Path
from unittest.mock import Mock

import pytest
from invoke import Result

from trivialmerge.core.config import GitConfig
from trivialmerge.git.repo import (
    ConflictStyleError,
    GitError,
    GitRepository,
    conflicted_paths,
)


def result(stdout="", exited=0, stderr=""):
    return Result(stdout=stdout, stderr=stderr, exited=exited)


@pytest.fixture
def runner():
    return Mock()


@pytest.fixture
def repo(runner, tmp_path):
    return GitRepository(GitConfig(workdir=tmp_path), runner=runner)


def commands(runner):
    """Argument lists of every command run so far."""
    return [call.args[0] for call in runner.execute.call_args_list]


def test_conflicted_paths_filters_statuses():
    porcelain = "UU both.txt\0M  staged.txt\0AA added.txt\0UU dir/a b.c\0"

    assert conflicted_paths(porcelain, ["UU"]) == ["both.txt", "dir/a b.c"]
    assert conflicted_paths(porcelain, ["UU", "AA"]) == [
        "both.txt", "added.txt", "dir/a b.c",
    ]
    assert conflicted_paths("", ["UU"]) == []


def test_conflicted_files_are_absolute(repo, runner):
    runner.execute.side_effect = [
        result("UU a.txt\0?? new.txt\0UU sub/b.txt\0"),
        result("/repo\n"),
    ]

    files = repo.conflicted_files()

    assert files == [Path("/repo/a.txt"), Path("/repo/sub/b.txt")]
    assert commands(runner) == [
        ["git", "status", "--porcelain", "-z"],
        ["git", "rev-parse", "--show-toplevel"],
    ]


def test_git_runs_in_workdir(repo, runner, tmp_path):
    runner.execute.return_value = result()

    repo.git("status")

    kwargs = runner.execute.call_args.kwargs
    assert kwargs["cwd"] == tmp_path
    assert kwargs["check"] is False
    assert kwargs["timeout"] == 60


def test_git_failure_raises(repo, runner):
    runner.execute.return_value = result(exited=128, stderr="fatal: nope\n")

    with pytest.raises(GitError, match="exit code 128: fatal: nope") as exc:
        repo.git("status")

    assert exc.value.returncode == 128
    assert exc.value.command == ["git", "status"]


def test_add_stages_path(repo, runner):
    runner.execute.return_value = result()

    repo.add(Path("/repo/a.txt"))

    assert commands(runner) == [["git", "add", "--", "/repo/a.txt"]]


def test_get_conflict_style(repo, runner):
    runner.execute.return_value = result("diff3\n")
    assert repo.get_conflict_style() == "diff3"


def test_get_conflict_style_unset(repo, runner):
    runner.execute.return_value = result(exited=1)
    assert repo.get_conflict_style() == "unset"


def test_get_conflict_style_error(repo, runner):
    runner.execute.return_value = result(exited=3, stderr="bad config")
    with pytest.raises(GitError):
        repo.get_conflict_style()


@pytest.mark.parametrize("style", ["diff3", "zdiff3"])
def test_ensure_conflict_style_accepts(repo, runner, style):
    runner.execute.return_value = result(f"{style}\n")

    assert repo.ensure_conflict_style() == style
    assert len(commands(runner)) == 1


def test_ensure_conflict_style_refuses_without_auto_set(repo, runner):
    runner.execute.return_value = result("merge\n")

    with pytest.raises(ConflictStyleError, match="must be diff3 but is 'merge'"):
        repo.ensure_conflict_style()


def test_ensure_conflict_style_sets_globally(repo, runner):
    runner.execute.side_effect = [
        result(exited=1),
        result(),
        result("diff3\n"),
    ]

    assert repo.ensure_conflict_style(auto_set=True) == "diff3"
    assert commands(runner)[1] == [
        "git", "config", "--global", "merge.conflictstyle", "diff3",
    ]


def test_ensure_conflict_style_set_without_effect(repo, runner):
    """A per-project setting shadows the global one."""
    runner.execute.side_effect = [
        result("merge\n"),
        result(),
        result("merge\n"),
    ]

    with pytest.raises(ConflictStyleError, match="Attempt to set"):
        repo.ensure_conflict_style(auto_set=True)
