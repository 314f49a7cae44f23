"""Tests for git preflight checks."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from workstream_cli.core.git_ops import GitCommandResult
from workstream_cli.core.git_preflight import run_git_preflight


def test_run_git_preflight_blocks_non_repo(tmp_path: Path) -> None:
    result = run_git_preflight(tmp_path)
    assert not result.passed
    assert result.first_error is not None
    assert result.first_error.code == "NOT_A_GIT_REPOSITORY"
    assert "git status" in (result.first_error.command or "")


def test_run_git_preflight_missing_origin_is_warning(project: Path) -> None:
    result = run_git_preflight(project)

    assert result.passed
    assert not result.has_origin
    assert any(issue.code == "MISSING_ORIGIN_REMOTE" for issue in result.warnings)


def test_run_git_preflight_with_origin(project_with_origin: Path) -> None:
    result = run_git_preflight(project_with_origin)

    assert result.passed
    assert result.has_origin
    assert result.warnings == []


def test_run_git_preflight_detects_dubious_ownership(tmp_path: Path) -> None:
    dubious = GitCommandResult(
        returncode=128,
        stdout="",
        stderr="fatal: detected dubious ownership in repository at '/tmp/repo'",
    )
    with patch("workstream_cli.core.git_preflight.run_git", return_value=dubious):
        result = run_git_preflight(tmp_path)

    assert not result.passed
    assert result.first_error is not None
    assert result.first_error.code == "UNTRUSTED_REPOSITORY"
    assert "safe.directory" in (result.first_error.command or "")


def test_run_git_preflight_detects_worktree_listing_failure(tmp_path: Path) -> None:
    responses = iter(
        [
            GitCommandResult(returncode=0, stdout="true\n", stderr=""),
            GitCommandResult(returncode=1, stdout="", stderr="fatal: could not list worktrees"),
        ]
    )
    with patch(
        "workstream_cli.core.git_preflight.run_git",
        side_effect=lambda *_args, **_kwargs: next(responses),
    ):
        result = run_git_preflight(tmp_path)

    assert not result.passed
    assert result.first_error is not None
    assert result.first_error.code == "WORKTREE_LIST_FAILED"
    assert "could not list worktrees" in result.first_error.message



def test_run_git_preflight_reports_missing_git(tmp_path: Path) -> None:
    missing = GitCommandResult(returncode=127, stdout="", stderr="git executable not found")
    with patch("workstream_cli.core.git_preflight.run_git", return_value=missing):
        result = run_git_preflight(tmp_path)

    assert not result.passed
    assert result.first_error is not None
    assert result.first_error.code == "NOT_A_GIT_REPOSITORY"
    assert result.first_error.message == "git executable not found"
