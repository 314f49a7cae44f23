"""Tests for workstream listing."""

from __future__ import annotations

import shutil
from pathlib import Path

from tests.git_helpers import commit_file, git

from workstream_cli.workstream.listing import count_workstreams, list_workstreams


def _add(project: Path, feature: str, prefix: str = "feature") -> Path:
    worktree = project.parent / f"myapp--{feature}"
    git(project, "worktree", "add", "--quiet", "-b", f"{prefix}/{feature}", str(worktree), "main")
    return worktree


def test_empty_listing(project: Path) -> None:
    listing = list_workstreams(project, merge_target="main")

    assert listing.total == 0
    assert listing.ready == 0
    assert listing.main_branch == "main"
    assert listing.main_sha != "unknown"


def test_reports_merged_clean_and_ready(project: Path) -> None:
    _add(project, "done")
    dirty = _add(project, "dirty")
    (dirty / "wip.txt").write_text("wip\n", encoding="utf-8")
    ahead = _add(project, "ahead", prefix="fix")
    commit_file(ahead, "ahead.txt")

    listing = list_workstreams(project, merge_target="main")
    by_name = {ws.name: ws for ws in listing.workstreams}

    assert set(by_name) == {"done", "dirty", "ahead"}
    assert by_name["done"].merged and by_name["done"].clean
    assert by_name["done"].ready_to_clean
    assert by_name["dirty"].merged and not by_name["dirty"].clean
    assert not by_name["ahead"].merged
    assert by_name["ahead"].branch == "fix/ahead"
    assert listing.total == 3
    assert listing.ready == 1


def test_ignores_unrelated_worktrees(project: Path) -> None:
    other = project.parent / "scratch"
    git(project, "worktree", "add", "--quiet", "-b", "scratch", str(other), "main")
    _add(project, "tags")

    listing = list_workstreams(project, merge_target="main")

    assert [ws.name for ws in listing.workstreams] == ["tags"]
    assert count_workstreams(project) == 1


def test_missing_directory_is_reported(project: Path) -> None:
    worktree = _add(project, "gone")
    shutil.rmtree(worktree)

    listing = list_workstreams(project, merge_target="main")
    gone = listing.workstreams[0]

    assert gone.status == "missing"
    assert gone.clean is True


def test_to_dict(project: Path) -> None:
    _add(project, "tags")

    payload = list_workstreams(project, merge_target="main").to_dict()

    assert payload["total"] == 1
    assert payload["workstreams"][0]["name"] == "tags"
    assert payload["workstreams"][0]["status"] == "active"
    assert payload["workstreams"][0]["branch"] == "feature/tags"
