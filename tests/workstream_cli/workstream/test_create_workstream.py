"""Tests for creating workstreams against real git repositories."""

from __future__ import annotations

import shlex
import sys
from pathlib import Path

import pytest

from tests.git_helpers import git

from workstream_cli.cli import StepTracker
from workstream_cli.core import git_ops
from workstream_cli.core.config import InstallConfig, WorkstreamConfig
from workstream_cli.workstream.create import create_workstream, plan_create
from workstream_cli.workstream.errors import InvalidFeatureNameError, InvalidPrefixError, PreflightError


def _create(project: Path, feature: str, config: WorkstreamConfig | None = None, **kwargs):
    config = config or WorkstreamConfig()
    plan = plan_create(
        project,
        feature,
        config=config,
        base=kwargs.pop("base", None),
        prefix=kwargs.pop("prefix", None),
    )
    kwargs.setdefault("install", False)
    return create_workstream(project, plan, config=config, **kwargs)


class TestPlanCreate:
    def test_defaults(self, tmp_path: Path):
        plan = plan_create(tmp_path / "myapp", "tags", config=WorkstreamConfig())

        assert plan.branch == "feature/tags"
        assert plan.worktree == tmp_path / "myapp--tags"
        assert plan.base_branch == "main"

    def test_flags_override_config(self, tmp_path: Path):
        config = WorkstreamConfig(base_branch="develop", default_prefix="fix")

        plan = plan_create(tmp_path / "myapp", "db", config=config, base="trunk", prefix="refactor")

        assert plan.branch == "refactor/db"
        assert plan.base_branch == "trunk"

    def test_config_defaults_used(self, tmp_path: Path):
        config = WorkstreamConfig(base_branch="develop", default_prefix="fix")

        plan = plan_create(tmp_path / "myapp", "db", config=config)

        assert plan.branch == "fix/db"
        assert plan.base_branch == "develop"

    def test_rejects_bad_name_and_prefix(self, tmp_path: Path):
        with pytest.raises(InvalidFeatureNameError):
            plan_create(tmp_path, "bad_name", config=WorkstreamConfig())
        with pytest.raises(InvalidPrefixError):
            plan_create(tmp_path, "good", config=WorkstreamConfig(), prefix="chore")


def test_creates_from_origin_base(project_with_origin: Path) -> None:
    result = _create(project_with_origin, "tags")

    worktree = project_with_origin.parent / "myapp--tags"
    assert result.start_point == "origin/main"
    assert result.fetched is True
    assert not result.reused_remote
    assert worktree.is_dir()
    assert git(worktree, "rev-parse", "--abbrev-ref", "HEAD") == "feature/tags"
    assert git_ops.branch_for_worktree(project_with_origin, worktree) == "feature/tags"


def test_falls_back_to_local_base_without_origin(project: Path) -> None:
    result = _create(project, "tags", fetch=False)

    assert result.start_point == "main"
    assert any("Using local 'main'" in w for w in result.warnings)
    assert (project.parent / "myapp--tags").is_dir()


def test_fetch_failure_is_only_a_warning(project: Path) -> None:
    tracker = StepTracker("t")

    result = _create(project, "tags", fetch=True, tracker=tracker)

    assert "Could not fetch from origin (offline?)" in result.warnings
    assert tracker.status_of("fetch") == "warning"
    assert tracker.status_of("worktree") == "done"


def test_refuses_existing_directory(project: Path) -> None:
    (project.parent / "myapp--tags").mkdir()

    with pytest.raises(PreflightError, match="Directory already exists") as excinfo:
        _create(project, "tags", fetch=False)

    assert "workstream cleanup tags --force" in excinfo.value.hint
    assert not git_ops.local_branch_exists(project, "feature/tags")


def test_refuses_existing_local_branch(project: Path) -> None:
    git(project, "branch", "feature/tags")

    with pytest.raises(PreflightError, match="already exists") as excinfo:
        _create(project, "tags", fetch=False)

    assert "git branch -D feature/tags" in excinfo.value.hint
    assert not (project.parent / "myapp--tags").exists()


def test_refuses_missing_base(project: Path) -> None:
    with pytest.raises(PreflightError, match="Base branch 'develop' not found"):
        _create(project, "tags", base="develop", fetch=False)

    assert not (project.parent / "myapp--tags").exists()


def test_reuses_existing_remote_branch(project_with_origin: Path) -> None:
    git(project_with_origin, "checkout", "--quiet", "-b", "feature/shared")
    (project_with_origin / "shared.txt").write_text("remote work\n", encoding="utf-8")
    git(project_with_origin, "add", "shared.txt")
    git(project_with_origin, "commit", "--quiet", "-m", "Shared work")
    git(project_with_origin, "push", "--quiet", "origin", "feature/shared")
    git(project_with_origin, "checkout", "--quiet", "main")
    git(project_with_origin, "branch", "-D", "feature/shared")

    result = _create(project_with_origin, "shared")

    worktree = project_with_origin.parent / "myapp--shared"
    assert result.reused_remote is True
    assert result.start_point == "origin/feature/shared"
    assert (worktree / "shared.txt").read_text(encoding="utf-8") == "remote work\n"


def test_copies_local_settings(project: Path) -> None:
    settings = project / ".claude" / "settings.local.json"
    settings.parent.mkdir()
    settings.write_text('{"permissions": {}}', encoding="utf-8")

    result = _create(project, "tags", fetch=False)

    copied = project.parent / "myapp--tags" / ".claude" / "settings.local.json"
    assert result.copied_files == [".claude/settings.local.json"]
    assert copied.read_text(encoding="utf-8") == '{"permissions": {}}'


def _python_command(code: str) -> str:
    return f"{shlex.quote(sys.executable)} -c {shlex.quote(code)}"


def test_install_first_success_wins(project: Path) -> None:
    (project / "package.json").write_text("{}", encoding="utf-8")
    git(project, "add", "package.json")
    git(project, "commit", "--quiet", "-m", "Add package.json")
    failing = _python_command("import sys; sys.exit(1)")
    succeeding = _python_command("open('installed.txt', 'w').write('ok')")
    config = WorkstreamConfig(install=InstallConfig(commands=[failing, succeeding]))

    result = _create(project, "tags", config=config, fetch=False, install=True)

    assert result.install is not None
    assert result.install.command == succeeding
    assert result.install.attempted == [failing, succeeding]
    assert (project.parent / "myapp--tags" / "installed.txt").exists()


def test_install_failure_is_a_warning(project: Path) -> None:
    (project / "package.json").write_text("{}", encoding="utf-8")
    git(project, "add", "package.json")
    git(project, "commit", "--quiet", "-m", "Add package.json")
    config = WorkstreamConfig(install=InstallConfig(commands=["definitely-not-a-real-tool install"]))

    result = _create(project, "tags", config=config, fetch=False, install=True)

    assert result.install is not None
    assert not result.install.succeeded
    assert any("install" in w.lower() for w in result.warnings)


def test_install_skipped_without_marker(project: Path) -> None:
    result = _create(project, "tags", fetch=False, install=True)

    assert result.install is not None
    assert result.install.skipped_reason == "no package.json"
    assert result.install.attempted == []
