"""Create a workstream: branch + sibling worktree + dependency install."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from workstream_cli.cli import StepTracker
from workstream_cli.core import git_ops
from workstream_cli.core.config import WorkstreamConfig
from workstream_cli.core.constants import ORIGIN
from workstream_cli.core.paths import workstream_dir
from workstream_cli.workstream.errors import GitCommandError, PreflightError
from workstream_cli.workstream.install import InstallOutcome, install_dependencies
from workstream_cli.workstream.naming import branch_name, validate_feature_name, validate_prefix

logger = logging.getLogger(__name__)

__all__ = ["CreatePlan", "CreateResult", "plan_create", "create_workstream"]


@dataclass(frozen=True)
class CreatePlan:
    feature: str
    branch: str
    worktree: Path
    base_branch: str


@dataclass
class CreateResult:
    """Result of creating a workstream."""

    plan: CreatePlan
    start_point: str
    reused_remote: bool = False
    fetched: bool = False
    copied_files: list[str] = field(default_factory=list)
    install: InstallOutcome | None = None
    warnings: list[str] = field(default_factory=list)


def plan_create(
    project_root: Path,
    feature: str,
    *,
    config: WorkstreamConfig,
    base: str | None = None,
    prefix: str | None = None,
) -> CreatePlan:
    """Validate inputs and compute branch/worktree names without touching git."""
    validate_feature_name(feature)
    prefix = validate_prefix(prefix or config.default_prefix)
    return CreatePlan(
        feature=feature,
        branch=branch_name(prefix, feature),
        worktree=workstream_dir(project_root, feature),
        base_branch=base or config.base_branch,
    )


def _check_preconditions(project_root: Path, plan: CreatePlan) -> None:
    if plan.worktree.exists():
        raise PreflightError(
            f"Directory already exists: {plan.worktree}",
            hint=f"Use 'workstream cleanup {plan.feature} --force' to remove it first.",
        )
    if git_ops.local_branch_exists(project_root, plan.branch):
        raise PreflightError(
            f"Local branch '{plan.branch}' already exists.",
            hint=f"Delete it with 'git branch -D {plan.branch}' or choose a different name.",
        )


def _copy_local_files(project_root: Path, worktree: Path, paths: list[str]) -> list[str]:
    copied: list[str] = []
    for relative in paths:
        source = project_root / relative
        if not source.is_file():
            continue
        dest = worktree / relative
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, dest)
        copied.append(relative)
    return copied


def create_workstream(
    project_root: Path,
    plan: CreatePlan,
    *,
    config: WorkstreamConfig,
    install: bool = True,
    fetch: bool = True,
    tracker: StepTracker | None = None,
) -> CreateResult:
    """Create the branch and worktree described by *plan*.

    All checks run before git is asked to change anything; a failing check
    raises ``PreflightError``. Fetch and install failures only add warnings.
    """
    tracker = tracker or StepTracker("Create Workstream")
    tracker.add("checks", "Pre-flight checks")
    tracker.add("fetch", "Fetch origin")
    tracker.add("worktree", "Create worktree")
    tracker.add("copy", "Copy local settings")
    tracker.add("install", "Install dependencies")

    tracker.start("checks")
    try:
        _check_preconditions(project_root, plan)
    except PreflightError:
        tracker.error("checks")
        raise
    tracker.complete("checks")

    warnings: list[str] = []
    fetched = False
    if fetch:
        tracker.start("fetch")
        fetched = git_ops.fetch_origin(project_root)
        if fetched:
            tracker.complete("fetch")
        else:
            warnings.append("Could not fetch from origin (offline?)")
            tracker.warn("fetch", "offline?")
    else:
        tracker.skip("fetch", "no origin")

    has_remote_base = git_ops.remote_branch_exists(project_root, plan.base_branch)
    if not has_remote_base and not git_ops.local_branch_exists(project_root, plan.base_branch):
        tracker.error("worktree", "base branch missing")
        raise PreflightError(f"Base branch '{plan.base_branch}' not found locally or on origin.")

    reused_remote = git_ops.remote_branch_exists(project_root, plan.branch)
    if reused_remote:
        warnings.append(f"Remote branch '{ORIGIN}/{plan.branch}' already exists.")
        start_point = f"{ORIGIN}/{plan.branch}"
    elif has_remote_base:
        start_point = f"{ORIGIN}/{plan.base_branch}"
    else:
        start_point = plan.base_branch
        warnings.append(f"Using local '{plan.base_branch}' (no remote tracking branch found)")

    tracker.start("worktree", f"from {start_point}")
    logger.info("Creating %s at %s from %s", plan.branch, plan.worktree, start_point)
    added = git_ops.add_worktree(project_root, plan.worktree, plan.branch, start_point)
    if not added.ok:
        tracker.error("worktree", "git worktree add failed")
        raise GitCommandError(
            f"Could not create worktree at {plan.worktree}",
            stderr=added.stderr,
            hint=added.stderr.strip() or None,
        )
    tracker.complete("worktree", str(plan.worktree))

    result = CreateResult(
        plan=plan,
        start_point=start_point,
        reused_remote=reused_remote,
        fetched=fetched,
        warnings=warnings,
    )

    result.copied_files = _copy_local_files(project_root, plan.worktree, config.copy_files)
    if result.copied_files:
        tracker.complete("copy", ", ".join(result.copied_files))
    else:
        tracker.skip("copy", "nothing to copy")

    if install:
        tracker.start("install")
        result.install = install_dependencies(plan.worktree, config.install)
        if result.install.succeeded:
            tracker.complete("install", result.install.command or "")
        elif result.install.skipped:
            tracker.skip("install", result.install.skipped_reason or "")
        else:
            warnings.append("Dependency install failed; you may need to install dependencies manually")
            tracker.warn("install", "failed")
    else:
        tracker.skip("install", "--no-install")

    return result
