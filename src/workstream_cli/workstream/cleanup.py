"""Remove a workstream: worktree, local branch and optionally the remote branch.

Cleanup is split into a read-only planning phase, which runs every
pre-flight check and raises before anything is mutated, and an execution
phase. ``--dry-run`` stops after planning.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from workstream_cli.cli import StepTracker
from workstream_cli.core import git_ops
from workstream_cli.core.constants import ORIGIN
from workstream_cli.core.paths import workstream_dir
from workstream_cli.workstream.errors import GitCommandError, PreflightError
from workstream_cli.workstream.listing import count_workstreams
from workstream_cli.workstream.naming import candidate_branches, validate_feature_name

logger = logging.getLogger(__name__)

__all__ = [
    "CleanupPlan",
    "CleanupResult",
    "detect_branch",
    "resolve_cleanup",
    "check_cleanup",
    "plan_cleanup",
    "execute_cleanup",
]


@dataclass
class CleanupPlan:
    """Everything cleanup intends to do, computed before any mutation."""

    feature: str
    worktree: Path
    branch: str | None
    force: bool = False
    delete_remote: bool = False
    warnings: list[str] = field(default_factory=list)

    @property
    def worktree_exists(self) -> bool:
        return self.worktree.is_dir()

    def actions(self) -> list[str]:
        steps: list[str] = []
        if self.worktree_exists:
            steps.append(f"Remove worktree: {self.worktree}")
        steps.append("Prune worktree references")
        if self.branch:
            steps.append(f"Delete local branch: {self.branch}")
            if self.delete_remote:
                steps.append(f"Delete remote branch: {ORIGIN}/{self.branch}")
        return steps


@dataclass
class CleanupResult:
    plan: CleanupPlan
    removed_worktree: bool = False
    deleted_branch: bool = False
    deleted_remote: bool = False
    remaining: int = 0
    warnings: list[str] = field(default_factory=list)


def detect_branch(project_root: Path, feature: str, worktree: Path) -> str | None:
    """Find the workstream branch from its registered worktree, then by prefix."""
    if branch := git_ops.branch_for_worktree(project_root, worktree):
        return branch
    for candidate in candidate_branches(feature):
        if git_ops.local_branch_exists(project_root, candidate):
            return candidate
    return None


def resolve_cleanup(
    project_root: Path,
    feature: str,
    *,
    force: bool = False,
    delete_remote: bool = False,
) -> CleanupPlan:
    """Locate the workstream's directory and branch.

    An undetectable branch is refused unless ``force`` is set.
    """
    validate_feature_name(feature)
    worktree = workstream_dir(project_root, feature)
    branch = detect_branch(project_root, feature, worktree)
    plan = CleanupPlan(
        feature=feature,
        worktree=worktree,
        branch=branch,
        force=force,
        delete_remote=delete_remote,
    )
    if branch is None:
        if not force:
            raise PreflightError(
                f"Could not detect branch for workstream '{feature}'.",
                hint="Use --force to clean up the directory anyway.",
            )
        plan.warnings.append(f"Could not detect branch for '{feature}'")
    return plan


def check_cleanup(project_root: Path, plan: CleanupPlan, *, merge_target: str) -> CleanupPlan:
    """Refuse a dirty worktree or an unmerged branch; note unpushed work.

    Nothing is checked under ``force``, for an unknown branch, or when the
    worktree directory is already gone.
    """
    branch = plan.branch
    if branch is None or plan.force or not plan.worktree_exists:
        return plan

    if git_ops.has_uncommitted_changes(plan.worktree):
        raise PreflightError(
            "Worktree has uncommitted changes.",
            hint="Commit or stash them, or use --force to discard.",
        )

    local_sha = git_ops.rev_parse(project_root, f"refs/heads/{branch}")
    remote_sha = git_ops.rev_parse(project_root, f"refs/remotes/{ORIGIN}/{branch}")
    if local_sha and remote_sha and local_sha != remote_sha:
        plan.warnings.append("Branch has unpushed commits")
    elif local_sha and not remote_sha:
        plan.warnings.append(f"Branch has never been pushed to {ORIGIN}")

    if not git_ops.is_branch_merged(project_root, branch, merge_target):
        raise PreflightError(
            f"Branch '{branch}' is not merged into {merge_target}.",
            hint="Merge first, or use --force to delete anyway.",
        )
    return plan


def plan_cleanup(
    project_root: Path,
    feature: str,
    *,
    merge_target: str,
    force: bool = False,
    delete_remote: bool = False,
) -> CleanupPlan:
    """Resolve the workstream and run every pre-flight check on it."""
    plan = resolve_cleanup(project_root, feature, force=force, delete_remote=delete_remote)
    return check_cleanup(project_root, plan, merge_target=merge_target)


def _remove_worktree(project_root: Path, plan: CleanupPlan) -> None:
    removed = git_ops.remove_worktree(project_root, plan.worktree, force=plan.force)
    if removed.ok:
        return
    if not plan.force:
        raise GitCommandError(
            "Could not remove worktree.",
            stderr=removed.stderr,
            hint="Use --force to override.",
        )
    logger.warning("git worktree remove failed, deleting %s directly", plan.worktree)
    try:
        shutil.rmtree(plan.worktree)
    except OSError as exc:
        raise GitCommandError("Could not remove worktree directory.", hint=str(exc)) from exc


def execute_cleanup(
    project_root: Path,
    plan: CleanupPlan,
    *,
    tracker: StepTracker | None = None,
) -> CleanupResult:
    """Carry out *plan*. Pre-flight checks must already have passed."""
    tracker = tracker or StepTracker("Cleanup Workstream")
    tracker.add("worktree", "Remove worktree")
    tracker.add("prune", "Prune worktree references")
    tracker.add("branch", "Delete local branch")
    if plan.delete_remote:
        tracker.add("remote", "Delete remote branch")

    result = CleanupResult(plan=plan, warnings=list(plan.warnings))

    if plan.worktree_exists:
        tracker.start("worktree")
        try:
            _remove_worktree(project_root, plan)
        except GitCommandError:
            tracker.error("worktree")
            raise
        result.removed_worktree = True
        tracker.complete("worktree", str(plan.worktree))
    else:
        result.warnings.append(f"Worktree directory not found: {plan.worktree}")
        tracker.warn("worktree", "directory not found")

    tracker.start("prune")
    git_ops.prune_worktrees(project_root)
    tracker.complete("prune")

    if plan.branch is None:
        tracker.skip("branch", "unknown branch")
    elif git_ops.local_branch_exists(project_root, plan.branch):
        tracker.start("branch", plan.branch)
        deleted = git_ops.delete_branch(project_root, plan.branch, force=plan.force)
        if not deleted.ok:
            tracker.error("branch", plan.branch)
            raise GitCommandError(
                f"Could not delete local branch '{plan.branch}'.",
                stderr=deleted.stderr,
                hint=deleted.stderr.strip() or None,
            )
        result.deleted_branch = True
        tracker.complete("branch", plan.branch)
    else:
        result.warnings.append(f"Local branch '{plan.branch}' not found")
        tracker.warn("branch", "not found")

    if plan.delete_remote and plan.branch:
        if git_ops.remote_branch_exists(project_root, plan.branch):
            tracker.start("remote")
            pushed = git_ops.delete_remote_branch(project_root, plan.branch)
            if pushed.ok:
                result.deleted_remote = True
                tracker.complete("remote", f"{ORIGIN}/{plan.branch}")
            else:
                result.warnings.append("Could not delete remote branch")
                tracker.warn("remote", "push --delete failed")
        else:
            result.warnings.append(f"Remote branch '{ORIGIN}/{plan.branch}' not found")
            tracker.warn("remote", "not found")
    elif plan.delete_remote:
        tracker.skip("remote", "unknown branch")

    result.remaining = count_workstreams(project_root)
    return result
