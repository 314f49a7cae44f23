"""Inspect the active workstreams of a project."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from workstream_cli.core import git_ops
from workstream_cli.core.paths import workstream_dir_prefix

__all__ = ["WorkstreamStatus", "WorkstreamListing", "list_workstreams", "count_workstreams"]


@dataclass(frozen=True)
class WorkstreamStatus:
    """Snapshot of one workstream worktree."""

    name: str
    branch: str | None
    directory: Path
    exists: bool
    merged: bool
    clean: bool

    @property
    def status(self) -> str:
        return "active" if self.exists else "missing"

    @property
    def ready_to_clean(self) -> bool:
        return self.merged and self.clean

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "branch": self.branch,
            "directory": str(self.directory),
            "status": self.status,
            "merged": self.merged,
            "clean": self.clean,
            "ready_to_clean": self.ready_to_clean,
        }


@dataclass
class WorkstreamListing:
    project_root: Path
    main_branch: str
    main_sha: str
    workstreams: list[WorkstreamStatus] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.workstreams)

    @property
    def ready(self) -> int:
        return sum(1 for ws in self.workstreams if ws.ready_to_clean)

    def to_dict(self) -> dict[str, object]:
        return {
            "project_root": str(self.project_root),
            "main_branch": self.main_branch,
            "main_sha": self.main_sha,
            "workstreams": [ws.to_dict() for ws in self.workstreams],
            "total": self.total,
            "ready": self.ready,
        }


def _workstream_entries(project_root: Path) -> list[tuple[str, git_ops.WorktreeEntry]]:
    prefix = workstream_dir_prefix(project_root)
    found: list[tuple[str, git_ops.WorktreeEntry]] = []
    for entry in git_ops.list_worktrees(project_root):
        dirname = entry.path.name
        if dirname.startswith(prefix) and len(dirname) > len(prefix):
            found.append((dirname[len(prefix):], entry))
    return found


def count_workstreams(project_root: Path) -> int:
    return len(_workstream_entries(project_root))


def list_workstreams(project_root: Path, merge_target: str) -> WorkstreamListing:
    """Collect status for every worktree named ``<project>--<feature>``.

    A missing directory counts as clean; a detached worktree is never merged.
    """
    listing = WorkstreamListing(
        project_root=project_root,
        main_branch=git_ops.current_branch(project_root) or merge_target,
        main_sha=git_ops.short_head(project_root) or "unknown",
    )
    for name, entry in _workstream_entries(project_root):
        exists = entry.path.is_dir()
        merged = bool(entry.branch) and git_ops.is_branch_merged(project_root, entry.branch, merge_target)
        clean = not (exists and git_ops.has_uncommitted_changes(entry.path))
        listing.workstreams.append(
            WorkstreamStatus(
                name=name,
                branch=entry.branch,
                directory=entry.path,
                exists=exists,
                merged=merged,
                clean=clean,
            )
        )
    return listing
