"""Workstream lifecycle: create, list and clean up branch + worktree bundles."""

from .cleanup import (
    CleanupPlan,
    CleanupResult,
    check_cleanup,
    execute_cleanup,
    plan_cleanup,
    resolve_cleanup,
)
from .create import CreatePlan, CreateResult, create_workstream, plan_create
from .errors import (
    GitCommandError,
    InvalidFeatureNameError,
    InvalidPrefixError,
    PreflightError,
    WorkstreamError,
)
from .listing import WorkstreamListing, WorkstreamStatus, list_workstreams

__all__ = [
    "CleanupPlan",
    "CleanupResult",
    "check_cleanup",
    "execute_cleanup",
    "plan_cleanup",
    "resolve_cleanup",
    "CreatePlan",
    "CreateResult",
    "create_workstream",
    "plan_create",
    "GitCommandError",
    "InvalidFeatureNameError",
    "InvalidPrefixError",
    "PreflightError",
    "WorkstreamError",
    "WorkstreamListing",
    "WorkstreamStatus",
    "list_workstreams",
]
