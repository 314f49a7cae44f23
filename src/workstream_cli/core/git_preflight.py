"""Git checks run before every workstream command.

A missing ``origin`` is only a warning: workstreams work in a local-only
repository, the fetch and remote-branch steps are simply skipped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import shlex

from workstream_cli.core.constants import ORIGIN, PROJECT_ROOT_ENV_VAR
from workstream_cli.core.git_ops import run_git

__all__ = [
    "GitPreflightIssue",
    "GitPreflightResult",
    "run_git_preflight",
]

MISSING_ORIGIN = "MISSING_ORIGIN_REMOTE"


@dataclass
class GitPreflightIssue:
    code: str
    message: str
    remediation: str
    command: str | None = None


@dataclass
class GitPreflightResult:
    repo_root: Path
    errors: list[GitPreflightIssue] = field(default_factory=list)
    warnings: list[GitPreflightIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def has_origin(self) -> bool:
        return all(issue.code != MISSING_ORIGIN for issue in self.warnings)

    @property
    def first_error(self) -> GitPreflightIssue | None:
        return self.errors[0] if self.errors else None


def _stderr_issue(root: Path, stderr: str, *, code: str, fallback: str, command: str) -> GitPreflightIssue:
    text = stderr.lower()
    if "dubious ownership" in text or "safe.directory" in text:
        return GitPreflightIssue(
            code="UNTRUSTED_REPOSITORY",
            message="Git refuses to work in this repository (safe.directory).",
            remediation="Mark the repository as trusted for this machine.",
            command=f"git config --global --add safe.directory {shlex.quote(str(root))}",
        )
    detail = next((line.strip() for line in stderr.splitlines() if line.strip()), fallback)
    return GitPreflightIssue(
        code=code,
        message=detail,
        remediation=f"Run from inside the project checkout or set {PROJECT_ROOT_ENV_VAR}.",
        command=command,
    )


def run_git_preflight(repo_root: Path) -> GitPreflightResult:
    """Check the repository can host worktrees and whether origin exists."""
    root = repo_root.resolve()
    result = GitPreflightResult(repo_root=root)
    quoted = shlex.quote(str(root))

    inside = run_git(root, ["rev-parse", "--is-inside-work-tree"])
    if not inside.ok or inside.stdout.strip() != "true":
        result.errors.append(
            _stderr_issue(
                root,
                inside.stderr,
                code="NOT_A_GIT_REPOSITORY",
                fallback="Not a git repository.",
                command=f"cd {quoted} && git status",
            )
        )
        return result

    listed = run_git(root, ["worktree", "list", "--porcelain"])
    if not listed.ok:
        result.errors.append(
            _stderr_issue(
                root,
                listed.stderr,
                code="WORKTREE_LIST_FAILED",
                fallback="Unable to list git worktrees.",
                command=f"git -C {quoted} worktree list --porcelain",
            )
        )
        return result

    if not run_git(root, ["remote", "get-url", ORIGIN]).ok:
        result.warnings.append(
            GitPreflightIssue(
                code=MISSING_ORIGIN,
                message=f"No '{ORIGIN}' remote; fetch and remote branch steps will be skipped.",
                remediation=f"Add {ORIGIN} if the workstreams should sync with a remote.",
                command=f"git -C {quoted} remote add {ORIGIN} <url>",
            )
        )
    return result
