"""Thin wrappers around the git executable for worktree bookkeeping.

Every helper runs git with captured text output and returns a normalized
result instead of raising on a non-zero exit code, so callers decide what a
failure means for their workflow.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from workstream_cli.core.constants import ORIGIN

logger = logging.getLogger(__name__)

__all__ = [
    "GitCommandResult",
    "WorktreeEntry",
    "run_git",
    "ref_exists",
    "local_branch_exists",
    "remote_branch_exists",
    "fetch_origin",
    "list_worktrees",
    "parse_worktree_porcelain",
    "branch_for_worktree",
    "is_branch_merged",
    "has_uncommitted_changes",
    "rev_parse",
    "current_branch",
    "short_head",
    "add_worktree",
    "remove_worktree",
    "prune_worktrees",
    "delete_branch",
    "delete_remote_branch",
]


@dataclass
class GitCommandResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class WorktreeEntry:
    """One record from ``git worktree list --porcelain``."""

    path: Path
    head: str | None = None
    branch: str | None = None
    detached: bool = False
    bare: bool = False
    prunable: bool = False


def run_git(repo: Path, args: list[str], timeout: int = 60) -> GitCommandResult:
    """Run git command and normalize failure shape for deterministic handling."""
    logger.debug("git %s (cwd=%s)", " ".join(args), repo)
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=str(repo),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout,
        )
        return GitCommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
    except FileNotFoundError:
        return GitCommandResult(
            returncode=127,
            stdout="",
            stderr="git executable not found on PATH",
        )
    except subprocess.TimeoutExpired:
        return GitCommandResult(
            returncode=124,
            stdout="",
            stderr=f"git command timed out: git {' '.join(args)}",
        )


def ref_exists(repo: Path, ref: str) -> bool:
    return run_git(repo, ["show-ref", "--verify", "--quiet", ref]).ok


def local_branch_exists(repo: Path, branch: str) -> bool:
    return ref_exists(repo, f"refs/heads/{branch}")


def remote_branch_exists(repo: Path, branch: str, remote: str = ORIGIN) -> bool:
    return ref_exists(repo, f"refs/remotes/{remote}/{branch}")


def fetch_origin(repo: Path, remote: str = ORIGIN) -> bool:
    """Fetch quietly from *remote*. Returns False when offline or missing."""
    result = run_git(repo, ["fetch", remote, "--quiet"], timeout=120)
    if not result.ok:
        logger.debug("fetch from %s failed: %s", remote, result.stderr.strip())
    return result.ok


def parse_worktree_porcelain(text: str) -> list[WorktreeEntry]:
    """Parse ``git worktree list --porcelain`` output into entries.

    Records are separated by blank lines. Each record starts with a
    ``worktree <path>`` line followed by optional attribute lines.
    """
    entries: list[WorktreeEntry] = []
    current: dict[str, object] | None = None

    def flush() -> None:
        if current is not None:
            entries.append(WorktreeEntry(**current))  # type: ignore[arg-type]

    for raw_line in text.splitlines():
        line = raw_line.rstrip("\n")
        if not line.strip():
            flush()
            current = None
            continue
        key, _, value = line.partition(" ")
        if key == "worktree":
            flush()
            current = {"path": Path(value)}
            continue
        if current is None:
            continue
        if key == "HEAD":
            current["head"] = value
        elif key == "branch":
            current["branch"] = value.removeprefix("refs/heads/")
        elif key == "detached":
            current["detached"] = True
        elif key == "bare":
            current["bare"] = True
        elif key == "prunable":
            current["prunable"] = True
    flush()
    return entries


def list_worktrees(repo: Path) -> list[WorktreeEntry]:
    result = run_git(repo, ["worktree", "list", "--porcelain"])
    if not result.ok:
        logger.warning("Unable to list worktrees: %s", result.stderr.strip())
        return []
    return parse_worktree_porcelain(result.stdout)


def _same_path(left: Path, right: Path) -> bool:
    try:
        return left.resolve() == right.resolve()
    except OSError:
        return str(left) == str(right)


def branch_for_worktree(repo: Path, worktree_path: Path) -> str | None:
    """Return the branch checked out in the worktree registered at *worktree_path*."""
    for entry in list_worktrees(repo):
        if _same_path(entry.path, worktree_path):
            return entry.branch
    return None


def is_branch_merged(repo: Path, branch: str, into: str) -> bool:
    """Return True when *branch* is listed by ``git branch --merged <into>``."""
    result = run_git(repo, ["branch", "--merged", into])
    if not result.ok:
        return False
    for line in result.stdout.splitlines():
        # "*" marks the current branch, "+" a branch checked out in another worktree
        name = line.strip().lstrip("*+").strip()
        if name == branch:
            return True
    return False


def has_uncommitted_changes(path: Path) -> bool:
    result = run_git(path, ["status", "--porcelain"])
    return result.ok and bool(result.stdout.strip())


def rev_parse(repo: Path, ref: str) -> str | None:
    result = run_git(repo, ["rev-parse", "--verify", "--quiet", ref])
    sha = result.stdout.strip()
    return sha if result.ok and sha else None


def current_branch(repo: Path) -> str | None:
    result = run_git(repo, ["rev-parse", "--abbrev-ref", "HEAD"])
    branch = result.stdout.strip()
    return branch if result.ok and branch else None


def short_head(repo: Path) -> str | None:
    result = run_git(repo, ["rev-parse", "--short", "HEAD"])
    sha = result.stdout.strip()
    return sha if result.ok and sha else None


def add_worktree(repo: Path, path: Path, branch: str, start_point: str) -> GitCommandResult:
    """Create *branch* at *start_point* and check it out in a new worktree at *path*."""
    return run_git(repo, ["worktree", "add", "-b", branch, str(path), start_point], timeout=300)


def remove_worktree(repo: Path, path: Path, *, force: bool = False) -> GitCommandResult:
    args = ["worktree", "remove", str(path)]
    if force:
        args.append("--force")
    return run_git(repo, args)


def prune_worktrees(repo: Path) -> GitCommandResult:
    return run_git(repo, ["worktree", "prune"])


def delete_branch(repo: Path, branch: str, *, force: bool = False) -> GitCommandResult:
    return run_git(repo, ["branch", "-D" if force else "-d", branch])


def delete_remote_branch(repo: Path, branch: str, remote: str = ORIGIN) -> GitCommandResult:
    return run_git(repo, ["push", remote, "--delete", branch], timeout=120)
