"""Project root discovery and workstream directory naming."""

from __future__ import annotations

import os
from pathlib import Path

from workstream_cli.core.constants import PROJECT_ROOT_ENV_VAR, WORKSTREAM_SEPARATOR
from workstream_cli.core.git_ops import run_git

__all__ = [
    "locate_project_root",
    "workstream_dir",
    "workstream_dir_prefix",
    "feature_from_dir",
]


def locate_project_root(start: Path | None = None) -> Path | None:
    """Return the primary checkout root for *start*, or None outside git.

    Resolution order:
    1. ``WORKSTREAM_PROJECT_ROOT`` environment variable
    2. The directory holding the repository's common ``.git`` directory, so a
       linked worktree resolves to its primary checkout
    3. ``git rev-parse --show-toplevel``
    """
    if env_root := os.environ.get(PROJECT_ROOT_ENV_VAR):
        return Path(env_root).resolve()

    cwd = (start or Path.cwd()).resolve()
    if not cwd.is_dir():
        return None

    common = run_git(cwd, ["rev-parse", "--git-common-dir"])
    if common.ok and common.stdout.strip():
        common_dir = Path(common.stdout.strip())
        if not common_dir.is_absolute():
            common_dir = (cwd / common_dir).resolve()
        if common_dir.name == ".git":
            return common_dir.parent

    toplevel = run_git(cwd, ["rev-parse", "--show-toplevel"])
    if toplevel.ok and toplevel.stdout.strip():
        return Path(toplevel.stdout.strip()).resolve()
    return None


def workstream_dir_prefix(project_root: Path) -> str:
    """Return ``<project-name>--``, the marker shared by all workstream directories."""
    return f"{project_root.name}{WORKSTREAM_SEPARATOR}"


def workstream_dir(project_root: Path, feature_name: str) -> Path:
    """Return ``<parent>/<project-name>--<feature-name>`` for *feature_name*."""
    return project_root.parent / f"{workstream_dir_prefix(project_root)}{feature_name}"


def feature_from_dir(project_name: str, path: Path | str) -> str | None:
    """Extract the feature name from a workstream directory path."""
    marker = f"{project_name}{WORKSTREAM_SEPARATOR}"
    text = str(path)
    if marker not in text:
        return None
    name = text.rsplit(marker, 1)[1]
    return name or None
