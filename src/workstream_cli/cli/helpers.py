"""Shared console and project-resolution helpers for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console

from workstream_cli.cli.ui import fail, warn
from workstream_cli.core.config import WorkstreamConfig, WorkstreamConfigError, load_config
from workstream_cli.core.git_preflight import GitPreflightResult, run_git_preflight
from workstream_cli.core.paths import locate_project_root
from workstream_cli.workstream.errors import WorkstreamError

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def get_project_root_or_exit(start: Path | None = None) -> Path:
    """Resolve the primary checkout root or exit with a user-facing error."""
    project_root = locate_project_root(start)
    if project_root is None:
        fail(console, "Not inside a git repository.", "Run this command from your project checkout.")
        raise typer.Exit(1)
    return project_root


def load_config_or_exit(project_root: Path) -> WorkstreamConfig:
    try:
        return load_config(project_root)
    except WorkstreamConfigError as exc:
        fail(console, f"Error: {exc}")
        raise typer.Exit(1)


def _preflight_payload(preflight: GitPreflightResult, command_name: str) -> dict[str, object]:
    issue = preflight.first_error
    return {
        "error_code": "GIT_PREFLIGHT_FAILED",
        "command": command_name,
        "repo_root": str(preflight.repo_root),
        "error": issue.message if issue else "Git preflight failed.",
        "code": issue.code if issue else None,
        "remediation": issue.remediation if issue else None,
        "remediation_command": issue.command if issue else None,
    }


def preflight_or_exit(project_root: Path, command_name: str, *, json_output: bool = False) -> GitPreflightResult:
    """Run git preflight checks; print issues and exit 1 when any error is found."""
    preflight = run_git_preflight(project_root)
    if not preflight.passed:
        if json_output:
            typer.echo(json.dumps(_preflight_payload(preflight, command_name), indent=2))
        else:
            for issue in preflight.errors:
                fail(console, issue.message, issue.remediation)
                if issue.command:
                    console.print(f"        [dim]$ {issue.command}[/dim]")
        raise typer.Exit(1)
    if not json_output:
        for issue in preflight.warnings:
            warn(console, issue.message)
    return preflight


def exit_with_error(exc: WorkstreamError) -> NoReturn:
    fail(console, exc.message, exc.hint)
    raise typer.Exit(1)


__all__ = [
    "console",
    "err_console",
    "get_project_root_or_exit",
    "load_config_or_exit",
    "preflight_or_exit",
    "exit_with_error",
]
