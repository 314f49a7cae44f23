#!/usr/bin/env python3
"""
Workstream CLI - git worktree bookkeeping for parallel units of work.

Usage:
    workstream create <feature-name> [--base <branch>] [--prefix feature|fix|refactor] [--no-install]
    workstream list [--json]
    workstream cleanup <feature-name> [--force] [--delete-remote] [--dry-run]
    workstream hook file-size [--max-lines N] < event.json
"""

import logging
from importlib.metadata import PackageNotFoundError, version as _pkg_version

import typer
from rich.logging import RichHandler

from workstream_cli.cli.commands import cleanup, create, hook_app, list_command
from workstream_cli.cli.helpers import console, err_console

try:
    __version__ = _pkg_version("workstream-cli")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"

app = typer.Typer(
    name="workstream",
    help="Create, list and clean up git worktree workstreams.",
    add_completion=False,
    no_args_is_help=True,
)

app.command("create")(create)
app.command("list")(list_command)
app.command("cleanup")(cleanup)
app.add_typer(hook_app, name="hook")


def configure_logging(verbose: bool) -> None:
    """Send library logging to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=verbose)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"workstream {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Git worktree workstreams: one branch + worktree + install per unit of work."""
    configure_logging(verbose)


def main():
    app()


if __name__ == "__main__":
    main()
