"""``workstream cleanup`` - remove worktree and delete branch."""

from __future__ import annotations

import typer

from workstream_cli.cli import StepTracker
from workstream_cli.cli.helpers import (
    console,
    exit_with_error,
    get_project_root_or_exit,
    load_config_or_exit,
    preflight_or_exit,
)
from workstream_cli.cli.ui import info, key_value_panel, warn
from workstream_cli.core.paths import workstream_dir_prefix
from workstream_cli.workstream import (
    WorkstreamError,
    check_cleanup,
    execute_cleanup,
    resolve_cleanup,
)


def cleanup(
    feature_name: str = typer.Argument(..., help="Name of the workstream to remove"),
    force: bool = typer.Option(False, "--force", help="Skip merge/clean checks"),
    delete_remote: bool = typer.Option(False, "--delete-remote", help="Also delete remote branch"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would happen without doing it"),
) -> None:
    """Clean up a workstream (remove worktree + delete branch).

    Examples:

        workstream cleanup tags

        workstream cleanup tags --delete-remote

        workstream cleanup tags --force --delete-remote

        workstream cleanup tags --dry-run
    """
    project_root = get_project_root_or_exit()
    config = load_config_or_exit(project_root)
    preflight = preflight_or_exit(project_root, "cleanup")

    if delete_remote and not preflight.has_origin:
        warn(console, "No origin remote; --delete-remote will be skipped")
        delete_remote = False

    try:
        plan = resolve_cleanup(project_root, feature_name, force=force, delete_remote=delete_remote)
    except WorkstreamError as exc:
        exit_with_error(exc)

    rows = [
        ("Feature", plan.feature),
        ("Branch", plan.branch or "<unknown>"),
        ("Worktree", str(plan.worktree)),
    ]
    if dry_run:
        rows.append(("Mode", "[yellow]DRY RUN - no changes will be made[/yellow]"))
    console.print()
    console.print(key_value_panel("Cleanup Workstream", rows))

    try:
        check_cleanup(project_root, plan, merge_target=config.base_branch)
    except WorkstreamError as exc:
        exit_with_error(exc)

    for message in plan.warnings:
        warn(console, message)

    if dry_run:
        console.print("Would perform:")
        for action in plan.actions():
            console.print(f"  - {action}")
        console.print()
        info(console, "Dry run complete. No changes made.")
        return

    tracker = StepTracker("Cleanup Workstream")
    try:
        result = execute_cleanup(project_root, plan, tracker=tracker)
    except WorkstreamError as exc:
        console.print(tracker.render())
        exit_with_error(exc)

    console.print(tracker.render())
    for message in result.warnings:
        if message not in plan.warnings:
            warn(console, message)

    summary = [("Removed", f"{workstream_dir_prefix(project_root)}{plan.feature}")]
    if plan.branch and result.deleted_branch:
        summary.append(("Branch", f"{plan.branch} (deleted)"))
    summary.append(("Remaining", f"{result.remaining} workstream(s)"))
    console.print()
    console.print(key_value_panel("Cleanup Complete", summary, border_style="green"))
