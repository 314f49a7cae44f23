"""``workstream create`` - branch + worktree + dependency install."""

from __future__ import annotations

from typing import Optional

import typer

from workstream_cli.cli import StepTracker
from workstream_cli.cli.helpers import (
    console,
    exit_with_error,
    get_project_root_or_exit,
    load_config_or_exit,
    preflight_or_exit,
)
from workstream_cli.cli.ui import key_value_panel, warn
from workstream_cli.workstream import WorkstreamError, create_workstream, plan_create


def create(
    feature_name: str = typer.Argument(..., help="Name for the workstream (alphanumeric + hyphens)"),
    base: Optional[str] = typer.Option(None, "--base", help="Base branch (default: main)"),
    prefix: Optional[str] = typer.Option(
        None, "--prefix", help="Branch prefix: feature|fix|refactor (default: feature)"
    ),
    no_install: bool = typer.Option(False, "--no-install", help="Skip dependency install"),
) -> None:
    """Create a new workstream (branch + worktree + dependency install).

    Examples:

        workstream create tags

        workstream create auth-fix --prefix fix

        workstream create refactor-db --prefix refactor --base develop
    """
    project_root = get_project_root_or_exit()
    config = load_config_or_exit(project_root)

    try:
        plan = plan_create(project_root, feature_name, config=config, base=base, prefix=prefix)
    except WorkstreamError as exc:
        exit_with_error(exc)

    console.print()
    console.print(
        key_value_panel(
            "Create Workstream",
            [
                ("Feature", plan.feature),
                ("Branch", plan.branch),
                ("Worktree", str(plan.worktree)),
                ("Base", plan.base_branch),
            ],
        )
    )

    preflight = preflight_or_exit(project_root, "create")
    tracker = StepTracker("Create Workstream")
    try:
        result = create_workstream(
            project_root,
            plan,
            config=config,
            install=not no_install,
            fetch=preflight.has_origin,
            tracker=tracker,
        )
    except WorkstreamError as exc:
        console.print(tracker.render())
        exit_with_error(exc)

    console.print(tracker.render())
    for message in result.warnings:
        warn(console, message)

    rows = [
        ("Directory", str(plan.worktree)),
        ("Branch", plan.branch),
        ("Next steps", f"cd {plan.worktree}"),
    ]
    if config.assistant_command:
        rows.append(("Then run", config.assistant_command))
    console.print()
    console.print(key_value_panel("Workstream Ready", rows, border_style="green"))
