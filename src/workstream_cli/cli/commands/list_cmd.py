"""``workstream list`` - table of active workstreams."""

from __future__ import annotations

import json

import typer
from rich.table import Table

from workstream_cli.cli.helpers import (
    console,
    get_project_root_or_exit,
    load_config_or_exit,
    preflight_or_exit,
)
from workstream_cli.workstream import WorkstreamListing, list_workstreams


def _flag(value: bool) -> str:
    return "[green]yes[/green]" if value else "[red]no[/red]"


def _print_listing(listing: WorkstreamListing) -> None:
    console.print()
    console.print(f"[bold]Active Workstreams ({listing.project_root.name})[/bold]")

    if not listing.workstreams:
        console.print("  No active workstreams.")
        console.print()
        console.print(f"Main: {listing.project_root} ({listing.main_branch} @ {listing.main_sha})")
        console.print("Total: 0 workstreams")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=True)
    table.add_column("Name", style="cyan")
    table.add_column("Branch")
    table.add_column("Status")
    table.add_column("Merged")
    table.add_column("Clean")
    table.add_column("Directory", overflow="fold")

    for ws in listing.workstreams:
        status = "[green]active[/green]" if ws.exists else "[red]missing[/red]"
        table.add_row(
            ws.name,
            ws.branch or "(detached)",
            status,
            _flag(ws.merged),
            _flag(ws.clean),
            str(ws.directory),
        )
    console.print(table)

    console.print()
    console.print(f"Main: {listing.project_root} ({listing.main_branch} @ {listing.main_sha})")
    if listing.ready:
        console.print(
            f"Total: {listing.total} workstream(s) ([green]{listing.ready} ready to clean up[/green])"
        )
    else:
        console.print(f"Total: {listing.total} workstream(s)")


def list_command(
    json_output: bool = typer.Option(False, "--json", help="Output machine-readable JSON"),
) -> None:
    """List active workstreams with merge and cleanliness status."""
    project_root = get_project_root_or_exit()
    config = load_config_or_exit(project_root)
    preflight_or_exit(project_root, "list", json_output=json_output)

    listing = list_workstreams(project_root, merge_target=config.base_branch)

    if json_output:
        typer.echo(json.dumps(listing.to_dict(), indent=2))
        return
    _print_listing(listing)
