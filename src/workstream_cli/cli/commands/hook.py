"""``workstream hook`` - assistant hook entry points."""

from __future__ import annotations

import logging
import sys
from typing import Optional

import typer

from workstream_cli.core.config import WorkstreamConfig, WorkstreamConfigError, load_config, resolve_max_lines
from workstream_cli.core.paths import locate_project_root
from workstream_cli.hooks.file_size import run_hook

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="hook",
    help="Hooks for AI assistant tool events (JSON on stdin).",
    no_args_is_help=True,
)


def _hook_config() -> WorkstreamConfig:
    project_root = locate_project_root()
    if project_root is None:
        return WorkstreamConfig()
    try:
        return load_config(project_root)
    except WorkstreamConfigError as exc:
        logger.warning("Ignoring invalid workstream config: %s", exc)
        return WorkstreamConfig()


@app.command("file-size")
def file_size_cmd(
    max_lines: Optional[int] = typer.Option(
        None, "--max-lines", min=1, help="Warn when an edited file exceeds this many lines"
    ),
) -> None:
    """Pass the event through and warn once per session about oversized files."""
    raw = sys.stdin.read()
    config = _hook_config()
    try:
        limit = resolve_max_lines(config, max_lines)
    except WorkstreamConfigError as exc:
        logger.warning("%s; using %s", exc, config.max_lines)
        limit = config.max_lines
    code = run_hook(raw, limit, stdout=sys.stdout, stderr=sys.stderr)
    raise typer.Exit(code)
