"""Dependency installation inside a freshly created workstream."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from workstream_cli.core.config import InstallConfig

logger = logging.getLogger(__name__)

__all__ = ["InstallOutcome", "install_dependencies"]


@dataclass
class InstallOutcome:
    """What happened when installing dependencies in a worktree."""

    attempted: list[str] = field(default_factory=list)
    command: str | None = None
    skipped_reason: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.command is not None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None


def _run_install_command(command: str, cwd: Path, timeout: int) -> bool:
    try:
        completed = subprocess.run(
            shlex.split(command),
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
    except FileNotFoundError:
        logger.debug("install command not found: %s", command)
        return False
    except subprocess.TimeoutExpired:
        logger.warning("Install command timed out after %ss: %s", timeout, command)
        return False
    if completed.returncode != 0:
        logger.debug("install command failed (%s): %s", completed.returncode, completed.stderr.strip())
    return completed.returncode == 0


def install_dependencies(worktree: Path, config: InstallConfig, timeout: int = 900) -> InstallOutcome:
    """Run configured install commands in order; the first success wins.

    Failure of every command is reported through the outcome, never raised.
    """
    outcome = InstallOutcome()
    if not config.enabled:
        outcome.skipped_reason = "disabled in config"
        return outcome
    if not config.commands:
        outcome.skipped_reason = "no install commands configured"
        return outcome
    if config.marker and not (worktree / config.marker).exists():
        outcome.skipped_reason = f"no {config.marker}"
        return outcome

    for command in config.commands:
        outcome.attempted.append(command)
        if _run_install_command(command, worktree, timeout):
            outcome.command = command
            break
    return outcome
