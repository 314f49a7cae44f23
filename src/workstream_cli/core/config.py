"""Project-scoped workstream configuration in .workstream/config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from workstream_cli.core.constants import (
    BRANCH_PREFIXES,
    CONFIG_DIR,
    CONFIG_FILE,
    DEFAULT_ASSISTANT_COMMAND,
    DEFAULT_BASE_BRANCH,
    DEFAULT_COPY_FILES,
    DEFAULT_INSTALL_COMMANDS,
    DEFAULT_INSTALL_MARKER,
    DEFAULT_MAX_LINES,
    DEFAULT_PREFIX,
    MAX_LINES_ENV_VAR,
)

__all__ = [
    "WorkstreamConfigError",
    "InstallConfig",
    "WorkstreamConfig",
    "config_path",
    "load_config",
    "resolve_max_lines",
]


class WorkstreamConfigError(RuntimeError):
    """Raised when workstream configuration is invalid."""


@dataclass(slots=True)
class InstallConfig:
    enabled: bool = True
    commands: list[str] = field(default_factory=lambda: list(DEFAULT_INSTALL_COMMANDS))
    marker: str | None = DEFAULT_INSTALL_MARKER


@dataclass(slots=True)
class WorkstreamConfig:
    """Workstream settings stored inside .workstream/config.yaml."""

    base_branch: str = DEFAULT_BASE_BRANCH
    default_prefix: str = DEFAULT_PREFIX
    install: InstallConfig = field(default_factory=InstallConfig)
    copy_files: list[str] = field(default_factory=lambda: list(DEFAULT_COPY_FILES))
    max_lines: int = DEFAULT_MAX_LINES
    assistant_command: str | None = DEFAULT_ASSISTANT_COMMAND

    @classmethod
    def from_dict(cls, data: object) -> "WorkstreamConfig":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise WorkstreamConfigError("Configuration root must be a mapping")

        config = cls()

        base_branch = data.get("base_branch")
        if base_branch is not None:
            config.base_branch = _require_str(base_branch, "base_branch")

        prefix = data.get("default_prefix")
        if prefix is not None:
            prefix = _require_str(prefix, "default_prefix")
            if prefix not in BRANCH_PREFIXES:
                raise WorkstreamConfigError(
                    f"default_prefix must be one of {', '.join(BRANCH_PREFIXES)}, got '{prefix}'"
                )
            config.default_prefix = prefix

        install = data.get("install")
        if install is not None:
            if not isinstance(install, dict):
                raise WorkstreamConfigError("install must be a mapping")
            enabled = install.get("enabled", True)
            if not isinstance(enabled, bool):
                raise WorkstreamConfigError("install.enabled must be true or false")
            config.install.enabled = enabled
            if "commands" in install:
                config.install.commands = _require_str_list(install["commands"], "install.commands")
            if "marker" in install:
                marker = install["marker"]
                config.install.marker = None if marker is None else _require_str(marker, "install.marker")

        if "copy_files" in data:
            config.copy_files = _require_str_list(data["copy_files"], "copy_files")

        if "assistant_command" in data:
            command = data["assistant_command"]
            config.assistant_command = None if command is None else _require_str(command, "assistant_command")

        hooks = data.get("hooks")
        if isinstance(hooks, dict) and isinstance(hooks.get("file_size"), dict):
            max_lines = hooks["file_size"].get("max_lines")
            if max_lines is not None:
                if isinstance(max_lines, bool) or not isinstance(max_lines, int) or max_lines < 1:
                    raise WorkstreamConfigError("hooks.file_size.max_lines must be a positive integer")
                config.max_lines = max_lines

        return config


def _require_str(value: object, key: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise WorkstreamConfigError(f"{key} must be a non-empty string")
    return value.strip()


def _require_str_list(value: object, key: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise WorkstreamConfigError(f"{key} must be a list of strings")
    return [_require_str(item, key) for item in value]


def config_path(project_root: Path) -> Path:
    return project_root / CONFIG_DIR / CONFIG_FILE


def load_config(project_root: Path) -> WorkstreamConfig:
    """Load config from .workstream/config.yaml, falling back to defaults."""
    path = config_path(project_root)
    if not path.exists():
        return WorkstreamConfig()

    yaml = YAML()
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle)
    except (OSError, YAMLError) as exc:
        raise WorkstreamConfigError(f"Failed to parse {path}: {exc}") from exc

    return WorkstreamConfig.from_dict(payload)


def resolve_max_lines(config: WorkstreamConfig, override: int | None = None) -> int:
    """CLI flag, then environment, then config file."""
    if override is not None:
        return override
    env_value = os.environ.get(MAX_LINES_ENV_VAR)
    if env_value:
        try:
            parsed = int(env_value)
        except ValueError as exc:
            raise WorkstreamConfigError(
                f"{MAX_LINES_ENV_VAR} must be a positive integer, got '{env_value}'"
            ) from exc
        if parsed < 1:
            raise WorkstreamConfigError(f"{MAX_LINES_ENV_VAR} must be a positive integer, got '{env_value}'")
        return parsed
    return config.max_lines
