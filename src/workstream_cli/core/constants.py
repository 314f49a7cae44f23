"""Shared constants for workstream layout and naming."""

from __future__ import annotations

import re

WORKSTREAM_SEPARATOR = "--"
BRANCH_PREFIXES: tuple[str, ...] = ("feature", "fix", "refactor")
DEFAULT_PREFIX = "feature"
DEFAULT_BASE_BRANCH = "main"
ORIGIN = "origin"

FEATURE_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?$")

CONFIG_DIR = ".workstream"
CONFIG_FILE = "config.yaml"

DEFAULT_INSTALL_COMMANDS: tuple[str, ...] = ("npm ci --silent", "npm install --silent")
DEFAULT_INSTALL_MARKER = "package.json"
DEFAULT_COPY_FILES: tuple[str, ...] = (".claude/settings.local.json",)
DEFAULT_MAX_LINES = 300
DEFAULT_ASSISTANT_COMMAND = "claude"

PROJECT_ROOT_ENV_VAR = "WORKSTREAM_PROJECT_ROOT"
MAX_LINES_ENV_VAR = "WORKSTREAM_MAX_LINES"

__all__ = [
    "WORKSTREAM_SEPARATOR",
    "BRANCH_PREFIXES",
    "DEFAULT_PREFIX",
    "DEFAULT_BASE_BRANCH",
    "ORIGIN",
    "FEATURE_NAME_PATTERN",
    "CONFIG_DIR",
    "CONFIG_FILE",
    "DEFAULT_INSTALL_COMMANDS",
    "DEFAULT_INSTALL_MARKER",
    "DEFAULT_COPY_FILES",
    "DEFAULT_MAX_LINES",
    "DEFAULT_ASSISTANT_COMMAND",
    "PROJECT_ROOT_ENV_VAR",
    "MAX_LINES_ENV_VAR",
]
