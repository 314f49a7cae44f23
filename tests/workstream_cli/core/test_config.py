"""Tests for .workstream/config.yaml handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from workstream_cli.core.config import (
    WorkstreamConfig,
    WorkstreamConfigError,
    config_path,
    load_config,
    resolve_max_lines,
)


def _write(root: Path, text: str) -> None:
    path = config_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.base_branch == "main"
    assert config.default_prefix == "feature"
    assert config.install.enabled is True
    assert config.install.commands == ["npm ci --silent", "npm install --silent"]
    assert config.install.marker == "package.json"
    assert config.copy_files == [".claude/settings.local.json"]
    assert config.max_lines == 300


def test_loads_values(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "base_branch: develop\n"
        "default_prefix: fix\n"
        "install:\n"
        "  enabled: false\n"
        "  commands: [uv sync]\n"
        "  marker: pyproject.toml\n"
        "copy_files: [.env.local]\n"
        "hooks:\n"
        "  file_size:\n"
        "    max_lines: 500\n",
    )

    config = load_config(tmp_path)

    assert config.base_branch == "develop"
    assert config.default_prefix == "fix"
    assert config.install.enabled is False
    assert config.install.commands == ["uv sync"]
    assert config.install.marker == "pyproject.toml"
    assert config.copy_files == [".env.local"]
    assert config.max_lines == 500


def test_empty_file_is_defaults(tmp_path: Path) -> None:
    _write(tmp_path, "")

    assert load_config(tmp_path) == WorkstreamConfig()


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "default_prefix: hotfix\n",
        "install: yes-please\n",
        "copy_files: .env\n",
        "hooks:\n  file_size:\n    max_lines: 0\n",
        "base_branch: [main]\n",
    ],
)
def test_invalid_values_raise(tmp_path: Path, text: str) -> None:
    _write(tmp_path, text)

    with pytest.raises(WorkstreamConfigError):
        load_config(tmp_path)


def test_unparseable_yaml_raises(tmp_path: Path) -> None:
    _write(tmp_path, "base_branch: [unclosed\n")

    with pytest.raises(WorkstreamConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_unrelated_keys_are_ignored(tmp_path: Path) -> None:
    _write(tmp_path, "# team settings\nowner: platform\nbase_branch: trunk\n")

    assert load_config(tmp_path).base_branch == "trunk"


def test_assistant_command(tmp_path: Path) -> None:
    assert load_config(tmp_path).assistant_command == "claude"

    _write(tmp_path, "assistant_command: codex\n")
    assert load_config(tmp_path).assistant_command == "codex"

    _write(tmp_path, "assistant_command: null\n")
    assert load_config(tmp_path).assistant_command is None


def test_resolve_max_lines_precedence(monkeypatch) -> None:
    config = WorkstreamConfig(max_lines=250)

    assert resolve_max_lines(config) == 250
    monkeypatch.setenv("WORKSTREAM_MAX_LINES", "120")
    assert resolve_max_lines(config) == 120
    assert resolve_max_lines(config, 80) == 80


def test_resolve_max_lines_rejects_bad_env(monkeypatch) -> None:
    monkeypatch.setenv("WORKSTREAM_MAX_LINES", "lots")

    with pytest.raises(WorkstreamConfigError):
        resolve_max_lines(WorkstreamConfig())
