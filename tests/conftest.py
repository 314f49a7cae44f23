from __future__ import annotations

from pathlib import Path

import pytest

from tests.git_helpers import add_origin, init_repo


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: Path):
    """Keep host git config and workstream env vars out of tests."""
    monkeypatch.delenv("WORKSTREAM_PROJECT_ROOT", raising=False)
    monkeypatch.delenv("WORKSTREAM_MAX_LINES", raising=False)
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """Primary checkout at ``<tmp>/work/myapp`` with one commit on main, no origin."""
    return init_repo(tmp_path / "work" / "myapp")


@pytest.fixture()
def project_with_origin(project: Path, tmp_path: Path) -> Path:
    """Same as ``project`` but with a bare ``origin`` that has main pushed."""
    add_origin(project, tmp_path / "origin.git")
    return project
