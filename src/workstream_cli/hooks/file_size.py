"""File-size warning hook for AI assistant edit events.

The hook receives a JSON event on stdin, passes it through to stdout
unchanged and, when the edited file grew past the line threshold, prints a
warning to stderr. Each file is reported at most once per session; the
already-warned paths are kept as a JSON array in a temp file keyed by the
session id.
"""

from __future__ import annotations

import json
import logging
import re
import tempfile
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)

STATE_FILE_PREFIX = "workstream-file-size-"

__all__ = [
    "STATE_FILE_PREFIX",
    "WarnedFileStore",
    "count_lines",
    "extract_file_path",
    "check_file_size",
    "run_hook",
]


class WarnedFileStore:
    """Persist the paths already warned about in one session.

    File format: ``["/abs/path/a.py", ...]``. Unreadable or corrupt files
    are treated as empty.
    """

    def __init__(self, session_id: str | None, state_dir: Path | None = None) -> None:
        safe_id = re.sub(r"[^A-Za-z0-9_-]", "_", session_id or "") or "default"
        directory = state_dir or Path(tempfile.gettempdir())
        self._file_path = directory / f"{STATE_FILE_PREFIX}{safe_id}.json"

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> list[str]:
        if not self._file_path.exists():
            return []
        try:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, ValueError):
            logger.warning("Corrupt warned-files state %s - starting fresh", self._file_path)
            return []
        if not isinstance(data, list):
            return []
        return [item for item in data if isinstance(item, str)]

    def contains(self, path: str) -> bool:
        return path in self.load()

    def add(self, path: str) -> None:
        warned = self.load()
        if path in warned:
            return
        warned.append(path)
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(warned), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not record warned file in %s: %s", self._file_path, exc)


def count_lines(path: Path) -> int:
    """Count lines the way an editor shows them; a final unterminated line counts."""
    count = 0
    with path.open("rb") as handle:
        for _ in handle:
            count += 1
    return count


def extract_file_path(event: object) -> tuple[str | None, str | None]:
    """Return ``(file_path, session_id)`` from a hook event, either may be None."""
    if not isinstance(event, dict):
        return None, None
    session_id = event.get("session_id")
    session_id = session_id if isinstance(session_id, str) else None
    tool_input = event.get("tool_input")
    if not isinstance(tool_input, dict):
        return None, session_id
    file_path = tool_input.get("file_path")
    if not isinstance(file_path, str) or not file_path.strip():
        return None, session_id
    return file_path, session_id


def check_file_size(
    event: object,
    max_lines: int,
    *,
    state_dir: Path | None = None,
    cwd: Path | None = None,
) -> str | None:
    """Return a warning message for an oversized file, or None.

    Returns None for malformed events, missing files, files within the
    threshold, and files already reported in this session.
    """
    file_path, session_id = extract_file_path(event)
    if file_path is None:
        return None

    path = Path(file_path)
    if not path.is_absolute():
        base = cwd
        if base is None and isinstance(event, dict) and isinstance(event.get("cwd"), str):
            base = Path(event["cwd"])
        path = (base or Path.cwd()) / path
    if not path.is_file():
        return None

    try:
        lines = count_lines(path)
    except OSError as exc:
        logger.debug("Cannot read %s: %s", path, exc)
        return None
    if lines <= max_lines:
        return None

    store = WarnedFileStore(session_id, state_dir)
    key = str(path)
    if store.contains(key):
        return None
    store.add(key)
    return (
        f"[file-size] {path} has {lines} lines (limit {max_lines}). "
        "Consider splitting it into smaller modules."
    )


def run_hook(
    raw: str,
    max_lines: int,
    *,
    stdout: TextIO,
    stderr: TextIO,
    state_dir: Path | None = None,
) -> int:
    """Echo *raw* to *stdout*, write any warning to *stderr*, and return 0."""
    stdout.write(raw)
    stdout.flush()

    try:
        event = json.loads(raw) if raw.strip() else None
    except json.JSONDecodeError:
        logger.debug("Hook input is not JSON; passing through")
        return 0

    warning = check_file_size(event, max_lines, state_dir=state_dir)
    if warning:
        stderr.write(warning + "\n")
        stderr.flush()
    return 0
