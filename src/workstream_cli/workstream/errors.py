"""Exceptions raised by workstream operations."""

from __future__ import annotations

__all__ = [
    "WorkstreamError",
    "InvalidFeatureNameError",
    "InvalidPrefixError",
    "PreflightError",
    "GitCommandError",
]


class WorkstreamError(Exception):
    """Base error for workstream operations.

    ``hint`` carries an optional remediation shown under the message.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class InvalidFeatureNameError(WorkstreamError):
    """Feature name is not alphanumeric-with-hyphens."""


class InvalidPrefixError(WorkstreamError):
    """Branch prefix is not one of the supported types."""


class PreflightError(WorkstreamError):
    """A pre-flight check refused to let the operation mutate state."""


class GitCommandError(WorkstreamError):
    """A git command required for the operation failed."""

    def __init__(self, message: str, stderr: str = "", hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.stderr = stderr
