"""CLI command modules for workstream."""

from .cleanup import cleanup
from .create import create
from .hook import app as hook_app
from .list_cmd import list_command

__all__ = ["cleanup", "create", "hook_app", "list_command"]
