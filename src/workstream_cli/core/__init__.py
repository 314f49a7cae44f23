"""Core git, path and configuration utilities."""

from .config import WorkstreamConfig, WorkstreamConfigError, load_config
from .paths import feature_from_dir, locate_project_root, workstream_dir

__all__ = [
    "WorkstreamConfig",
    "WorkstreamConfigError",
    "load_config",
    "feature_from_dir",
    "locate_project_root",
    "workstream_dir",
]
