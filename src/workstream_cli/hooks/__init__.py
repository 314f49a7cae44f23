"""Assistant hook utilities."""

from .file_size import WarnedFileStore, check_file_size, count_lines, run_hook

__all__ = ["WarnedFileStore", "check_file_size", "count_lines", "run_hook"]
