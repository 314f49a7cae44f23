"""Feature name and branch name rules."""

from __future__ import annotations

from workstream_cli.core.constants import BRANCH_PREFIXES, FEATURE_NAME_PATTERN
from workstream_cli.workstream.errors import InvalidFeatureNameError, InvalidPrefixError

__all__ = ["validate_feature_name", "validate_prefix", "branch_name", "candidate_branches"]


def validate_feature_name(name: str) -> str:
    if not name:
        raise InvalidFeatureNameError("Feature name is required.", hint="Run with --help for usage.")
    if not FEATURE_NAME_PATTERN.match(name):
        raise InvalidFeatureNameError(
            f"Invalid feature name '{name}'. Use alphanumeric characters and hyphens only."
        )
    return name


def validate_prefix(prefix: str) -> str:
    if prefix not in BRANCH_PREFIXES:
        raise InvalidPrefixError(f"Invalid prefix '{prefix}'. Use: {', '.join(BRANCH_PREFIXES)}")
    return prefix


def branch_name(prefix: str, feature_name: str) -> str:
    """Return ``<prefix>/<feature-name>``."""
    return f"{validate_prefix(prefix)}/{validate_feature_name(feature_name)}"


def candidate_branches(feature_name: str) -> list[str]:
    """Branch names a workstream called *feature_name* may use, in lookup order."""
    return [f"{prefix}/{feature_name}" for prefix in BRANCH_PREFIXES]
