"""Workspace path normalization and filtering primitives."""

from .filters import glob_to_regex, matches_any, should_include
from .paths import (
    is_location_independent,
    join_path,
    normalize_path,
    parent_dir,
    relative_path,
    relative_to_workspace,
    to_posix,
)

__all__ = [
    "glob_to_regex",
    "is_location_independent",
    "join_path",
    "matches_any",
    "normalize_path",
    "parent_dir",
    "relative_path",
    "relative_to_workspace",
    "should_include",
    "to_posix",
]
