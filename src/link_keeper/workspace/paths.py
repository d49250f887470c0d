"""POSIX path helpers shared by the scanner, filters, and propagation engines."""

from __future__ import annotations

import posixpath
import re
from typing import Final

WINDOWS_ABSOLUTE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]:/")
URL_SCHEME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


def to_posix(candidate: str) -> str:
    """Replace Windows path separators with forward slashes."""
    return candidate.replace("\\", "/")


def normalize_path(candidate: str) -> str:
    """Normalize separators, `.`/`..` segments, and trailing slashes."""
    return posixpath.normpath(to_posix(candidate))


def parent_dir(path: str) -> str:
    """Return the directory portion of a path, `.` for bare file names."""
    return posixpath.dirname(normalize_path(path)) or "."


def join_path(base_dir: str, target: str) -> str:
    """Resolve a relative target against a directory and normalize the result."""
    return normalize_path(posixpath.join(base_dir, to_posix(target)))


def relative_path(start_dir: str, target: str) -> str:
    """Return the relative path leading from start_dir to target.

    Pure string computation: neither argument is resolved against the process
    working directory, so results only depend on the inputs.
    """
    start_parts = _segments(start_dir)
    target_parts = _segments(target)
    common = 0
    for start_part, target_part in zip(start_parts, target_parts):
        if start_part != target_part:
            break
        common += 1
    parts = [".."] * (len(start_parts) - common) + target_parts[common:]
    return "/".join(parts) or "."


def is_location_independent(target: str) -> bool:
    """Return True for targets that do not move with the linking document.

    Covers URLs (`https:`, `mailto:`), protocol-relative and rooted paths,
    Windows drive paths, and fragment-only links.
    """
    if not target or target.startswith(("#", "/")):
        return True
    if WINDOWS_ABSOLUTE_PATTERN.match(target):
        return True
    return URL_SCHEME_PATTERN.match(target) is not None


def relative_to_workspace(path: str, workspace_root: str | None) -> str:
    """Express path relative to the workspace root when it lies under it."""
    normalized = normalize_path(path)
    if not workspace_root:
        return normalized
    root = normalize_path(workspace_root)
    if normalized == root:
        return "."
    prefix = root if root.endswith("/") else f"{root}/"
    if normalized.startswith(prefix):
        return normalized[len(prefix) :]
    return normalized


def _segments(path: str) -> list[str]:
    normalized = normalize_path(path)
    if normalized == ".":
        return []
    return normalized.split("/")
