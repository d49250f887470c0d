"""Include/exclude glob rules deciding which documents take part in propagation."""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache

from link_keeper.workspace.paths import relative_to_workspace


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a path glob where `*` and `?` stay inside one segment.

    `**` as a whole segment spans any number of segments, including none, so
    `docs/**` matches `docs` itself and `**/drafts/**` matches `drafts/a.md`.
    """
    parts: list[str] = []
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        at_segment_start = index == 0 or pattern[index - 1] == "/"
        if char == "/" and pattern[index + 1 :] == "**":
            parts.append("(?:/.*)?")
            index = length
        elif at_segment_start and pattern.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
        elif at_segment_start and pattern[index:] == "**":
            parts.append(".*")
            index = length
        elif char == "*":
            parts.append("[^/]*")
            while index < length and pattern[index] == "*":
                index += 1
        elif char == "?":
            parts.append("[^/]")
            index += 1
        elif char == "[":
            closing = pattern.find("]", index + 2)
            if closing == -1:
                parts.append(re.escape(char))
                index += 1
                continue
            body = pattern[index + 1 : closing].replace("\\", "\\\\")
            if body.startswith("!"):
                body = "^" + body[1:]
            parts.append(f"[{body}]")
            index = closing + 1
        else:
            parts.append(re.escape(char))
            index += 1
    return re.compile("".join(parts))


def matches_any(relative_path: str, patterns: Sequence[str]) -> bool:
    """Return True when a workspace-relative path matches one of the globs."""
    return any(glob_to_regex(pattern).fullmatch(relative_path) for pattern in patterns)


def should_include(
    path: str,
    include_globs: Sequence[str] = (),
    exclude_globs: Sequence[str] = (),
    workspace_root: str | None = None,
) -> bool:
    """Apply allow-list then deny-list rules to one path."""
    relative = relative_to_workspace(path, workspace_root)
    if matches_any(relative, include_globs):
        return True
    if include_globs:
        return False
    return not matches_any(relative, exclude_globs)
