"""Same-document anchor rewrites after heading text changes."""

from __future__ import annotations

import difflib
import re
from collections.abc import Iterator

from link_keeper.models import Edit, HeadingRename, line_edit
from link_keeper.propagation.anchors import HeadingToAnchor, heading_to_anchor
from link_keeper.scanner import (
    DEFAULT_SHORTCODE_NAMES,
    LINE_LINK_PATTERN,
    shortcode_line_pattern,
    utf16_length,
)
from link_keeper.workspace import normalize_path

HEADING_PATTERN = re.compile(r"^(#+ )(.+)")

# Shortcode anchors are rewritten to a markdown link with this fixed label.
PLACEHOLDER_LABEL = "asdf"


def detect_heading_renames(content_before: str, content_after: str) -> list[HeadingRename]:
    """Pair removed/added heading lines of equal depth from a line diff."""
    before_lines = content_before.splitlines()
    after_lines = content_after.splitlines()
    matcher = difflib.SequenceMatcher(None, before_lines, after_lines, autojunk=False)
    renames: list[HeadingRename] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag != "replace":
            continue
        for old_line, new_line in zip(before_lines[i1:i2], after_lines[j1:j2]):
            old_match = HEADING_PATTERN.match(old_line)
            new_match = HEADING_PATTERN.match(new_line)
            if old_match is None or new_match is None:
                continue
            if old_match.group(1) != new_match.group(1):
                continue
            if old_match.group(2) == new_match.group(2):
                continue
            renames.append(
                HeadingRename(old_header=old_match.group(2), new_header=new_match.group(2))
            )
    return renames


def save_edits(
    path: str,
    content_before: str,
    content_after: str,
    to_anchor: HeadingToAnchor = heading_to_anchor,
    shortcode_names: tuple[str, ...] = DEFAULT_SHORTCODE_NAMES,
) -> Iterator[Edit]:
    """Yield whole-line edits moving in-document anchor links to renamed headings."""
    renames = detect_heading_renames(content_before, content_after)
    if not renames:
        return
    anchors = [
        (f"#{to_anchor(rename.old_header)}", to_anchor(rename.new_header)) for rename in renames
    ]
    shortcode_re = shortcode_line_pattern(shortcode_names)
    target_path = normalize_path(path)
    for line_number, line in enumerate(content_after.split("\n")):
        rewritten = _rewrite_line(line, anchors, shortcode_re)
        if rewritten == line:
            continue
        yield line_edit(target_path, line_number, 0, utf16_length(line), rewritten)


def _rewrite_line(
    line: str,
    anchors: list[tuple[str, str]],
    shortcode_re: re.Pattern[str],
) -> str:
    updated = line
    link = LINE_LINK_PATTERN.search(updated)
    if link is not None:
        new_anchor = _renamed_anchor(link.group(2), anchors)
        if new_anchor is not None:
            replacement = f"[{link.group(1)}](#{new_anchor})"
            updated = updated[: link.start()] + replacement + updated[link.end() :]

    shortcode = shortcode_re.search(updated)
    if shortcode is not None:
        new_anchor = _renamed_anchor(shortcode.group(1), anchors)
        if new_anchor is not None:
            replacement = f"[{PLACEHOLDER_LABEL}](#{new_anchor})"
            updated = updated[: shortcode.start()] + replacement + updated[shortcode.end() :]
    return updated


def _renamed_anchor(target: str, anchors: list[tuple[str, str]]) -> str | None:
    for old_fragment, new_anchor in anchors:
        if target == old_fragment:
            return new_anchor
    return None
