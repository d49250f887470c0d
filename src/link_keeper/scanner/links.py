"""Deterministic multi-syntax link scanning with original-text positions.

Columns and lengths are measured in UTF-16 code units, the unit editor ranges
use, so characters outside the Basic Multilingual Plane count as two.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from link_keeper.models import LinkOccurrence
from link_keeper.workspace.paths import to_posix

DEFAULT_SHORTCODE_NAMES = ("xref", "include", "glosslink", "include-inline")

# Group 1 is the prefix before the target, group 2 the target, later groups hold fragments.
ANGLE_LINK_PATTERN = re.compile(r"(\[[^\]]*\]\(<)([^)]+?)(#[^/>]*)?>(#[^\s/]+)?\)")
BARE_LINK_PATTERN = re.compile(r"(\[[^\]]*\]\()(?!<)([^)]+?)(#[^\s/]+)?\)")
IMAGE_PATTERN = re.compile(r"(<img\s[^>]*?src\s*=\s*['\"])([^'\"]*?)['\"][^>]*?>")

# Line-level patterns used when rewriting anchors; the fragment stays in the target.
LINE_LINK_PATTERN = re.compile(r"\[([^\]]*)\]\(([^)]+)\)")


@dataclass(slots=True, frozen=True)
class ScanRules:
    """Configurable shortcode names recognized next to the fixed link syntaxes."""

    shortcode_names: tuple[str, ...] = DEFAULT_SHORTCODE_NAMES


def utf16_length(text: str) -> int:
    """Return the length of text in UTF-16 code units."""
    return len(text) + sum(1 for char in text if ord(char) > 0xFFFF)


def _name_alternation(names: tuple[str, ...]) -> str:
    return "(?:" + "|".join(f"{re.escape(name)} " for name in names) + ")"


def shortcode_pattern(names: tuple[str, ...] = DEFAULT_SHORTCODE_NAMES) -> re.Pattern[str]:
    """Build the scanning pattern for `{{< name "target#fragment" >}}` shortcodes."""
    return re.compile(r'(\{\{< ' + _name_alternation(names) + r'")(.*?)(#[^\s/]+)?" >\}\}')


def shortcode_line_pattern(names: tuple[str, ...] = DEFAULT_SHORTCODE_NAMES) -> re.Pattern[str]:
    """Build the line-level shortcode pattern capturing the whole quoted argument."""
    return re.compile(r'\{\{< ' + _name_alternation(names) + r'"(.*?)" >\}\}')


_DEFAULT_SHORTCODE_PATTERN = shortcode_pattern()


def link_patterns(rules: ScanRules | None = None) -> tuple[re.Pattern[str], ...]:
    """Return the four scanning patterns in their fixed iteration order."""
    if rules is None or rules.shortcode_names == DEFAULT_SHORTCODE_NAMES:
        shortcodes = _DEFAULT_SHORTCODE_PATTERN
    else:
        shortcodes = shortcode_pattern(rules.shortcode_names)
    return (ANGLE_LINK_PATTERN, BARE_LINK_PATTERN, IMAGE_PATTERN, shortcodes)


def scan(content: str | None, rules: ScanRules | None = None) -> Iterator[LinkOccurrence]:
    """Yield every recognized link target in content; None yields nothing."""
    for pattern in link_patterns(rules):
        yield from scan_pattern(pattern, content)


def scan_pattern(pattern: re.Pattern[str], content: str | None) -> Iterator[LinkOccurrence]:
    """Yield targets captured by one pattern's second group."""
    if not content:
        return
    for match in pattern.finditer(content):
        index = match.start(2)
        line = content.count("\n", 0, index)
        line_start = content.rfind("\n", 0, index) + 1
        column = utf16_length(content[line_start:index])
        yield LinkOccurrence(target=to_posix(match.group(2)), line=line, column=column)
