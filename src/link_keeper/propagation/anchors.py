"""Heading text to same-document anchor slugs."""

from __future__ import annotations

import re
from collections.abc import Callable

HeadingToAnchor = Callable[[str], str]

_PUNCTUATION_RE = re.compile(r"[^\w\s-]")
_WHITESPACE_RE = re.compile(r"\s")


def heading_to_anchor(text: str) -> str:
    """Return the GitHub-style anchor for a heading.

    Lowercases, drops punctuation other than `-` and `_`, and turns each
    whitespace character into `-` without collapsing runs.
    """
    slug = _PUNCTUATION_RE.sub("", text.strip().lower())
    return _WHITESPACE_RE.sub("-", slug)
