"""Edit computation for rename and save events."""

from .anchors import HeadingToAnchor, heading_to_anchor
from .dispatch import get_edits, iter_edits
from .headings import HEADING_PATTERN, PLACEHOLDER_LABEL, detect_heading_renames, save_edits
from .rename import rename_edits

__all__ = [
    "HEADING_PATTERN",
    "HeadingToAnchor",
    "PLACEHOLDER_LABEL",
    "detect_heading_renames",
    "get_edits",
    "heading_to_anchor",
    "iter_edits",
    "rename_edits",
    "save_edits",
]
