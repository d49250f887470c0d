"""Link extraction across the recognized link syntaxes."""

from .links import (
    ANGLE_LINK_PATTERN,
    BARE_LINK_PATTERN,
    DEFAULT_SHORTCODE_NAMES,
    IMAGE_PATTERN,
    LINE_LINK_PATTERN,
    ScanRules,
    link_patterns,
    scan,
    scan_pattern,
    shortcode_line_pattern,
    shortcode_pattern,
    utf16_length,
)

__all__ = [
    "ANGLE_LINK_PATTERN",
    "BARE_LINK_PATTERN",
    "DEFAULT_SHORTCODE_NAMES",
    "IMAGE_PATTERN",
    "LINE_LINK_PATTERN",
    "ScanRules",
    "link_patterns",
    "scan",
    "scan_pattern",
    "shortcode_line_pattern",
    "shortcode_pattern",
    "utf16_length",
]
