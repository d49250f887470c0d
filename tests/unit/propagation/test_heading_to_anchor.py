from __future__ import annotations

from link_keeper.propagation import heading_to_anchor


def test_anchor_lowercases_and_hyphenates_spaces() -> None:
    assert heading_to_anchor("Old Title") == "old-title"


def test_anchor_drops_punctuation() -> None:
    assert heading_to_anchor("What's New?") == "whats-new"
    assert heading_to_anchor("Step 1: Install (Linux)") == "step-1-install-linux"


def test_anchor_keeps_hyphens_and_underscores() -> None:
    assert heading_to_anchor("snake_case-name") == "snake_case-name"


def test_anchor_does_not_collapse_inner_whitespace() -> None:
    assert heading_to_anchor("  Spaced  Out ") == "spaced--out"
