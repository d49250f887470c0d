from __future__ import annotations

from link_keeper.workspace import should_include


def test_include_list_is_strict_allow_list() -> None:
    assert should_include("guide/readme.md", ["docs/**"], []) is False
    assert should_include("guide/readme.md", ["docs/**"], ["guide/**"]) is False
    assert should_include("guide/readme.md", ["docs/**"], ["nothing/**"]) is False


def test_include_match_wins_over_exclude() -> None:
    assert should_include("docs/a.md", ["docs/**"], ["docs/**"]) is True


def test_exclude_applies_without_include_list() -> None:
    assert should_include("drafts/a.md", [], ["**/drafts/**"]) is False
    assert should_include("notes/drafts/a.md", [], ["**/drafts/**"]) is False
    assert should_include("docs/a.md", [], ["**/drafts/**"]) is True


def test_empty_rules_include_everything() -> None:
    assert should_include("any/where/file.md") is True


def test_wildcards_and_character_classes() -> None:
    assert should_include("docs/a1.md", [], ["docs/a[0-9].md"]) is False
    assert should_include("docs/ab.md", [], ["docs/a[0-9].md"]) is True
    assert should_include("docs/a.md", [], ["docs/?.md"]) is False


def test_paths_are_made_relative_to_workspace_root() -> None:
    assert should_include("/ws/docs/a.md", ["docs/**"], [], "/ws") is True
    assert should_include("/ws/blog/a.md", ["docs/**"], [], "/ws") is False


def test_windows_paths_are_normalized_before_matching() -> None:
    assert should_include("C:\\ws\\docs\\a.md", ["docs/*"], [], "C:\\ws") is True


def test_single_star_stays_inside_one_segment() -> None:
    assert should_include("guide/readme.md", [], ["*.md"]) is True
    assert should_include("readme.md", [], ["*.md"]) is False
    assert should_include("docs/deep/a.md", ["docs/*.md"], []) is False
    assert should_include("docs/a.md", ["docs/*.md"], []) is True
    assert should_include("docs/deep/a.md", [], ["docs/?/a.md"]) is True


def test_double_star_spans_any_number_of_segments() -> None:
    assert should_include("docs/deep/er/a.md", ["docs/**/*.md"], []) is True
    assert should_include("docs/a.md", ["docs/**/*.md"], []) is True
    assert should_include("docs", [], ["docs/**"]) is False
    assert should_include("docsx/a.md", [], ["docs/**"]) is True
    assert should_include("a/b/c.md", [], ["**"]) is False
