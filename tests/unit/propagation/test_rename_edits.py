from __future__ import annotations

from link_keeper.models import Document, Options, line_edit
from link_keeper.propagation import rename_edits


def test_renamed_file_rewrites_sibling_link() -> None:
    documents = [
        Document(path="a/c.md", content="moved file without links"),
        Document(path="a/d.md", content="[x](b.md)"),
    ]

    edits = list(rename_edits("a/b.md", "a/c.md", documents))

    assert edits == [line_edit("a/d.md", 0, 4, 8, "c.md")]


def test_renamed_directory_rewrites_links_into_it() -> None:
    documents = [Document(path="index.md", content="[x](dir1/f.md)")]

    edits = list(rename_edits("dir1", "dir2", documents))

    assert edits == [line_edit("index.md", 0, 4, 13, "dir2/f.md", "dir2/f.md")]


def test_links_inside_renamed_directory_to_siblings_are_untouched() -> None:
    documents = [
        Document(path="dir2/a.md", content="[b](b.md)"),
        Document(path="dir2/b.md", content="[a](./a.md)"),
    ]

    assert list(rename_edits("dir1", "dir2", documents)) == []


def test_second_link_on_line_is_shifted_by_prior_delta() -> None:
    documents = [Document(path="index.md", content="[a](old.md) and [b](old.md)")]
    delta = len("new-name.md") - len("old.md")

    edits = list(rename_edits("old.md", "new-name.md", documents))

    assert edits == [
        line_edit("index.md", 0, 4, 10, "new-name.md"),
        line_edit("index.md", 0, 20 + delta, 26 + delta, "new-name.md"),
    ]


def test_line_delta_accumulates_across_three_links_and_resets_per_line() -> None:
    content = "[a](x.md) [b](x.md) [c](x.md)\n[d](x.md)"
    documents = [Document(path="index.md", content=content)]

    edits = list(rename_edits("x.md", "long-name.md", documents))

    assert [(edit.range.start.line, edit.range.start.character) for edit in edits] == [
        (0, 4),
        (0, 22),
        (0, 40),
        (1, 4),
    ]
    assert all(edit.range.end.character - edit.range.start.character == 4 for edit in edits)


def test_mixed_syntaxes_on_one_line_are_processed_left_to_right() -> None:
    documents = [Document(path="index.md", content='<img src="x.png"> [a](x.png)')]

    edits = list(rename_edits("x.png", "pics/x.png", documents))

    assert edits == [
        line_edit("index.md", 0, 10, 15, "pics/x.png"),
        line_edit("index.md", 0, 27, 32, "pics/x.png"),
    ]


def test_moved_document_relative_links_are_rebased() -> None:
    content = "\n".join(
        [
            "[b](b.md)",
            "[up](../readme.md)",
            "[web](https://example.com/page)",
            "[top](#intro)",
        ]
    )
    documents = [Document(path="archive/2024/a.md", content=content)]

    edits = list(rename_edits("notes/a.md", "archive/2024/a.md", documents))

    assert edits == [
        line_edit("archive/2024/a.md", 0, 4, 8, "../../notes/b.md", "notes/b.md"),
        line_edit("archive/2024/a.md", 1, 5, 17, "../../readme.md", "readme.md"),
    ]


def test_moved_document_within_same_directory_needs_no_self_edits() -> None:
    documents = [Document(path="a/new.md", content="[b](b.md) [c](./c.md)")]

    assert list(rename_edits("a/old.md", "a/new.md", documents)) == []


def test_reference_match_is_case_insensitive_and_uses_new_casing() -> None:
    documents = [Document(path="guide.md", content="[x](Docs/Intro.md)")]

    edits = list(rename_edits("docs/intro.md", "docs/Start.md", documents))

    assert edits == [line_edit("guide.md", 0, 4, 17, "docs/Start.md")]


def test_folder_prefix_match_keeps_new_folder_casing() -> None:
    documents = [Document(path="index.md", content="[f](dir1/F.md)")]

    edits = list(rename_edits("Dir1", "Dir2", documents))

    assert edits == [line_edit("index.md", 0, 4, 13, "Dir2/F.md", "Dir2/F.md")]


def test_dot_slash_targets_are_matched() -> None:
    documents = [Document(path="a/d.md", content="[x](./b.md)")]

    edits = list(rename_edits("a/b.md", "a/c.md", documents))

    assert edits == [line_edit("a/d.md", 0, 4, 10, "c.md")]


def test_fragment_is_left_outside_the_edit_range() -> None:
    documents = [Document(path="a/d.md", content="[x](b.md#section)")]

    edits = list(rename_edits("a/b.md", "a/c.md", documents))

    assert edits == [line_edit("a/d.md", 0, 4, 8, "c.md")]


def test_links_to_unrelated_targets_produce_no_edits() -> None:
    documents = [
        Document(path="a/d.md", content="[x](other.md) [y](../b.md) [z](mailto:me@example.com)"),
        Document(path="a/e.md", content=None),
    ]

    assert list(rename_edits("a/b.md", "a/c.md", documents)) == []


def test_excluded_source_path_produces_no_edits() -> None:
    documents = [Document(path="index.md", content="[x](drafts/x.md)")]
    options = Options(exclude=("drafts/**",))

    assert list(rename_edits("drafts/x.md", "docs/x.md", documents, options)) == []


def test_excluded_documents_are_not_rewritten() -> None:
    documents = [
        Document(path="archive/old.md", content="[a](../a.md)"),
        Document(path="index.md", content="[a](a.md)"),
    ]
    options = Options(exclude=("archive/**",))

    edits = list(rename_edits("a.md", "b.md", documents, options))

    assert edits == [line_edit("index.md", 0, 4, 8, "b.md")]


def test_include_list_acts_as_allow_list() -> None:
    documents = [
        Document(path="docs/a.md", content="[t](../target.md)"),
        Document(path="blog/b.md", content="[t](../target.md)"),
    ]
    options = Options(include=("docs/**", "target.md"))

    edits = list(rename_edits("target.md", "moved.md", documents, options))

    assert edits == [line_edit("docs/a.md", 0, 4, 16, "../moved.md")]


def test_windows_separators_are_normalized_in_paths_and_targets() -> None:
    documents = [Document(path="docs\\index.md", content="[x](..\\a.md)")]

    edits = list(rename_edits("a.md", ".\\b.md", documents))

    assert edits == [line_edit("docs/index.md", 0, 4, 11, "../b.md")]


def test_workspace_relative_filtering_with_absolute_paths() -> None:
    documents = [
        Document(path="/ws/docs/a.md", content="[b](b.md)"),
        Document(path="/ws/private/c.md", content="[b](../docs/b.md)"),
    ]
    options = Options(exclude=("private/**",), workspace_path="/ws")

    edits = list(rename_edits("/ws/docs/b.md", "/ws/docs/renamed.md", documents, options))

    assert edits == [line_edit("/ws/docs/a.md", 0, 4, 8, "renamed.md")]


def test_rename_edits_are_deterministic() -> None:
    documents = [
        Document(path="a/c.md", content="[s](sib.md) [o](../other.md)"),
        Document(path="x/y.md", content="[c](../b/b.md)\n[n](../b/b.md) [n2](../b/b.md)"),
    ]

    first = list(rename_edits("b/b.md", "a/c.md", documents))
    second = list(rename_edits("b/b.md", "a/c.md", documents))

    assert first == second
    assert len(first) == 4


def test_rename_edits_are_produced_lazily() -> None:
    documents = [Document(path="index.md", content="[a](old.md)\n[b](old.md)")]

    edits = rename_edits("old.md", "new.md", documents)

    assert next(edits) == line_edit("index.md", 0, 4, 10, "new.md")


def test_single_star_exclude_does_not_hide_nested_documents() -> None:
    documents = [Document(path="guide/index.md", content="[x](old.md)")]

    edits = list(
        rename_edits("guide/old.md", "guide/new.md", documents, Options(exclude=("*.md",)))
    )

    assert edits == [line_edit("guide/index.md", 0, 4, 10, "new.md")]


def test_drift_after_astral_characters_uses_utf16_columns() -> None:
    documents = [Document(path="x.md", content="\U0001F600 [a](a.md) [b](a.md)")]

    edits = list(rename_edits("a.md", "docs/long.md", documents))

    assert edits == [
        line_edit("x.md", 0, 7, 11, "docs/long.md"),
        line_edit("x.md", 0, 25, 29, "docs/long.md"),
    ]
