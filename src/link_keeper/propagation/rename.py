"""Relative link recomputation after a file or directory move."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from link_keeper.models import Document, Edit, LinkOccurrence, Options, line_edit
from link_keeper.scanner import ScanRules, scan, utf16_length
from link_keeper.workspace import (
    is_location_independent,
    join_path,
    normalize_path,
    parent_dir,
    relative_path,
    should_include,
)


@dataclass(slots=True)
class _LineDrift:
    """Running length delta of edits already emitted on the current line."""

    line: int = -1
    delta: int = 0

    def edit(
        self,
        path: str,
        occurrence: LinkOccurrence,
        new_text: str,
        requires_path_to_exist: str | None = None,
    ) -> Edit:
        if occurrence.line != self.line:
            self.line = occurrence.line
            self.delta = 0
        start = occurrence.column + self.delta
        self.delta += utf16_length(new_text) - utf16_length(occurrence.target)
        return line_edit(
            path,
            occurrence.line,
            start,
            start + utf16_length(occurrence.target),
            new_text,
            requires_path_to_exist,
        )


def rename_edits(
    path_before: str,
    path_after: str,
    documents: Iterable[Document],
    options: Options | None = None,
) -> Iterator[Edit]:
    """Yield edits keeping links valid after path_before moved to path_after."""
    active = options or Options()
    before = normalize_path(path_before)
    after = normalize_path(path_after)
    rules = ScanRules(shortcode_names=active.shortcode_names) if active.shortcode_names else None

    def included(path: str) -> bool:
        return should_include(path, active.include, active.exclude, active.workspace_path)

    if not included(before):
        return
    candidates = [
        Document(path=normalize_path(document.path), content=document.content)
        for document in documents
    ]
    visible = [document for document in candidates if included(document.path)]

    moved = next((document for document in visible if document.path == after), None)
    if moved is not None:
        yield from _self_link_edits(moved, before, after, rules)

    for document in visible:
        if document.path == after:
            continue
        yield from _referencing_edits(document, before, after, rules)


def _ordered_links(document: Document, rules: ScanRules | None) -> list[LinkOccurrence]:
    return sorted(scan(document.content, rules), key=lambda item: (item.line, item.column))


def _self_link_edits(
    document: Document,
    before: str,
    after: str,
    rules: ScanRules | None,
) -> Iterator[Edit]:
    old_base = parent_dir(before)
    new_base = parent_dir(after)
    drift = _LineDrift()
    for occurrence in _ordered_links(document, rules):
        if is_location_independent(occurrence.target):
            continue
        absolute_target = join_path(old_base, occurrence.target)
        new_link = relative_path(new_base, absolute_target)
        if normalize_path(occurrence.target) == new_link:
            continue
        yield drift.edit(document.path, occurrence, new_link, absolute_target)


def _referencing_edits(
    document: Document,
    before: str,
    after: str,
    rules: ScanRules | None,
) -> Iterator[Edit]:
    base = parent_dir(document.path)
    before_key = before.lower()
    folder_key = f"{before_key}/"
    drift = _LineDrift()
    for occurrence in _ordered_links(document, rules):
        if is_location_independent(occurrence.target):
            continue
        absolute_target = join_path(base, occurrence.target)
        target_key = absolute_target.lower()
        if target_key == before_key:
            new_link = relative_path(base, after)
            if normalize_path(occurrence.target) == new_link:
                continue
            yield drift.edit(document.path, occurrence, new_link)
        elif target_key.startswith(folder_key):
            new_absolute_target = f"{after}/{absolute_target[len(before) + 1 :]}"
            new_link = relative_path(base, new_absolute_target)
            if normalize_path(occurrence.target) == new_link:
                continue
            yield drift.edit(document.path, occurrence, new_link, new_absolute_target)
