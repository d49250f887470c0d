"""Typed models for change events, documents, and computed edits."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass(slots=True, frozen=True)
class Document:
    """Workspace file entry; content may be absent when not yet loaded."""

    path: str
    content: str | None = None


@dataclass(slots=True, frozen=True)
class LinkOccurrence:
    """Single link target with zero-based line/column of its first character."""

    target: str
    line: int
    column: int


@dataclass(slots=True, frozen=True)
class Position:
    """Zero-based position within a document."""

    line: int
    character: int


@dataclass(slots=True, frozen=True)
class Range:
    """Character span; start and end always share one line."""

    start: Position
    end: Position


@dataclass(slots=True, frozen=True)
class Edit:
    """Single-line text replacement targeting one document."""

    path: str
    range: Range
    new_text: str
    requires_path_to_exist: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Return the boundary representation consumed by editors."""
        payload: dict[str, object] = {
            "path": self.path,
            "range": {
                "start": {"line": self.range.start.line, "character": self.range.start.character},
                "end": {"line": self.range.end.line, "character": self.range.end.character},
            },
            "newText": self.new_text,
        }
        if self.requires_path_to_exist is not None:
            payload["requiresPathToExist"] = self.requires_path_to_exist
        return payload


def line_edit(
    path: str,
    line: int,
    start: int,
    end: int,
    new_text: str,
    requires_path_to_exist: str | None = None,
) -> Edit:
    """Build an edit replacing characters [start, end) on one line."""
    return Edit(
        path=path,
        range=Range(start=Position(line, start), end=Position(line, end)),
        new_text=new_text,
        requires_path_to_exist=requires_path_to_exist,
    )


@dataclass(slots=True, frozen=True)
class HeadingRename:
    """Heading whose text changed while keeping the same depth."""

    old_header: str
    new_header: str


@dataclass(slots=True, frozen=True)
class SaveEvent:
    """Single document saved with new content."""

    kind: ClassVar[str] = "save"

    path: str
    content_before: str
    content_after: str


@dataclass(slots=True, frozen=True)
class RenameEvent:
    """File or directory moved from one path to another."""

    kind: ClassVar[str] = "rename"

    path_before: str
    path_after: str


ChangeEvent = SaveEvent | RenameEvent


@dataclass(slots=True, frozen=True)
class Options:
    """Engine settings; empty filter lists include everything.

    An empty ``shortcode_names`` keeps the scanner's default shortcode set.
    """

    exclude: tuple[str, ...] = field(default_factory=tuple)
    include: tuple[str, ...] = field(default_factory=tuple)
    workspace_path: str | None = None
    shortcode_names: tuple[str, ...] = field(default_factory=tuple)


def parse_change_event(payload: object) -> ChangeEvent | None:
    """Parse a boundary event object; unknown event types return None."""
    if not isinstance(payload, dict):
        raise ValueError("Change event must be an object.")
    event_type = payload.get("type")
    body = payload.get("payload", {})
    if event_type not in (SaveEvent.kind, RenameEvent.kind):
        return None
    if not isinstance(body, dict):
        raise ValueError("Change event payload must be an object.")
    if event_type == SaveEvent.kind:
        return SaveEvent(
            path=_required_string(body, "path"),
            content_before=_required_string(body, "contentBefore", allow_empty=True),
            content_after=_required_string(body, "contentAfter", allow_empty=True),
        )
    return RenameEvent(
        path_before=_required_string(body, "pathBefore"),
        path_after=_required_string(body, "pathAfter"),
    )


def documents_from_payload(value: object) -> list[Document]:
    """Parse a boundary file list of {path, content?} objects."""
    if not isinstance(value, list):
        raise ValueError("Field 'documents' must be a list of objects.")
    documents: list[Document] = []
    for item in value:
        if not isinstance(item, dict):
            raise ValueError("Field 'documents' must be a list of objects.")
        content = item.get("content")
        if content is not None and not isinstance(content, str):
            raise ValueError("Document field 'content' must be a string when present.")
        documents.append(Document(path=_required_string(item, "path"), content=content))
    return documents


def _required_string(body: dict[str, object], key: str, allow_empty: bool = False) -> str:
    value = body.get(key)
    if not isinstance(value, str):
        kind = "string" if allow_empty else "non-empty string"
        raise ValueError(f"Field '{key}' must be a {kind}.")
    if not value and not allow_empty:
        raise ValueError(f"Field '{key}' must be a non-empty string.")
    return value
