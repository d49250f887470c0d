"""Route change events to the propagation engine that handles them."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from link_keeper.models import ChangeEvent, Document, Edit, Options, RenameEvent, SaveEvent
from link_keeper.propagation.anchors import HeadingToAnchor, heading_to_anchor
from link_keeper.propagation.headings import save_edits
from link_keeper.propagation.rename import rename_edits
from link_keeper.scanner import DEFAULT_SHORTCODE_NAMES


def iter_edits(
    event: ChangeEvent | None,
    documents: Iterable[Document],
    options: Options | None = None,
    to_anchor: HeadingToAnchor = heading_to_anchor,
) -> Iterator[Edit]:
    """Lazily yield edits for one event; unknown events yield nothing."""
    active = options or Options()
    if isinstance(event, SaveEvent):
        yield from save_edits(
            event.path,
            event.content_before,
            event.content_after,
            to_anchor=to_anchor,
            shortcode_names=active.shortcode_names or DEFAULT_SHORTCODE_NAMES,
        )
    elif isinstance(event, RenameEvent):
        yield from rename_edits(event.path_before, event.path_after, documents, active)


def get_edits(
    event: ChangeEvent | None,
    documents: Iterable[Document],
    options: Options | None = None,
    to_anchor: HeadingToAnchor = heading_to_anchor,
) -> list[Edit]:
    """Materialize every edit for one event in emission order."""
    return list(iter_edits(event, documents, options, to_anchor))
