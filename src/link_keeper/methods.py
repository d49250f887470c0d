"""The `links.*` methods served over STDIO."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass, field

from link_keeper.config import LinkKeeperConfig
from link_keeper.models import Document, documents_from_payload, parse_change_event
from link_keeper.propagation import iter_edits
from link_keeper.scanner import ScanRules, scan
from link_keeper.workspace import should_include

DEFAULT_AUDIT_LIMIT = 50
MAX_AUDIT_LIMIT = 200


@dataclass(slots=True, frozen=True)
class MethodError(Exception):
    """Failure reported to the client as an error code and message."""

    code: str
    message: str


@dataclass(slots=True, frozen=True)
class MethodResult:
    """Method payload plus the content-free details kept in the audit trail."""

    payload: dict[str, object]
    audit: dict[str, object] = field(default_factory=dict)


MethodHandler = Callable[[dict[str, object]], MethodResult]


class LinkMethods:
    """Method table bound to one workspace configuration."""

    def __init__(
        self,
        config: LinkKeeperConfig,
        list_documents: Callable[[], list[Document]],
        read_audit: Callable[[str | None, int], list[dict[str, object]]],
    ) -> None:
        self._config = config
        self._options = config.options()
        self._rules = ScanRules(shortcode_names=config.scanner.shortcode_names)
        self._list_documents = list_documents
        self._read_audit = read_audit
        self._handlers: dict[str, MethodHandler] = {
            "links.status": self.status,
            "links.scan": self.scan,
            "links.edits": self.edits,
            "links.should_include": self.should_include,
            "links.audit_log": self.audit_log,
        }

    def names(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def call(self, name: str, params: dict[str, object]) -> MethodResult:
        """Run one method by name."""
        handler = self._handlers.get(name)
        if handler is None:
            raise MethodError(code="UNKNOWN_METHOD", message=f"Unknown method: {name}")
        return handler(params)

    def status(self, _: dict[str, object]) -> MethodResult:
        return MethodResult(
            payload={
                "workspace_root": str(self._config.workspace_root),
                "methods": list(self.names()),
                "effective_config": self._config.to_public_dict(),
            }
        )

    def scan(self, params: dict[str, object]) -> MethodResult:
        """List link targets with their line and UTF-16 column."""
        content = params.get("content")
        if content is not None and not isinstance(content, str):
            raise MethodError(code="INVALID_PARAMS", message="links.scan content must be a string.")
        links = [asdict(occurrence) for occurrence in scan(content, self._rules)]
        return MethodResult(
            payload={"links": links},
            audit={"content_length": len(content or ""), "link_count": len(links)},
        )

    def edits(self, params: dict[str, object]) -> MethodResult:
        """Compute the edits one change event requires across the workspace."""
        try:
            event = parse_change_event(params.get("event"))
            if "documents" in params:
                documents = documents_from_payload(params["documents"])
                source = "request"
            else:
                documents = self._list_documents() if event is not None else []
                source = "discovery"
        except ValueError as error:
            raise MethodError(code="INVALID_PARAMS", message=str(error)) from error
        edits = [edit.to_dict() for edit in iter_edits(event, documents, self._options)]
        event_type = None if event is None else event.kind
        return MethodResult(
            payload={"event_type": event_type, "edits": edits},
            audit={
                "event_type": event_type,
                "documents_count": len(documents),
                "documents_source": source,
                "edit_count": len(edits),
            },
        )

    def should_include(self, params: dict[str, object]) -> MethodResult:
        path = params.get("path")
        if not isinstance(path, str) or not path:
            raise MethodError(
                code="INVALID_PARAMS",
                message="links.should_include path must be a non-empty string.",
            )
        included = should_include(
            path, self._options.include, self._options.exclude, self._options.workspace_path
        )
        return MethodResult(
            payload={"path": path, "included": included},
            audit={"path": path, "included": included},
        )

    def audit_log(self, params: dict[str, object]) -> MethodResult:
        since = params.get("since")
        limit = params.get("limit", DEFAULT_AUDIT_LIMIT)
        if isinstance(limit, bool) or not isinstance(limit, int):
            limit = DEFAULT_AUDIT_LIMIT
        limit = max(1, min(limit, MAX_AUDIT_LIMIT))
        entries = self._read_audit(since if isinstance(since, str) else None, limit)
        return MethodResult(
            payload={"entries": entries},
            audit={"limit": limit, "returned": len(entries)},
        )
