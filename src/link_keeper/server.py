"""STDIO JSON-lines front end for the link maintenance methods."""

from __future__ import annotations

import argparse
import itertools
import json
import sys
from pathlib import Path
from typing import TextIO

from link_keeper.config import CliOverrides, LinkKeeperConfig, load_effective_config
from link_keeper.logging import AuditRecord, AuditTrail
from link_keeper.methods import LinkMethods, MethodError
from link_keeper.models import Document
from link_keeper.workspace.discovery import discover_documents

TOOLS_CALL = "tools/call"


class LinkServer:
    """Answers each JSON request line with one JSON envelope line."""

    def __init__(self, config: LinkKeeperConfig) -> None:
        self._config = config
        self._audit = AuditTrail(config.data_dir / "audit.jsonl")
        self._methods = LinkMethods(config, self._discover, self._audit.tail)
        self._fallback_ids = itertools.count(1)

    def serve(self, in_stream: TextIO, out_stream: TextIO) -> None:
        for raw_line in in_stream:
            if not raw_line.strip():
                continue
            envelope = self.handle_line(raw_line)
            out_stream.write(json.dumps(envelope, sort_keys=True) + "\n")
            out_stream.flush()

    def handle_line(self, raw_line: str) -> dict[str, object]:
        """Decode one request line and answer it."""
        try:
            payload = json.loads(raw_line)
        except json.JSONDecodeError:
            request_id = self._fallback_id()
            envelope = error_envelope(
                request_id, MethodError(code="INVALID_JSON", message="Request must be valid JSON.")
            )
            self._record(request_id, "invalid_json", envelope, {"line_length": len(raw_line)})
            return envelope
        return self.handle_request(payload)

    def handle_request(self, payload: object) -> dict[str, object]:
        """Answer an already decoded request and record it in the audit trail."""
        request_id = self._request_id(payload)
        method = "invalid_request"
        details: dict[str, object] = {}
        try:
            method, params = resolve_call(payload)
            result = self._methods.call(method, params)
        except MethodError as error:
            envelope = error_envelope(request_id, error)
        except Exception:
            envelope = error_envelope(
                request_id,
                MethodError(code="INTERNAL_ERROR", message="Unhandled error while running method."),
            )
        else:
            envelope = {"request_id": request_id, "ok": True, "result": result.payload}
            details = result.audit
        self._record(request_id, method, envelope, details)
        return envelope

    def _request_id(self, payload: object) -> str:
        value = payload.get("id") if isinstance(payload, dict) else None
        if isinstance(value, str) and value:
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return self._fallback_id()

    def _fallback_id(self) -> str:
        return f"req-{next(self._fallback_ids):06d}"

    def _record(
        self,
        request_id: str,
        method: str,
        envelope: dict[str, object],
        details: dict[str, object],
    ) -> None:
        self._audit.write(AuditRecord.for_envelope(request_id, method, envelope, details))

    def _discover(self) -> list[Document]:
        return discover_documents(self._config.workspace_root, self._config.discovery)


def resolve_call(payload: object) -> tuple[str, dict[str, object]]:
    """Return the method name and params, unwrapping `tools/call` requests."""
    if not isinstance(payload, dict):
        raise MethodError(code="INVALID_REQUEST", message="Request must be an object.")
    method = payload.get("method")
    params = payload.get("params", {})
    if not isinstance(method, str) or not method:
        raise MethodError(
            code="INVALID_REQUEST", message="Request method must be a non-empty string."
        )
    if not isinstance(params, dict):
        raise MethodError(code="INVALID_PARAMS", message="Request params must be an object.")
    if method != TOOLS_CALL:
        return method, params
    name = params.get("name")
    arguments = params.get("arguments", {})
    if not isinstance(name, str) or not name:
        raise MethodError(
            code="INVALID_PARAMS", message="tools/call params.name must be a non-empty string."
        )
    if not isinstance(arguments, dict):
        raise MethodError(
            code="INVALID_PARAMS", message="tools/call params.arguments must be an object."
        )
    return name, arguments


def error_envelope(request_id: str, error: MethodError) -> dict[str, object]:
    return {
        "request_id": request_id,
        "ok": False,
        "result": {},
        "error": {"code": error.code, "message": error.message},
    }


def create_server(workspace_root: str, overrides: CliOverrides | None = None) -> LinkServer:
    """Load the effective configuration for a workspace and build its server."""
    return LinkServer(load_effective_config(Path(workspace_root), overrides))


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="link-keeper",
        description="Serve markdown link maintenance edits over STDIO JSON lines.",
    )
    parser.add_argument("--workspace-root", default=".", help="Root the document paths refer to.")
    parser.add_argument("--data-dir", default=None, help="Directory for the audit trail.")
    parser.add_argument(
        "--include", action="append", default=None, metavar="GLOB", help="Allow-list glob."
    )
    parser.add_argument(
        "--exclude", action="append", default=None, metavar="GLOB", help="Deny-list glob."
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    overrides = CliOverrides(
        data_dir=Path(args.data_dir) if args.data_dir is not None else None,
        include=tuple(args.include) if args.include is not None else None,
        exclude=tuple(args.exclude) if args.exclude is not None else None,
    )
    create_server(args.workspace_root, overrides).serve(sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
