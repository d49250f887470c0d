"""Append-only JSONL audit trail of served requests."""

from __future__ import annotations

import json
from collections import deque
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path


def utc_now() -> str:
    """Return the current UTC time as an ISO-8601 string with a `Z` suffix."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(slots=True, frozen=True)
class AuditRecord:
    """One served request.

    `details` only carries paths, counts and event types chosen by the method
    that ran; document text never reaches the trail.
    """

    request_id: str
    method: str
    ok: bool
    error_code: str | None = None
    details: dict[str, object] = field(default_factory=dict)
    timestamp: str = field(default_factory=utc_now)

    @classmethod
    def for_envelope(
        cls,
        request_id: str,
        method: str,
        envelope: Mapping[str, object],
        details: Mapping[str, object],
    ) -> AuditRecord:
        """Build a record from a response envelope and method-supplied details."""
        error = envelope.get("error")
        code = error.get("code") if isinstance(error, dict) else None
        return cls(
            request_id=request_id,
            method=method,
            ok=envelope.get("ok") is True,
            error_code=code if isinstance(code, str) else None,
            details=dict(details),
        )


class AuditTrail:
    """JSONL file under the data directory, one record per line."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def write(self, record: AuditRecord) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(record), sort_keys=True) + "\n")

    def tail(self, since: str | None = None, limit: int = 50) -> list[dict[str, object]]:
        """Return up to `limit` most recent records at or after `since`."""
        if limit < 1 or not self.path.exists():
            return []
        recent: deque[dict[str, object]] = deque(maxlen=limit)
        with self.path.open("r", encoding="utf-8") as handle:
            for line in handle:
                record = _parse_record(line)
                if record is None:
                    continue
                if since is not None and str(record.get("timestamp", "")) < since:
                    continue
                recent.append(record)
        return list(recent)


def _parse_record(line: str) -> dict[str, object] | None:
    stripped = line.strip()
    if not stripped:
        return None
    try:
        record = json.loads(stripped)
    except json.JSONDecodeError:
        # Torn trailing write from an interrupted process.
        return None
    return record if isinstance(record, dict) else None
