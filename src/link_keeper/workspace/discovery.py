"""Deterministic document discovery for callers without their own file list."""

from __future__ import annotations

import codecs
import os
from pathlib import Path

from link_keeper.config import DiscoveryConfig
from link_keeper.models import Document
from link_keeper.workspace.filters import matches_any

_BINARY_SNIFF_BYTES = 4096


def discover_documents(workspace_root: Path, config: DiscoveryConfig) -> list[Document]:
    """Load every matching text document under the workspace, sorted by path."""
    root = workspace_root.resolve()
    documents: list[Document] = []
    for relative, full_path in _discover_candidates(root, config):
        if is_binary_file(full_path):
            continue
        documents.append(
            Document(path=relative, content=full_path.read_text(encoding="utf-8", errors="replace"))
        )
    documents.sort(key=lambda item: item.path)
    return documents


def has_allowed_extension(relative_path: str, include_extensions: tuple[str, ...]) -> bool:
    """Return True when file extension is included."""
    return Path(relative_path).suffix.lower() in include_extensions


def _discover_candidates(root: Path, config: DiscoveryConfig) -> list[tuple[str, Path]]:
    """Walk the tree with directory pruning for excluded **/name/** globs."""
    excluded_dir_names = _excluded_dir_names(config.exclude_globs)
    candidates: list[tuple[str, Path]] = []
    stack: list[Path] = [root]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                ordered_entries = sorted(entries, key=lambda item: item.name)
        except OSError:
            continue
        for entry in reversed(ordered_entries):
            full_path = Path(entry.path)
            relative = full_path.relative_to(root).as_posix()
            if entry.is_dir(follow_symlinks=False):
                if entry.name in excluded_dir_names and matches_any(relative, config.exclude_globs):
                    continue
                stack.append(full_path)
                continue
            if not entry.is_file(follow_symlinks=False):
                continue
            if matches_any(relative, config.exclude_globs):
                continue
            if not has_allowed_extension(relative, config.include_extensions):
                continue
            candidates.append((relative, full_path))
    return candidates


def _excluded_dir_names(exclude_globs: tuple[str, ...]) -> set[str]:
    output: set[str] = set()
    for pattern in exclude_globs:
        if not pattern.startswith("**/") or not pattern.endswith("/**"):
            continue
        name = pattern[3:-3].strip("/")
        if not name or any(char in name for char in "*?[]{}"):
            continue
        output.add(name)
    return output


def is_binary_file(path: Path) -> bool:
    """Sniff the leading bytes; a multi-byte character cut at the edge is fine."""
    with path.open("rb") as handle:
        sample = handle.read(_BINARY_SNIFF_BYTES)
    if b"\x00" in sample:
        return True
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(sample, final=False)
    except UnicodeDecodeError:
        return True
    return False
