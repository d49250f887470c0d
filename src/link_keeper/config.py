"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from link_keeper.models import Options
from link_keeper.scanner import DEFAULT_SHORTCODE_NAMES

CONFIG_FILE_NAME = "link_keeper.toml"

DEFAULT_INCLUDE_EXTENSIONS = (".md", ".markdown", ".mdx")
DEFAULT_DISCOVERY_EXCLUDE_GLOBS = ("**/.git/**", "**/node_modules/**", "**/.link_keeper/**")


@dataclass(slots=True, frozen=True)
class FilterConfig:
    """Include/exclude globs applied during rename propagation."""

    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class ScannerConfig:
    """Link scanner settings."""

    shortcode_names: tuple[str, ...] = DEFAULT_SHORTCODE_NAMES


@dataclass(slots=True, frozen=True)
class DiscoveryConfig:
    """Settings for building the document list from disk."""

    include_extensions: tuple[str, ...] = DEFAULT_INCLUDE_EXTENSIONS
    exclude_globs: tuple[str, ...] = DEFAULT_DISCOVERY_EXCLUDE_GLOBS


@dataclass(slots=True, frozen=True)
class LinkKeeperConfig:
    """Fully merged configuration."""

    workspace_root: Path
    data_dir: Path
    filter: FilterConfig
    scanner: ScannerConfig
    discovery: DiscoveryConfig

    def options(self) -> Options:
        """Return engine options for this workspace."""
        return Options(
            exclude=self.filter.exclude,
            include=self.filter.include,
            workspace_path=self.workspace_root.as_posix(),
            shortcode_names=self.scanner.shortcode_names,
        )

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for status responses."""
        return {
            "workspace_root": str(self.workspace_root),
            "data_dir": str(self.data_dir),
            "filter": {
                "include": list(self.filter.include),
                "exclude": list(self.filter.exclude),
            },
            "scanner": {
                "shortcode_names": list(self.scanner.shortcode_names),
            },
            "discovery": {
                "include_extensions": list(self.discovery.include_extensions),
                "exclude_globs": list(self.discovery.exclude_globs),
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    data_dir: Path | None = None
    include: tuple[str, ...] | None = None
    exclude: tuple[str, ...] | None = None


def default_config(workspace_root: Path) -> LinkKeeperConfig:
    """Build default config for a given workspace root."""
    resolved_root = workspace_root.resolve()
    return LinkKeeperConfig(
        workspace_root=resolved_root,
        data_dir=resolved_root / ".link_keeper",
        filter=FilterConfig(),
        scanner=ScannerConfig(),
        discovery=DiscoveryConfig(),
    )


def load_workspace_config_file(workspace_root: Path) -> dict[str, object]:
    """Load optional link_keeper.toml from the workspace root."""
    config_path = workspace_root / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _tuple_of_strings(value: object, section: str, field: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{section}.{field}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Config field '{section}.{field}' must contain only strings.")
        output.append(item)
    return tuple(output)


def _optional_strings(
    payload: dict[str, object],
    section: str,
    field: str,
    default: tuple[str, ...],
) -> tuple[str, ...]:
    if field not in payload:
        return default
    return _tuple_of_strings(payload[field], section, field)


def merge_config(
    base: LinkKeeperConfig, workspace_payload: dict[str, object], overrides: CliOverrides
) -> LinkKeeperConfig:
    """Merge defaults, workspace config, then CLI/startup overrides."""
    filter_payload = _get_table(workspace_payload, "filter")
    scanner_payload = _get_table(workspace_payload, "scanner")
    discovery_payload = _get_table(workspace_payload, "discovery")

    shortcode_names = _optional_strings(
        scanner_payload, "scanner", "shortcode_names", base.scanner.shortcode_names
    )
    if not shortcode_names or any(not name.strip() for name in shortcode_names):
        raise ValueError("Config field 'scanner.shortcode_names' must list non-empty names.")

    include_extensions = _optional_strings(
        discovery_payload,
        "discovery",
        "include_extensions",
        base.discovery.include_extensions,
    )
    if any(not extension.startswith(".") for extension in include_extensions):
        raise ValueError("Config field 'discovery.include_extensions' entries must start with '.'.")

    merged = LinkKeeperConfig(
        workspace_root=base.workspace_root,
        data_dir=base.data_dir,
        filter=FilterConfig(
            include=_optional_strings(filter_payload, "filter", "include", base.filter.include),
            exclude=_optional_strings(filter_payload, "filter", "exclude", base.filter.exclude),
        ),
        scanner=ScannerConfig(shortcode_names=shortcode_names),
        discovery=DiscoveryConfig(
            include_extensions=tuple(extension.lower() for extension in include_extensions),
            exclude_globs=_optional_strings(
                discovery_payload,
                "discovery",
                "exclude_globs",
                base.discovery.exclude_globs,
            ),
        ),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: LinkKeeperConfig, overrides: CliOverrides) -> LinkKeeperConfig:
    """Apply startup overrides at highest precedence."""
    filter_config = FilterConfig(
        include=overrides.include if overrides.include is not None else config.filter.include,
        exclude=overrides.exclude if overrides.exclude is not None else config.filter.exclude,
    )
    data_dir = overrides.data_dir or config.data_dir
    return LinkKeeperConfig(
        workspace_root=config.workspace_root,
        data_dir=data_dir.resolve(),
        filter=filter_config,
        scanner=config.scanner,
        discovery=config.discovery,
    )


def load_effective_config(
    workspace_root: Path, overrides: CliOverrides | None = None
) -> LinkKeeperConfig:
    """Load effective config using merge order defaults -> workspace config -> overrides."""
    resolved_root = workspace_root.resolve()
    base = default_config(resolved_root)
    payload = load_workspace_config_file(resolved_root)
    return merge_config(base, payload, overrides or CliOverrides())
