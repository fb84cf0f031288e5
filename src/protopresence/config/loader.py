"""Load and merge configuration from .protopresence.toml and env vars."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib  # type: ignore[import-not-found]
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

from protopresence.config.defaults import CONFIG_FILENAME, MIN_CONTEXT_LINES
from protopresence.config.schema import (
    ANNOTATION_FORMATS,
    OUTPUT_FORMATS,
    SCOPES,
    BaselineConfig,
    CIConfig,
    DiffConfig,
    IgnoreConfig,
    OutputConfig,
    PolicyConfig,
    ProtoPresenceConfig,
)


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: ProtoPresenceConfig) -> None:
    """Apply CI_PROTOPRESENCE_* environment variable overrides."""
    if val := os.environ.get("CI_PROTOPRESENCE_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("CI_PROTOPRESENCE_SCOPE"):
        if val in SCOPES:
            cfg.policy.scope = val  # type: ignore[assignment]
    if val := os.environ.get("CI_PROTOPRESENCE_BASE_REF"):
        cfg.diff.base = val.strip()
    if val := os.environ.get("CI_PROTOPRESENCE_IGNORE_PATHS"):
        sep = ":" if os.name != "nt" else ";"
        cfg.ignore.files.extend(p.strip() for p in val.split(sep) if p.strip())


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    import dataclasses

    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: ProtoPresenceConfig) -> None:
    if cfg.policy.scope not in SCOPES:
        raise ConfigError(
            f"Invalid policy.scope {cfg.policy.scope!r} (expected one of: {', '.join(SCOPES)})"
        )
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output.format {cfg.output.format!r} "
            f"(expected one of: {', '.join(OUTPUT_FORMATS)})"
        )
    if cfg.ci.annotation_format not in ANNOTATION_FORMATS:
        raise ConfigError(f"Invalid ci.annotation_format {cfg.ci.annotation_format!r}")
    if not isinstance(cfg.diff.context_lines, int) or cfg.diff.context_lines < MIN_CONTEXT_LINES:
        raise ConfigError(
            f"diff.context_lines must be an integer >= {MIN_CONTEXT_LINES}, "
            f"got {cfg.diff.context_lines!r}"
        )
    if isinstance(cfg.diff.pathspec, str):
        cfg.diff.pathspec = [cfg.diff.pathspec]
    if not cfg.diff.pathspec:
        raise ConfigError("diff.pathspec must name at least one pattern")


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> ProtoPresenceConfig:
    """Load, validate, and return a ProtoPresenceConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = ProtoPresenceConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = ProtoPresenceConfig(
            version=raw.get("version", "1.0"),
            diff=_build_section(raw, DiffConfig, "diff"),
            policy=_build_section(raw, PolicyConfig, "policy"),
            output=_build_section(raw, OutputConfig, "output"),
            ignore=_build_section(raw, IgnoreConfig, "ignore"),
            baseline=_build_section(raw, BaselineConfig, "baseline"),
            ci=_build_section(raw, CIConfig, "ci"),
        )

    _merge_env_overrides(cfg)
    _validate(cfg)
    return cfg
