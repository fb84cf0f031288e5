"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from protopresence.config.defaults import (
    BASELINE_FILENAME,
    DEFAULT_BASE_REF,
    DEFAULT_CONTEXT_LINES,
    DEFAULT_HEAD_REF,
    DEFAULT_PATHSPEC,
)

Scope = Literal["scalar", "all"]
OutputFormat = Literal["terminal", "json", "sarif"]

SCOPES: tuple[str, ...] = ("scalar", "all")
OUTPUT_FORMATS: tuple[str, ...] = ("terminal", "json", "sarif")
ANNOTATION_FORMATS: tuple[str, ...] = ("github", "none")


@dataclass
class DiffConfig:
    base: str = DEFAULT_BASE_REF
    head: str = DEFAULT_HEAD_REF
    context_lines: int = DEFAULT_CONTEXT_LINES  # minimum 10
    pathspec: List[str] = field(default_factory=lambda: list(DEFAULT_PATHSPEC))


@dataclass
class PolicyConfig:
    scope: Scope = "scalar"


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = False


@dataclass
class IgnoreConfig:
    files: List[str] = field(default_factory=list)


@dataclass
class BaselineConfig:
    path: str = BASELINE_FILENAME


@dataclass
class CIConfig:
    annotation_format: Literal["github", "none"] = "none"


@dataclass
class ProtoPresenceConfig:
    version: str = "1.0"
    diff: DiffConfig = field(default_factory=DiffConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    baseline: BaselineConfig = field(default_factory=BaselineConfig)
    ci: CIConfig = field(default_factory=CIConfig)
