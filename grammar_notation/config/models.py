"""Typed dataclasses describing grammar extraction configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from grammar_notation._constants import (
    DEFAULT_ARTIFACT_PATH,
    DEFAULT_CACHE_PATH,
    DEFAULT_SOURCE_URL,
    EXCLUDED_SECTIONS,
    START_SECTION,
    WEB_SECTIONS,
)


class ConfigError(ValueError):
    """Raised when the extraction configuration is invalid."""


@dc.dataclass(slots=True)
class SourceConfig:
    """Where the specification document comes from and where it is cached."""

    url: str = DEFAULT_SOURCE_URL
    cache_path: Path = Path(DEFAULT_CACHE_PATH)
    timeout: float = 30.0


@dc.dataclass(slots=True)
class OutputConfig:
    """Artifact location plus the optional downstream copy target."""

    artifact: Path = Path(DEFAULT_ARTIFACT_PATH)
    downstream: Path | None = None


@dc.dataclass(slots=True)
class SelectionConfig:
    """Section identifiers that drive fragment selection."""

    start_section: str = START_SECTION
    excluded_sections: tuple[str, ...] = EXCLUDED_SECTIONS
    web_sections: tuple[str, ...] = WEB_SECTIONS


@dc.dataclass(slots=True)
class ExtractConfig:
    """Fully resolved configuration for one extraction run."""

    source: SourceConfig = dc.field(default_factory=SourceConfig)
    output: OutputConfig = dc.field(default_factory=OutputConfig)
    selection: SelectionConfig = dc.field(default_factory=SelectionConfig)


__all__ = [
    "ConfigError",
    "ExtractConfig",
    "OutputConfig",
    "SelectionConfig",
    "SourceConfig",
]
