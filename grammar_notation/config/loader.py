"""Load extraction configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import (
    ConfigError,
    ExtractConfig,
    OutputConfig,
    SelectionConfig,
    SourceConfig,
)


def load_extract_config(path: Path) -> ExtractConfig:
    """Load the YAML configuration describing one extraction run.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration (for example,
        ``config/grammar.yaml``).

    Returns
    -------
    ExtractConfig
        Parsed configuration; omitted keys keep their defaults.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ConfigError
        If the document or one of its sections is not a mapping, or a value
        has the wrong type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_extract_config(Path("config/grammar.yaml"))  # doctest: +SKIP
    >>> config.selection.start_section  # doctest: +SKIP
    'sec-ecmascript-language-expressions'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigError(msg)

    return ExtractConfig(
        source=_build_source_config(_section(loaded, "source")),
        output=_build_output_config(_section(loaded, "output")),
        selection=_build_selection_config(_section(loaded, "selection")),
    )


def _section(raw: typ.Mapping[str, typ.Any], key: str) -> typ.Mapping[str, typ.Any]:
    """Return the mapping stored under ``key`` or an empty mapping."""
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        msg = f"Section '{key}' must be a mapping."
        raise ConfigError(msg)
    return value


def _build_source_config(payload: typ.Mapping[str, typ.Any]) -> SourceConfig:
    base = SourceConfig()
    timeout = payload.get("timeout", base.timeout)
    if isinstance(timeout, bool) or not isinstance(timeout, int | float):
        msg = f"source.timeout must be a number, got {timeout!r}"
        raise ConfigError(msg)
    return SourceConfig(
        url=_string(payload, "source.url", base.url),
        cache_path=Path(_string(payload, "source.cache_path", str(base.cache_path))),
        timeout=float(timeout),
    )


def _build_output_config(payload: typ.Mapping[str, typ.Any]) -> OutputConfig:
    base = OutputConfig()
    downstream = _optional_string(payload, "output.downstream")
    return OutputConfig(
        artifact=Path(_string(payload, "output.artifact", str(base.artifact))),
        downstream=Path(downstream) if downstream else None,
    )


def _build_selection_config(payload: typ.Mapping[str, typ.Any]) -> SelectionConfig:
    base = SelectionConfig()
    return SelectionConfig(
        start_section=_string(payload, "selection.start_section", base.start_section),
        excluded_sections=_section_ids(
            payload, "excluded_sections", base.excluded_sections
        ),
        web_sections=_section_ids(payload, "web_sections", base.web_sections),
    )


def _string(payload: typ.Mapping[str, typ.Any], key: str, default: str) -> str:
    """Return the string stored under the last segment of dotted ``key``."""
    match payload.get(key.rpartition(".")[2], default):
        case str() as text:
            return text
        case other:
            msg = f"{key} must be a string, got {other!r}"
            raise ConfigError(msg)


def _optional_string(payload: typ.Mapping[str, typ.Any], key: str) -> str | None:
    """Like :func:`_string`, but a missing or null value yields ``None``."""
    match payload.get(key.rpartition(".")[2]):
        case None:
            return None
        case str() as text:
            return text
        case other:
            msg = f"{key} must be a string, got {other!r}"
            raise ConfigError(msg)


def _section_ids(
    payload: typ.Mapping[str, typ.Any], key: str, default: tuple[str, ...]
) -> tuple[str, ...]:
    """Return a tuple of non-empty section ids stored under ``key``."""
    match payload.get(key):
        case None:
            return default
        case str() as text:
            return tuple(segment for segment in text.split() if segment)
        case list() as values:
            return tuple(str(value).strip() for value in values if str(value).strip())
        case other:
            msg = f"selection.{key} must be a list of section ids, got {other!r}"
            raise ConfigError(msg)


__all__ = ["load_extract_config"]
