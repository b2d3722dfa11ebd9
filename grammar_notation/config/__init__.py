"""Load and validate extraction configuration YAML.

This subpackage parses ``config/grammar.yaml``, applies defaults for every
omitted key, and produces the :class:`ExtractConfig` dataclass consumed by the
pipeline and the CLI. The primary entry point is :func:`load_extract_config`.

Examples
--------
>>> from pathlib import Path
>>> from grammar_notation.config import load_extract_config
>>> config = load_extract_config(Path("config/grammar.yaml"))  # doctest: +SKIP
>>> config.source.cache_path  # doctest: +SKIP
PosixPath('workdir/spec.html')
"""

from .loader import load_extract_config
from .models import (
    ConfigError,
    ExtractConfig,
    OutputConfig,
    SelectionConfig,
    SourceConfig,
)

__all__ = [
    "ConfigError",
    "ExtractConfig",
    "OutputConfig",
    "SelectionConfig",
    "SourceConfig",
    "load_extract_config",
]
