"""Cyclopts CLI entrypoint for extracting normalized grammar notation.

The ``grammar-notation`` console script fetches the ECMAScript specification,
selects the core language grammar, and writes the normalized JSON document
consumed by the parse-node code generator. ``grammar-notation fetch`` only
populates the local cache, which is useful before working offline.

Examples
--------
Run the full extraction with the default configuration:

>>> from grammar_notation.cli import main
>>> main()  # doctest: +SKIP

Write the artifact somewhere else and skip the downstream copy:

>>> from grammar_notation.cli import app
>>> app(["extract", "--output", "dist/grammar.json"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import ExtractConfig, load_extract_config
from .errors import GrammarNotationError
from .fetch import SpecDocumentFetcher
from .pipeline import GrammarExtractor

DEFAULT_CONFIG = Path("config/grammar.yaml")

logger = logging.getLogger(__name__)

app = App(
    name="grammar-notation",
    config=cyclopts.config.Env("GRAMMAR_NOTATION_", command=False),  # type: ignore[unknown-argument]
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=level.upper(),
    )


def _resolve_config(
    config: Path,
    *,
    source_url: str | None = None,
    cache_path: Path | None = None,
    output: Path | None = None,
    downstream: Path | None = None,
) -> ExtractConfig:
    """Load ``config`` and apply command-line overrides."""
    resolved = load_extract_config(config)
    source = resolved.source
    if source_url or cache_path:
        source = dc.replace(
            source,
            url=source_url or source.url,
            cache_path=cache_path or source.cache_path,
        )
    target = resolved.output
    if output or downstream:
        target = dc.replace(
            target,
            artifact=output or target.artifact,
            downstream=downstream or target.downstream,
        )
    return dc.replace(resolved, source=source, output=target)


@app.command(help="Extract and normalize the core language grammar to JSON.")
def extract(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the extraction config")
    ] = DEFAULT_CONFIG,
    source_url: typ.Annotated[
        str | None, Parameter(help="Override the specification URL")
    ] = None,
    cache_path: typ.Annotated[
        Path | None, Parameter(help="Override the cached specification path")
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Override the artifact path")
    ] = None,
    downstream: typ.Annotated[
        Path | None,
        Parameter(help="Replace this file with a copy of the artifact"),
    ] = None,
    refresh: typ.Annotated[
        bool, Parameter(help="Download the specification even if cached")
    ] = False,
    log_level: typ.Annotated[str, Parameter(help="Logging level")] = "WARNING",
) -> None:
    """Run the extraction pipeline and report the files written.

    Parameters
    ----------
    config : Path, optional
        Path to ``grammar.yaml``; defaults to ``config/grammar.yaml``.
    source_url : str or None, optional
        Specification URL used on a cache miss.
    cache_path : Path or None, optional
        Where the specification is cached.
    output : Path or None, optional
        Artifact location.
    downstream : Path or None, optional
        File to replace with the artifact after it is written.
    refresh : bool, optional
        Ignore the cached specification.
    log_level : str, optional
        Standard logging level name.

    Raises
    ------
    GrammarNotationError
        When fetching, parsing or normalization fails; nothing is written.
    """
    _configure_logging(log_level)
    resolved = _resolve_config(
        config,
        source_url=source_url,
        cache_path=cache_path,
        output=output,
        downstream=downstream,
    )
    try:
        written = GrammarExtractor(resolved, refresh=refresh).run()
    except GrammarNotationError:
        logger.exception("grammar extraction failed")
        raise
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Download the specification into the local cache.")
def fetch(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the extraction config")
    ] = DEFAULT_CONFIG,
    source_url: typ.Annotated[
        str | None, Parameter(help="Override the specification URL")
    ] = None,
    cache_path: typ.Annotated[
        Path | None, Parameter(help="Override the cached specification path")
    ] = None,
    refresh: typ.Annotated[
        bool, Parameter(help="Download even if a cached copy exists")
    ] = False,
    log_level: typ.Annotated[str, Parameter(help="Logging level")] = "WARNING",
) -> None:
    """Populate the specification cache without extracting anything."""
    _configure_logging(log_level)
    resolved = _resolve_config(config, source_url=source_url, cache_path=cache_path)
    fetcher = SpecDocumentFetcher(
        resolved.source.url,
        resolved.source.cache_path,
        timeout=resolved.source.timeout,
    )
    fetcher.fetch(refresh=refresh)
    print(f"cached {_format_path(resolved.source.cache_path)}")


def main() -> None:
    """Invoke the Cyclopts application behind the ``grammar-notation`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
