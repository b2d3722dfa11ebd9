"""High-level orchestration for one grammar extraction run.

:class:`GrammarExtractor` consumes an :class:`~grammar_notation.config.ExtractConfig`,
fetches (or reads the cached) specification, selects the core grammar
fragments, parses and normalizes them, and writes the output document. The
document is assembled completely in memory before anything is written, so a
failing run leaves existing artifacts untouched.

Example
-------
>>> from pathlib import Path
>>> from grammar_notation.config import load_extract_config
>>> from grammar_notation.pipeline import GrammarExtractor
>>> config = load_extract_config(Path("config/grammar.yaml"))  # doctest: +SKIP
>>> GrammarExtractor(config).run()  # doctest: +SKIP
[PosixPath('workdir/grammar-notation.json')]
"""

from __future__ import annotations

import logging
import typing as typ

from .assembler import AstAssembler, OutputDocument
from .errors import UpstreamParseError
from .fetch import SpecDocumentFetcher
from .fragments import extract_fragments
from .handoff import replace_downstream, write_artifact
from .selector import SectionSelector
from .syntax import GrammarParser

if typ.TYPE_CHECKING:
    from pathlib import Path

    import requests

    from .config import ExtractConfig

logger = logging.getLogger(__name__)


class GrammarExtractor:
    """Fetch the specification and emit the normalized grammar document."""

    def __init__(
        self,
        config: ExtractConfig,
        *,
        session: requests.Session | None = None,
        refresh: bool = False,
    ) -> None:
        """Initialise the extractor.

        Parameters
        ----------
        config : ExtractConfig
            Source, output and selection settings.
        session : requests.Session, optional
            Session used for the download; defaults to a retrying session.
        refresh : bool, optional
            Download the specification even when a cached copy exists.
        """
        self.config = config
        self.refresh = refresh
        self.fetcher = SpecDocumentFetcher(
            config.source.url,
            config.source.cache_path,
            session=session,
            timeout=config.source.timeout,
        )
        self.selector = SectionSelector.from_config(config.selection)
        self.parser = GrammarParser()

    def run(self) -> list[Path]:
        """Build the document and write it, returning every path written.

        Raises
        ------
        FetchError
            When the specification cannot be downloaded.
        UpstreamParseError
            When a selected fragment is not valid grammar notation.
        NormalizationError
            When an alternative uses a construct the schema cannot hold.
        """
        document = self.build_document(self._fetch_html())
        written = [write_artifact(document, self.config.output.artifact)]
        downstream = self.config.output.downstream
        if downstream is not None:
            written.append(replace_downstream(written[0], downstream))
        return written

    def build_document(self, html: str) -> OutputDocument:
        """Select, parse and normalize the grammar contained in ``html``."""
        fragments = self.selector.select(extract_fragments(html))
        assembler = AstAssembler()
        for fragment in fragments:
            try:
                grammar = self.parser.parse(fragment.text)
            except UpstreamParseError:
                logger.error("error while parsing fragment %d", fragment.index)
                raise
            assembler.add(grammar)
        return assembler.build()

    def _fetch_html(self) -> str:
        return self.fetcher.fetch(refresh=self.refresh)


__all__ = ["GrammarExtractor"]
