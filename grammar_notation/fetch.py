r"""Download the language specification and cache it on disk.

The extractor works from a single ``spec.html`` file. This module fetches it
once over HTTP (with retries for transient server errors) and keeps a copy at
a configurable cache path so later runs work offline.

Example
-------
>>> from pathlib import Path
>>> from grammar_notation.fetch import SpecDocumentFetcher
>>> fetcher = SpecDocumentFetcher(
...     "https://example.invalid/spec.html", Path("workdir/spec.html")
... )  # doctest: +SKIP
>>> html = fetcher.fetch()  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import FetchError

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class SpecDocumentFetcher:
    """Fetch the specification source, preferring the on-disk cache."""

    def __init__(
        self,
        source_url: str,
        cache_path: Path,
        *,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialise the fetcher.

        Parameters
        ----------
        source_url : str
            URL of the raw specification HTML.
        cache_path : Path
            File that holds the cached document.
        session : requests.Session, optional
            Preconfigured session; defaults to a new session with retries
            mounted for HTTP and HTTPS.
        timeout : float, optional
            Per-request timeout in seconds. Defaults to ``30.0``.
        """
        self.source_url = source_url
        self.cache_path = cache_path
        self.timeout = timeout
        self._session = session

    def fetch(self, *, refresh: bool = False) -> str:
        """Return the specification text, downloading it on a cache miss.

        Parameters
        ----------
        refresh : bool, optional
            Ignore an existing cache file and download again.

        Returns
        -------
        str
            The document text.

        Raises
        ------
        FetchError
            When the request fails or the server answers with an error status.
        """
        if not refresh and self.cache_path.exists():
            logger.info("Using cached specification at %s", self.cache_path)
            return self.cache_path.read_text(encoding="utf-8")

        logger.info("Downloading specification from %s", self.source_url)
        text = self._download()
        self.cache_path.parent.mkdir(parents=True, exist_ok=True)
        self.cache_path.write_text(text, encoding="utf-8")
        return text

    def _download(self) -> str:
        session = self._session or _build_retrying_session()
        try:
            resp = session.get(self.source_url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            msg = f"Failed to fetch specification from '{self.source_url}': {exc}"
            raise FetchError(msg) from exc
        finally:
            if self._session is None:
                session.close()
        return resp.text


def _build_retrying_session() -> requests.Session:
    """Return a session that retries idempotent requests on 5xx responses."""
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


__all__ = ["SpecDocumentFetcher"]
