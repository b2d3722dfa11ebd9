"""Tests for downloading and caching the specification."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
import requests

from grammar_notation.errors import FetchError
from grammar_notation.fetch import SpecDocumentFetcher, _build_retrying_session

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

URL = "https://example.invalid/spec.html"


def _session(mocker: MockerFixture, text: str = "<html></html>") -> requests.Session:
    response = mocker.Mock(spec=requests.Response)
    response.text = text
    session = mocker.Mock(spec=requests.Session)
    session.get.return_value = response
    return session


def test_cache_hit_skips_network(tmp_path: Path, mocker: MockerFixture) -> None:
    cache = tmp_path / "spec.html"
    cache.write_text("cached", encoding="utf-8")
    session = _session(mocker)

    text = SpecDocumentFetcher(URL, cache, session=session).fetch()

    assert text == "cached"
    session.get.assert_not_called()


def test_cache_miss_downloads_and_writes_cache(
    tmp_path: Path, mocker: MockerFixture
) -> None:
    cache = tmp_path / "nested" / "spec.html"
    session = _session(mocker, "<emu-grammar></emu-grammar>")

    text = SpecDocumentFetcher(URL, cache, session=session, timeout=5.0).fetch()

    assert text == "<emu-grammar></emu-grammar>"
    assert cache.read_text(encoding="utf-8") == text
    session.get.assert_called_once_with(URL, timeout=5.0)
    session.close.assert_not_called()


def test_refresh_ignores_cache(tmp_path: Path, mocker: MockerFixture) -> None:
    cache = tmp_path / "spec.html"
    cache.write_text("stale", encoding="utf-8")
    session = _session(mocker, "fresh")

    text = SpecDocumentFetcher(URL, cache, session=session).fetch(refresh=True)

    assert text == "fresh"
    assert cache.read_text(encoding="utf-8") == "fresh"


def test_http_error_raises_fetch_error(tmp_path: Path, mocker: MockerFixture) -> None:
    cache = tmp_path / "spec.html"
    session = _session(mocker)
    session.get.return_value.raise_for_status.side_effect = requests.HTTPError(
        "503 Server Error"
    )

    with pytest.raises(FetchError, match="503 Server Error"):
        SpecDocumentFetcher(URL, cache, session=session).fetch()

    assert not cache.exists(), "expected no cache file after a failed download"


def test_default_session_retries_and_is_closed(
    tmp_path: Path, mocker: MockerFixture
) -> None:
    session = _session(mocker, "body")
    build = mocker.patch(
        "grammar_notation.fetch._build_retrying_session", return_value=session
    )

    SpecDocumentFetcher(URL, tmp_path / "spec.html").fetch()

    build.assert_called_once_with()
    session.close.assert_called_once_with()


def test_retrying_session_mounts_retry_policy() -> None:
    session = _build_retrying_session()
    try:
        retries = session.get_adapter("https://example.invalid").max_retries
    finally:
        session.close()
    assert retries.total == 5
    assert 503 in retries.status_forcelist
