"""Behaviour tests for end-to-end grammar extraction.

These scenarios run the extraction pipeline against a cached copy of a small
specification document. The first checks that web-browser extension grammar
never reaches the artifact and that the downstream copy is replaced with the
artifact. The second checks that an alternative the output schema cannot
represent stops the run before anything is written.

The scenarios are backed by ``features/extract_grammar.feature``.
"""

from __future__ import annotations

import collections.abc as cabc
from pathlib import Path

import msgspec.json as msgspec_json
import pytest
from pytest_bdd import given, scenarios, then, when

from grammar_notation.config import load_extract_config
from grammar_notation.errors import NormalizationError
from grammar_notation.pipeline import GrammarExtractor

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "extract_grammar.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _config_path(scenario_state: dict[str, object]) -> Path:
    path = scenario_state.get("config_path")
    assert isinstance(path, Path), "expected a config path from a given step"
    return path


def _artifact(scenario_state: dict[str, object]) -> dict[str, list[dict[str, object]]]:
    config = load_extract_config(_config_path(scenario_state))
    return msgspec_json.decode(config.output.artifact.read_bytes())


@given("a cached specification with core and web-browser grammar")
def given_core_and_web_grammar(
    spec_html: str,
    write_config: cabc.Callable[..., Path],
    tmp_path: Path,
    scenario_state: dict[str, object],
) -> None:
    """Cache the representative specification and request a downstream copy.

    Parameters
    ----------
    spec_html : str
        Specification HTML containing core, regular-expression and
        web-browser grammar.
    write_config : Callable[..., Path]
        Fixture helper that writes the cache file and ``grammar.yaml``.
    tmp_path : Path
        Temporary directory provided by pytest.
    scenario_state : dict[str, object]
        Mutable state shared across steps.
    """
    downstream = tmp_path / "compiler" / "parse_nodes.json"
    downstream.parent.mkdir(parents=True)
    downstream.write_text('{"stale": true}', encoding="utf-8")
    scenario_state["downstream"] = downstream
    scenario_state["config_path"] = write_config(spec_html, downstream=downstream)


@given("a cached specification whose core grammar uses prose")
def given_prose_grammar(
    prose_spec_html: str,
    write_config: cabc.Callable[..., Path],
    scenario_state: dict[str, object],
) -> None:
    """Cache a specification whose only selected production uses prose."""
    scenario_state["config_path"] = write_config(prose_spec_html)


@when("the grammar is extracted")
def when_extracted(scenario_state: dict[str, object]) -> None:
    """Run the extractor with the configuration from the given step."""
    config = load_extract_config(_config_path(scenario_state))
    scenario_state["written"] = GrammarExtractor(config).run()


@when("the grammar is extracted expecting a failure")
def when_extraction_fails(scenario_state: dict[str, object]) -> None:
    """Run the extractor and capture the normalization failure."""
    config = load_extract_config(_config_path(scenario_state))
    with pytest.raises(NormalizationError) as excinfo:
        GrammarExtractor(config).run()
    scenario_state["error"] = excinfo.value


@then("the artifact lists the core productions in document order")
def then_core_productions(scenario_state: dict[str, object]) -> None:
    """Assert the sequence productions follow fragment order."""
    payload = _artifact(scenario_state)
    names = [production["name"] for production in payload["sequenceProductions"]]
    assert names == [
        "IdentifierReference",
        "Identifier",
        "MemberExpression",
        "Arguments",
        "ExpressionStatement",
    ], f"unexpected productions: {names}"
    one_of = [production["name"] for production in payload["oneOfProductions"]]
    assert one_of == ["OtherPunctuator"]


@then("the artifact has no web-browser productions")
def then_no_web_productions(scenario_state: dict[str, object]) -> None:
    """Assert neither annex nor regular-expression grammar was selected."""
    payload = _artifact(scenario_state)
    names = {production["name"] for production in payload["sequenceProductions"]}
    assert "Comment" not in names, "expected web-browser grammar to be excluded"
    assert "Pattern" not in names, "expected regular-expression grammar to be excluded"
    assert "WhiteSpace" not in names, "expected lexical grammar to be excluded"


@then("the downstream copy matches the artifact")
def then_downstream_matches(scenario_state: dict[str, object]) -> None:
    """Assert the downstream file was replaced by the artifact."""
    written = scenario_state["written"]
    assert isinstance(written, list)
    artifact, downstream = written
    assert downstream == scenario_state["downstream"]
    assert downstream.read_bytes() == artifact.read_bytes()


@then("the failure names the production and alternative")
def then_failure_has_context(scenario_state: dict[str, object]) -> None:
    """Assert the error carries the production and its alternative text."""
    error = scenario_state["error"]
    assert isinstance(error, NormalizationError)
    assert error.production == "SourceCharacter"
    assert error.source == "> any Unicode code point"
    assert error.fragment is not None
    assert "SourceCharacter ::" in error.fragment


@then("no artifact is written")
def then_no_artifact(scenario_state: dict[str, object]) -> None:
    """Assert the failed run left no artifact behind."""
    config = load_extract_config(_config_path(scenario_state))
    assert not config.output.artifact.exists(), "expected no artifact after failure"
