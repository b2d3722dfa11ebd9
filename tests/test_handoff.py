"""Tests for writing the artifact and replacing the downstream copy."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from grammar_notation.assembler import OutputDocument
from grammar_notation.handoff import replace_downstream, write_artifact
from grammar_notation.models import OneOfProduction


def test_write_artifact_creates_parents(tmp_path: Path) -> None:
    document = OutputDocument(
        one_of_productions=(OneOfProduction("Digit", ("0", "1")),)
    )
    path = write_artifact(document, tmp_path / "out" / "grammar.json")
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "sequenceProductions": [],
        "oneOfProductions": [{"name": "Digit", "terminals": ["0", "1"]}],
    }


def test_downstream_is_fully_replaced(tmp_path: Path) -> None:
    artifact = tmp_path / "grammar.json"
    artifact.write_text('{"short": 1}', encoding="utf-8")
    destination = tmp_path / "compiler" / "parse_nodes.json"
    destination.parent.mkdir()
    destination.write_text('{"a much longer stale document": [1, 2, 3]}')

    replace_downstream(artifact, destination)

    assert destination.read_bytes() == artifact.read_bytes()


def test_downstream_parent_is_created(tmp_path: Path) -> None:
    artifact = tmp_path / "grammar.json"
    artifact.write_text("{}", encoding="utf-8")
    destination = replace_downstream(artifact, tmp_path / "a" / "b" / "out.json")
    assert destination.read_text(encoding="utf-8") == "{}"


def test_missing_artifact_leaves_destination(tmp_path: Path) -> None:
    destination = tmp_path / "parse_nodes.json"
    destination.write_text("previous", encoding="utf-8")
    with pytest.raises(FileNotFoundError):
        replace_downstream(tmp_path / "absent.json", destination)
    assert destination.read_text(encoding="utf-8") == "previous"
