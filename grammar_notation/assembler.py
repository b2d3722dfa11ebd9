"""Assemble normalized productions into the output document.

:class:`AstAssembler` accepts parsed grammar files one at a time, classifies
and normalizes their productions, and keeps them in encounter order. The
resulting :class:`OutputDocument` is the only artifact of a run: nothing is
deduplicated or merged, so a production defined in two fragments appears
twice.

Example
-------
>>> from grammar_notation.syntax import GrammarParser
>>> assembler = AstAssembler()
>>> assembler.add(GrammarParser().parse("Digit :: one of `0` `1`"))
>>> assembler.build().as_json()["oneOfProductions"]
[{'name': 'Digit', 'terminals': ['0', '1']}]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import json
import logging
import typing as typ

from .classifier import classify_productions
from .errors import NormalizationError
from .models import JsonMapping, OneOfProduction, SequenceProduction
from .normalizer import normalize_alternative, normalize_one_of
from .syntax import OneOfList, RightHandSideList

if typ.TYPE_CHECKING:
    from .syntax import GrammarFile, Production

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class OutputDocument:
    """Every normalized production of a run, in encounter order."""

    sequence_productions: tuple[SequenceProduction, ...] = ()
    one_of_productions: tuple[OneOfProduction, ...] = ()

    def as_json(self) -> JsonMapping:
        """Return the document as plain lists and dicts."""
        return {
            "sequenceProductions": [
                production.as_json() for production in self.sequence_productions
            ],
            "oneOfProductions": [
                production.as_json() for production in self.one_of_productions
            ],
        }

    def dumps(self) -> str:
        """Serialise the document to JSON text."""
        return json.dumps(self.as_json(), ensure_ascii=False)


class AstAssembler:
    """Collect normalized productions across grammar files."""

    def __init__(self) -> None:
        self._sequence: list[SequenceProduction] = []
        self._one_of: list[OneOfProduction] = []

    def add(self, grammar: GrammarFile) -> None:
        """Classify and normalize every production of ``grammar``.

        Raises
        ------
        NormalizationError
            When an alternative contains an unsupported construct. The error
            names the production, the alternative and the fragment text.
        """
        classified = classify_productions(grammar)
        for production in classified.sequence:
            self._sequence.append(_normalize_sequence(production, grammar.text))
        for production in classified.one_of:
            body = typ.cast("OneOfList", production.body)
            self._one_of.append(
                OneOfProduction(name=production.name, terminals=normalize_one_of(body))
            )

    def extend(self, grammars: cabc.Iterable[GrammarFile]) -> None:
        """Add several grammar files in order."""
        for grammar in grammars:
            self.add(grammar)

    def build(self) -> OutputDocument:
        """Return the document assembled so far."""
        logger.info(
            "Assembled %d sequence productions and %d one-of productions",
            len(self._sequence),
            len(self._one_of),
        )
        return OutputDocument(
            sequence_productions=tuple(self._sequence),
            one_of_productions=tuple(self._one_of),
        )


def assemble_document(grammars: cabc.Iterable[GrammarFile]) -> OutputDocument:
    """Build an :class:`OutputDocument` from parsed grammar files."""
    assembler = AstAssembler()
    assembler.extend(grammars)
    return assembler.build()


def _normalize_sequence(production: Production, fragment: str) -> SequenceProduction:
    body = production.body
    rhss = body.elements if isinstance(body, RightHandSideList) else ()
    alternatives = []
    for rhs in rhss:
        try:
            alternatives.append(normalize_alternative(rhs))
        except NormalizationError as exc:
            logger.error(
                "error while normalizing %s (alternative %r) in fragment:\n%s",
                production.name,
                rhs.source,
                fragment,
            )
            raise exc.with_context(
                production=production.name, source=rhs.source, fragment=fragment
            ) from exc
    return SequenceProduction(name=production.name, body=tuple(alternatives))


__all__ = ["AstAssembler", "OutputDocument", "assemble_document"]
