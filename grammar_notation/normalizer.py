r"""Reduce grammar syntax trees to normalized symbol nodes.

:func:`normalize_span` folds a right-hand side's span chain into a tuple of
:data:`~grammar_notation.models.NormalizedNode` values. Constructs the schema
cannot express are dropped: lookahead restrictions, ``[empty]`` and the
exclusion clause of ``but not``. Anything the schema does not know about
raises :class:`~grammar_notation.errors.NormalizationError` rather than being
skipped.

Example
-------
>>> from grammar_notation.syntax import GrammarParser
>>> rhs = GrammarParser().parse_rhs(
...     "IdentifierName [no LineTerminator here] Arguments?"
... )
>>> [node.as_json() for node in normalize_span(rhs.head)]
[{'name': {'name': 'IdentifierName'}}, {'name': {'name': 'Arguments', 'optional': True}}]
"""

from __future__ import annotations

import html
import typing as typ

from ._constants import LINE_TERMINATOR
from .errors import NormalizationError
from .models import (
    Alternative,
    LiteralNode,
    NameNode,
    NormalizedNode,
    OneOfNode,
    SymbolNode,
)
from .syntax import (
    ButNotSymbol,
    EmptyAssertion,
    LexicalSymbol,
    LookaheadAssertion,
    NamedCharacter,
    NoSymbolHereAssertion,
    Nonterminal,
    OneOfList,
    Prose,
    RightHandSide,
    SymbolSpan,
    Terminal,
)

Nodes = tuple[NormalizedNode, ...]


def normalize_alternative(rhs: RightHandSide) -> Alternative:
    """Return the normalized form of one right-hand side."""
    return Alternative(source=rhs.source, sequence=normalize_span(rhs.head))


def normalize_span(span: SymbolSpan | None) -> Nodes:
    """Normalize ``span`` and every span after it, in order."""
    if span is None:
        return ()
    return normalize_symbol(span.symbol) + normalize_span(span.next)


def normalize_symbol(symbol: LexicalSymbol) -> Nodes:
    """Return the nodes contributed by a single symbol (possibly none)."""
    match symbol:
        case Terminal(text=text):
            return (LiteralNode(text),)
        case NamedCharacter(text=text):
            return (SymbolNode(text),)
        case Nonterminal(name=name, optional=optional):
            return (NameNode(name, optional=optional),)
        case LookaheadAssertion():
            return ()
        case NoSymbolHereAssertion(symbols=members):
            return _normalize_inline_set(members)
        case ButNotSymbol(left=left):
            return normalize_symbol(left)
        case EmptyAssertion():
            return ()
        case Prose(text=text):
            msg = f"Unhandled prose symbol {text!r}"
            raise NormalizationError(msg)
        case _:
            typ.assert_never(symbol)


def _normalize_inline_set(members: tuple[LexicalSymbol, ...]) -> Nodes:
    """Collapse an inline set of literals, or drop it when it bars a line break."""
    options: list[str] = []
    mentions_line_terminator = False
    for member in members:
        match member:
            case Terminal(text=text):
                options.append(text)
            case Nonterminal(name=name) if name == LINE_TERMINATOR:
                mentions_line_terminator = True
            case _:
                msg = f"Unhandled member {member!r} in inline symbol set"
                raise NormalizationError(msg)
    if mentions_line_terminator:
        return ()
    return (OneOfNode(tuple(options)),)


def normalize_one_of(body: OneOfList) -> tuple[str, ...]:
    """Return the decoded terminal texts of a ``one of`` body, in order."""
    return tuple(html.unescape(terminal.text) for terminal in body.terminals)


__all__ = [
    "normalize_alternative",
    "normalize_one_of",
    "normalize_span",
    "normalize_symbol",
]
