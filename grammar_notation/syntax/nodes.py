"""Syntax tree for ecmarkup grammar notation.

A parsed fragment is a :class:`GrammarFile` holding productions and meta
elements. Right-hand sides keep their symbols as a chain of
:class:`SymbolSpan` links. Lexical symbols form a closed union
(:data:`LexicalSymbol`) so consumers can match on it exhaustively.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ


@dc.dataclass(frozen=True, slots=True)
class Terminal:
    """A backticked literal; ``text`` excludes the backticks."""

    text: str


@dc.dataclass(frozen=True, slots=True)
class NamedCharacter:
    """A code point written by name, such as ``<TAB>``."""

    text: str


@dc.dataclass(frozen=True, slots=True)
class Nonterminal:
    """A reference to another production."""

    name: str
    arguments: tuple[str, ...] = ()
    optional: bool = False


@dc.dataclass(frozen=True, slots=True)
class LookaheadAssertion:
    """``[lookahead op operand]``; operands are terminal sequences or a name."""

    operator: str
    operands: tuple[tuple[LexicalSymbol, ...], ...]


@dc.dataclass(frozen=True, slots=True)
class NoSymbolHereAssertion:
    """``[no X here]``: an inline set of symbols barred at this position."""

    symbols: tuple[LexicalSymbol, ...]


@dc.dataclass(frozen=True, slots=True)
class ButNotSymbol:
    """``left but not exclusion``."""

    left: LexicalSymbol
    exclusions: tuple[LexicalSymbol, ...]


@dc.dataclass(frozen=True, slots=True)
class EmptyAssertion:
    """``[empty]``."""


@dc.dataclass(frozen=True, slots=True)
class Prose:
    """``> free text`` describing a set of code points."""

    text: str


LexicalSymbol: typ.TypeAlias = (
    Terminal
    | NamedCharacter
    | Nonterminal
    | LookaheadAssertion
    | NoSymbolHereAssertion
    | ButNotSymbol
    | EmptyAssertion
    | Prose
)


@dc.dataclass(frozen=True, slots=True)
class SymbolSpan:
    """One symbol of a right-hand side and the rest of the chain."""

    symbol: LexicalSymbol
    next: SymbolSpan | None = None

    @classmethod
    def chain(cls, symbols: typ.Sequence[LexicalSymbol]) -> SymbolSpan | None:
        """Link ``symbols`` into a span chain, returning its head."""
        head: SymbolSpan | None = None
        for symbol in reversed(symbols):
            head = cls(symbol, head)
        return head

    def __iter__(self) -> typ.Iterator[SymbolSpan]:
        span: SymbolSpan | None = self
        while span is not None:
            yield span
            span = span.next


@dc.dataclass(frozen=True, slots=True)
class RightHandSide:
    """One alternative of a production.

    Attributes
    ----------
    source : str
        Verbatim text of the alternative.
    head : SymbolSpan | None
        First link of the symbol chain; ``None`` when nothing was written.
    constraints : tuple[str, ...]
        Leading parameter guard such as ``+Default``.
    label : str | None
        Trailing ``#label`` without the hash.
    """

    source: str
    head: SymbolSpan | None
    constraints: tuple[str, ...] = ()
    label: str | None = None


@dc.dataclass(frozen=True, slots=True)
class RightHandSideList:
    """Body made of one right-hand side per line."""

    elements: tuple[RightHandSide, ...]


@dc.dataclass(frozen=True, slots=True)
class OneOfList:
    """Body written as ``one of`` followed by terminals."""

    terminals: tuple[Terminal, ...]


ProductionBody: typ.TypeAlias = RightHandSideList | OneOfList


@dc.dataclass(frozen=True, slots=True)
class Production:
    """A named grammar rule."""

    name: str
    body: ProductionBody | None
    parameters: tuple[str, ...] = ()
    colons: int = 1


@dc.dataclass(frozen=True, slots=True)
class MetaElement:
    """A directive or comment line that is not a production."""

    text: str


GrammarElement: typ.TypeAlias = Production | MetaElement


@dc.dataclass(frozen=True, slots=True)
class GrammarFile:
    """Elements parsed from one fragment, in source order."""

    text: str
    elements: tuple[GrammarElement, ...]


__all__ = [
    "ButNotSymbol",
    "EmptyAssertion",
    "GrammarElement",
    "GrammarFile",
    "LexicalSymbol",
    "LookaheadAssertion",
    "MetaElement",
    "NamedCharacter",
    "NoSymbolHereAssertion",
    "Nonterminal",
    "OneOfList",
    "Production",
    "ProductionBody",
    "Prose",
    "RightHandSide",
    "RightHandSideList",
    "SymbolSpan",
    "Terminal",
]
