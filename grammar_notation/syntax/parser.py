r"""Parse ecmarkup grammar notation into the :mod:`~grammar_notation.syntax.nodes` tree.

A fragment is split into productions by indentation: a production header
(``Name[Params] :``) starts at column zero and its right-hand sides are the
indented lines below it. Headers are matched with a regular expression; the
symbols of each right-hand side and ``one of`` line are parsed by a ``lark``
LALR parser over :data:`NOTATION_GRAMMAR`, and :class:`NotationTransformer`
turns the lark tree into typed nodes.

Example
-------
>>> parser = GrammarParser()
>>> grammar = parser.parse("Block :\n  `{` StatementList? `}`\n")
>>> grammar.elements[0].name
'Block'
"""

from __future__ import annotations

import dataclasses as dc
import html
import re
import textwrap
import typing as typ

import lark

from grammar_notation.errors import UpstreamParseError

from .nodes import (
    ButNotSymbol,
    EmptyAssertion,
    GrammarElement,
    GrammarFile,
    LexicalSymbol,
    LookaheadAssertion,
    MetaElement,
    NamedCharacter,
    NoSymbolHereAssertion,
    Nonterminal,
    OneOfList,
    Production,
    ProductionBody,
    Prose,
    RightHandSide,
    RightHandSideList,
    SymbolSpan,
    Terminal,
)

NOTATION_GRAMMAR = r"""
rhs: [PARAMS] (_item+ | prose) [LABEL]
terminal_list: terminal+

_item: but_not | _primary | lookahead | no_symbol_here | empty
_primary: nonterminal | terminal | named_char

nonterminal: NONTERMINAL [PARAMS] [OPTIONAL]
bare_nonterminal: NONTERMINAL
terminal: TERMINAL
named_char: NAMED_CHAR
prose: PROSE

but_not: _primary "but" "not" exclusion
exclusion: "one" "of" _excludable ("or" _excludable)*
         | _excludable ("or" _excludable)*
_excludable: bare_nonterminal | terminal | named_char

lookahead: "[" "lookahead" LOOKAHEAD_OP lookahead_operand "]"
lookahead_operand: terminal_seq
                 | "{" terminal_seq ("," terminal_seq)* "}"
                 | bare_nonterminal
terminal_seq: (terminal | named_char | no_symbol_here)+

no_symbol_here: "[" "no" _here_symbol ("or" _here_symbol)* "here" "]"
_here_symbol: bare_nonterminal | terminal | named_char

empty: "[" "empty" "]"

NONTERMINAL: /[A-Z][A-Za-z0-9_]*/
PARAMS: /\[\s*[?+~]?[A-Z]\w*(\s*,\s*[?+~]?[A-Z]\w*)*\s*\]/
OPTIONAL: "?"
TERMINAL: /`(?:[^`\s]+|`)`/
NAMED_CHAR: /<[A-Z][A-Z0-9]*>|&lt;[A-Z][A-Z0-9]*&gt;/
LOOKAHEAD_OP: /==|!=|=|≠|∈|∉|&ne;|&isin;|&notin;|<-|<!/
LABEL: /#[\w-]+/
PROSE: /(?:>|&gt;)[^\n]*/

%ignore /[ \t\u00a0]+/
"""

HEADER_PATTERN = re.compile(
    r"^(?P<name>[A-Za-z_]\w*)(?P<params>\[[^\]]*\])?\s*(?P<colons>:{1,3})"
    r"(?:\s+(?P<rest>\S.*?))?\s*$"
)
ONE_OF = "one of"
_COMMENT_PREFIX = "//"
_DIRECTIVE_PREFIX = "@"


@dc.dataclass(frozen=True, slots=True)
class _RhsParts:
    constraints: tuple[str, ...]
    symbols: tuple[LexicalSymbol, ...]
    label: str | None


def _split_params(token: str | None) -> tuple[str, ...]:
    """Return the comma-separated entries of a ``[A, ?B]`` token."""
    if not token:
        return ()
    inner = token.strip()[1:-1]
    return tuple(part.strip() for part in inner.split(",") if part.strip())


class NotationTransformer(lark.Transformer):
    """Build typed syntax nodes from the lark parse tree."""

    def rhs(self, args: list[typ.Any]) -> _RhsParts:
        guard, *symbols, label = args
        return _RhsParts(
            constraints=_split_params(guard),
            symbols=tuple(symbols),
            label=str(label)[1:] if label else None,
        )

    def terminal_list(self, args: list[Terminal]) -> tuple[Terminal, ...]:
        return tuple(args)

    def nonterminal(self, args: list[typ.Any]) -> Nonterminal:
        name, params, optional = args
        return Nonterminal(
            name=str(name),
            arguments=_split_params(params),
            optional=optional is not None,
        )

    def bare_nonterminal(self, args: list[lark.Token]) -> Nonterminal:
        return Nonterminal(name=str(args[0]))

    def terminal(self, args: list[lark.Token]) -> Terminal:
        return Terminal(str(args[0])[1:-1])

    def named_char(self, args: list[lark.Token]) -> NamedCharacter:
        return NamedCharacter(html.unescape(str(args[0])))

    def prose(self, args: list[lark.Token]) -> Prose:
        text = html.unescape(str(args[0]))
        return Prose(text[1:].strip())

    def but_not(self, args: list[typ.Any]) -> ButNotSymbol:
        left, exclusions = args
        return ButNotSymbol(left=left, exclusions=exclusions)

    def exclusion(self, args: list[LexicalSymbol]) -> tuple[LexicalSymbol, ...]:
        return tuple(args)

    def lookahead(self, args: list[typ.Any]) -> LookaheadAssertion:
        operator, operands = args
        return LookaheadAssertion(operator=html.unescape(str(operator)), operands=operands)

    def lookahead_operand(
        self, args: list[typ.Any]
    ) -> tuple[tuple[LexicalSymbol, ...], ...]:
        return tuple(arg if isinstance(arg, tuple) else (arg,) for arg in args)

    def terminal_seq(self, args: list[LexicalSymbol]) -> tuple[LexicalSymbol, ...]:
        return tuple(args)

    def no_symbol_here(self, args: list[LexicalSymbol]) -> NoSymbolHereAssertion:
        return NoSymbolHereAssertion(tuple(args))

    def empty(self, args: list[typ.Any]) -> EmptyAssertion:
        return EmptyAssertion()


class GrammarParser:
    """Turn grammar notation text into a :class:`GrammarFile`."""

    def __init__(self) -> None:
        self._lark = lark.Lark(
            NOTATION_GRAMMAR,
            parser="lalr",
            start=["rhs", "terminal_list"],
            transformer=NotationTransformer(),
        )

    def parse(self, text: str) -> GrammarFile:
        """Parse one fragment.

        Parameters
        ----------
        text : str
            Grammar notation, typically the text of one ``<emu-grammar>``.

        Returns
        -------
        GrammarFile
            Productions and meta elements in source order.

        Raises
        ------
        UpstreamParseError
            When a line cannot be parsed or indentation is inconsistent.
        """
        try:
            elements = tuple(self._parse_elements(text))
        except lark.exceptions.LarkError as exc:
            raise UpstreamParseError(text, str(exc)) from exc
        except ValueError as exc:
            raise UpstreamParseError(text, str(exc)) from exc
        return GrammarFile(text=text, elements=elements)

    def parse_rhs(self, source: str) -> RightHandSide:
        """Parse a single right-hand side line."""
        parts = typ.cast("_RhsParts", self._lark.parse(source, start="rhs"))
        return RightHandSide(
            source=source,
            head=SymbolSpan.chain(parts.symbols),
            constraints=parts.constraints,
            label=parts.label,
        )

    def parse_terminals(self, source: str) -> tuple[Terminal, ...]:
        """Parse a line of backticked terminals."""
        return typ.cast(
            "tuple[Terminal, ...]", self._lark.parse(source, start="terminal_list")
        )

    def _parse_elements(self, text: str) -> typ.Iterator[GrammarElement]:
        header: re.Match[str] | None = None
        body_lines: list[str] = []
        for line in _dedented_lines(text):
            stripped = line.strip()
            if not stripped or stripped.startswith(_COMMENT_PREFIX):
                continue
            if line[0].isspace():
                if header is None:
                    msg = f"Indented line outside a production: {stripped!r}"
                    raise ValueError(msg)
                body_lines.append(stripped)
                continue
            if header is not None:
                yield self._build_production(header, body_lines)
                header, body_lines = None, []
            if stripped.startswith(_DIRECTIVE_PREFIX):
                yield MetaElement(stripped)
                continue
            header = HEADER_PATTERN.match(stripped)
            if header is None:
                msg = f"Expected a production header, got {stripped!r}"
                raise ValueError(msg)
        if header is not None:
            yield self._build_production(header, body_lines)

    def _build_production(
        self, header: re.Match[str], body_lines: list[str]
    ) -> Production:
        name = header.group("name")
        rest = header.group("rest")
        body: ProductionBody | None
        if rest == ONE_OF:
            terminals: list[Terminal] = []
            for line in body_lines:
                terminals.extend(self.parse_terminals(line))
            body = OneOfList(tuple(terminals))
        elif rest is not None:
            if body_lines:
                msg = f"Production '{name}' has both an inline and an indented body"
                raise ValueError(msg)
            if rest.startswith(f"{ONE_OF} "):
                body = OneOfList(self.parse_terminals(rest[len(ONE_OF) :]))
            else:
                body = RightHandSideList((self.parse_rhs(rest),))
        elif body_lines:
            body = RightHandSideList(tuple(self.parse_rhs(line) for line in body_lines))
        else:
            body = None
        return Production(
            name=name,
            body=body,
            parameters=_split_params(header.group("params")),
            colons=len(header.group("colons")),
        )


def _dedented_lines(text: str) -> list[str]:
    """Return the lines of ``text`` with common indentation removed."""
    return textwrap.dedent(text.expandtabs()).splitlines()


__all__ = ["NOTATION_GRAMMAR", "GrammarParser", "NotationTransformer"]
