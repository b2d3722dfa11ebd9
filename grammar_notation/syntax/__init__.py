"""Grammar notation syntax tree and the lark-backed parser that builds it."""

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
from .parser import GrammarParser

__all__ = [
    "ButNotSymbol",
    "EmptyAssertion",
    "GrammarElement",
    "GrammarFile",
    "GrammarParser",
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
