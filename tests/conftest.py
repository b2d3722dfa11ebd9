"""Shared fixtures for the grammar_notation test suite.

``spec_html`` is a trimmed-down ``spec.html`` containing one grammar region
for every selection rule: lexical grammar before the expressions chapter,
examples, reference grammars, the regular-expression chapter, and the
web-browser annex. ``write_config`` writes a ``grammar.yaml`` pointing the
cache and artifact paths into ``tmp_path`` so no test touches the network.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from textwrap import dedent

import pytest

if typ.TYPE_CHECKING:
    from pathlib import Path

SPEC_HTML = dedent(
    """
    <emu-clause id="sec-ecmascript-language-lexical-grammar">
      <emu-clause id="sec-white-space">
        <emu-grammar type="definition">
          WhiteSpace ::
            &lt;TAB&gt;
            &lt;VT&gt;
        </emu-grammar>
      </emu-clause>
    </emu-clause>
    <emu-clause id="sec-ecmascript-language-expressions">
      <emu-clause id="sec-identifiers">
        <emu-grammar type="definition">
          IdentifierReference[Yield, Await] :
            Identifier
            [~Yield] `yield`
            [~Await] `await`

          Identifier :
            IdentifierName but not ReservedWord
        </emu-grammar>
        <emu-grammar type="definition" example>
          Example : `x`
        </emu-grammar>
        <emu-grammar>IdentifierReference : Identifier</emu-grammar>
      </emu-clause>
      <emu-clause id="sec-left-hand-side-expressions">
        <emu-grammar type="definition">
          MemberExpression[Yield, Await] :
            PrimaryExpression[?Yield, ?Await]
            MemberExpression[?Yield, ?Await] `.` IdentifierName
            `new` MemberExpression[?Yield, ?Await] Arguments[?Yield, ?Await]

          Arguments[Yield, Await] :
            `(` `)`
            `(` ArgumentList[?Yield, ?Await] `)`
        </emu-grammar>
      </emu-clause>
    </emu-clause>
    <emu-clause id="sec-ecmascript-language-statements-and-declarations">
      <emu-clause id="sec-expression-statement">
        <emu-grammar type="definition">
          ExpressionStatement[Yield, Await] :
            [lookahead &notin; { `{`, `function`, `async` [no LineTerminator here] `function`, `class`, `let` `[` }] Expression[+In, ?Yield, ?Await] `;`
        </emu-grammar>
      </emu-clause>
      <emu-clause id="sec-punctuators-summary">
        <emu-grammar type="definition">
          OtherPunctuator :: one of
            `&amp;&amp;` `||`
            `??`
        </emu-grammar>
      </emu-clause>
    </emu-clause>
    <emu-clause id="sec-regexp-regular-expression-objects">
      <emu-clause id="sec-patterns">
        <emu-grammar type="definition">
          Pattern[U, N] ::
            Disjunction[?U, ?N]
        </emu-grammar>
      </emu-clause>
    </emu-clause>
    <emu-annex id="sec-additional-ecmascript-features-for-web-browsers">
      <emu-annex id="sec-additional-syntax">
        <emu-annex id="sec-html-like-comments">
          <emu-grammar type="definition">
            Comment ::
              MultiLineComment
              SingleLineHTMLCloseComment
          </emu-grammar>
        </emu-annex>
      </emu-annex>
    </emu-annex>
    """
)

PROSE_SPEC_HTML = dedent(
    """
    <emu-clause id="sec-ecmascript-language-expressions">
      <emu-clause id="sec-source-text">
        <emu-grammar type="definition">
          SourceCharacter ::
            &gt; any Unicode code point
        </emu-grammar>
      </emu-clause>
    </emu-clause>
    """
)


@pytest.fixture
def spec_html() -> str:
    """Return the representative specification HTML."""
    return SPEC_HTML


@pytest.fixture
def write_config(tmp_path: Path) -> cabc.Callable[..., Path]:
    """Return a helper that writes a cached spec and a matching config file.

    The helper accepts the HTML to cache and an optional downstream path and
    returns the path of the written ``grammar.yaml``.
    """

    def _write(html: str, *, downstream: Path | None = None) -> Path:
        cache_path = tmp_path / "workdir" / "spec.html"
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(html, encoding="utf-8")
        lines = [
            "source:",
            "  url: https://example.invalid/spec.html",
            f"  cache_path: {cache_path}",
            "output:",
            f"  artifact: {tmp_path / 'workdir' / 'grammar-notation.json'}",
        ]
        if downstream is not None:
            lines.append(f"  downstream: {downstream}")
        config_path = tmp_path / "grammar.yaml"
        config_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return config_path

    return _write


@pytest.fixture
def prose_spec_html() -> str:
    """Return specification HTML whose selected grammar contains prose."""
    return PROSE_SPEC_HTML
