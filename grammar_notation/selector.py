"""Choose which grammar fragments belong to the core language grammar.

The specification contains grammar for lexical analysis, regular expressions,
number parsing, URI handling, web-browser extensions and more. Only the
syntactic grammar that starts with the expressions chapter is wanted. The
decision is an ordered list of :class:`SelectionRule` objects; a fragment is
kept when every rule accepts it. Rules are evaluated in order and stop at the
first rejection, so the positional gate only ever sees fragments that passed
the rules before it.

Example
-------
>>> from grammar_notation.fragments import GrammarFragment
>>> selector = SectionSelector()
>>> start = GrammarFragment(
...     "A : `a`",
...     ("sec-primary", "sec-ecmascript-language-expressions"),
...     "definition",
... )
>>> [f.text for f in selector.select([start])]
['A : `a`']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from ._constants import EXCLUDED_SECTIONS, START_SECTION, WEB_SECTIONS

if typ.TYPE_CHECKING:
    from .config import SelectionConfig
    from .fragments import GrammarFragment

logger = logging.getLogger(__name__)

FragmentPredicate = cabc.Callable[["GrammarFragment"], bool]

START_DEPTH = 1
EXCLUDED_DEPTHS = (0, 1)
WEB_DEPTH = 2


@dc.dataclass(frozen=True, slots=True)
class SelectionRule:
    """A named predicate over fragments."""

    name: str
    accepts: FragmentPredicate


def is_definition(fragment: GrammarFragment) -> bool:
    """Accept fragments whose role is ``definition``."""
    return fragment.grammar_type == "definition"


def is_not_example(fragment: GrammarFragment) -> bool:
    """Reject illustrative example grammars."""
    return not fragment.is_example


def outside_sections(
    section_ids: cabc.Iterable[str], depths: cabc.Iterable[int]
) -> FragmentPredicate:
    """Build a predicate rejecting fragments nested in one of ``section_ids``.

    Only the ancestors at ``depths`` (0 = innermost) are compared.
    """
    denied = frozenset(section_ids)
    checked = tuple(depths)

    def _accepts(fragment: GrammarFragment) -> bool:
        return not any(fragment.section_id(depth) in denied for depth in checked)

    return _accepts


class PositionalGate:
    """Reject fragments until the start section is reached, then accept all.

    The gate opens on the first fragment whose ancestor at ``depth`` has the
    id ``start_section`` and never closes again.
    """

    def __init__(self, start_section: str, depth: int = START_DEPTH) -> None:
        self.start_section = start_section
        self.depth = depth
        self.is_open = False

    def __call__(self, fragment: GrammarFragment) -> bool:
        if not self.is_open and fragment.section_id(self.depth) == self.start_section:
            logger.debug("Selection gate opened at fragment %d", fragment.index)
            self.is_open = True
        return self.is_open


class SectionSelector:
    """Filter fragments down to the core language grammar."""

    def __init__(
        self,
        *,
        start_section: str = START_SECTION,
        excluded_sections: cabc.Iterable[str] = EXCLUDED_SECTIONS,
        web_sections: cabc.Iterable[str] = WEB_SECTIONS,
    ) -> None:
        self.start_section = start_section
        self.excluded_sections = tuple(excluded_sections)
        self.web_sections = tuple(web_sections)

    @classmethod
    def from_config(cls, config: SelectionConfig) -> SectionSelector:
        """Build a selector from the ``selection`` configuration section."""
        return cls(
            start_section=config.start_section,
            excluded_sections=config.excluded_sections,
            web_sections=config.web_sections,
        )

    def rules(self) -> tuple[SelectionRule, ...]:
        """Return the ordered rules for one pass, with a fresh positional gate."""
        return (
            SelectionRule("definition", is_definition),
            SelectionRule("not-example", is_not_example),
            SelectionRule("positional-gate", PositionalGate(self.start_section)),
            SelectionRule(
                "excluded-sections",
                outside_sections(self.excluded_sections, EXCLUDED_DEPTHS),
            ),
            SelectionRule(
                "web-extensions", outside_sections(self.web_sections, (WEB_DEPTH,))
            ),
        )

    def select(
        self, fragments: cabc.Iterable[GrammarFragment]
    ) -> list[GrammarFragment]:
        """Return the fragments accepted by every rule, in input order."""
        rules = self.rules()
        selected = [
            fragment
            for fragment in fragments
            if all(rule.accepts(fragment) for rule in rules)
        ]
        logger.info("Selected %d grammar fragments", len(selected))
        return selected


__all__ = [
    "PositionalGate",
    "SectionSelector",
    "SelectionRule",
    "is_definition",
    "is_not_example",
    "outside_sections",
]
