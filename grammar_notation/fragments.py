"""Extract ``<emu-grammar>`` regions from the specification HTML.

Each region becomes a :class:`GrammarFragment` that carries its text, its
role attributes, and the ids of the sections that enclose it. The selector
uses the role attributes and id chain; the parser only sees the text.

Example
-------
>>> html = (
...     '<emu-clause id="outer"><emu-clause id="inner">'
...     '<emu-grammar type="definition">A : `a`</emu-grammar>'
...     "</emu-clause></emu-clause>"
... )
>>> [fragment.section_ids for fragment in extract_fragments(html)]
[('inner', 'outer')]
"""

from __future__ import annotations

import dataclasses as dc

from bs4 import BeautifulSoup, Tag

GRAMMAR_TAG = "emu-grammar"


@dc.dataclass(frozen=True, slots=True)
class GrammarFragment:
    """One block of grammar notation and its enclosing structure.

    Attributes
    ----------
    text : str
        Grammar notation with HTML entities already decoded.
    section_ids : tuple[str | None, ...]
        Ids of the enclosing elements, innermost first. Ancestors without an
        id contribute ``None`` so positions stay meaningful.
    grammar_type : str | None
        Value of the ``type`` attribute (``"definition"``, ``"reference"``...).
    is_example : bool
        Whether the element carries the ``example`` attribute.
    index : int
        Position of the fragment in document order.
    """

    text: str
    section_ids: tuple[str | None, ...] = ()
    grammar_type: str | None = None
    is_example: bool = False
    index: int = 0

    def section_id(self, depth: int) -> str | None:
        """Return the id of the ancestor ``depth`` levels up (0 = parent)."""
        if depth < len(self.section_ids):
            return self.section_ids[depth]
        return None


def extract_fragments(html: str) -> list[GrammarFragment]:
    """Return every grammar region of ``html`` in document order.

    Parameters
    ----------
    html : str
        Specification source.

    Returns
    -------
    list[GrammarFragment]
        One fragment per ``<emu-grammar>`` element, unfiltered.
    """
    soup = BeautifulSoup(html, "html.parser")
    fragments: list[GrammarFragment] = []
    for index, element in enumerate(soup.find_all(GRAMMAR_TAG)):
        grammar_type = element.get("type")
        fragments.append(
            GrammarFragment(
                text=element.get_text(),
                section_ids=_ancestor_ids(element),
                grammar_type=str(grammar_type) if grammar_type is not None else None,
                is_example=element.has_attr("example"),
                index=index,
            )
        )
    return fragments


def _ancestor_ids(element: Tag) -> tuple[str | None, ...]:
    """Collect ancestor ids up to, but excluding, the document root."""
    ids: list[str | None] = []
    for parent in element.parents:
        if isinstance(parent, BeautifulSoup):
            break
        value = parent.get("id")
        ids.append(str(value) if value else None)
    return tuple(ids)


__all__ = ["GRAMMAR_TAG", "GrammarFragment", "extract_fragments"]
