"""Sort parsed grammar elements into sequence-form and one-of-form productions."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .syntax import MetaElement, OneOfList, Production, RightHandSideList

if typ.TYPE_CHECKING:
    from .syntax import GrammarFile


@dc.dataclass(frozen=True, slots=True)
class ClassifiedProductions:
    """Productions of one grammar file, split by body form."""

    sequence: tuple[Production, ...] = ()
    one_of: tuple[Production, ...] = ()


def classify_productions(grammar: GrammarFile) -> ClassifiedProductions:
    """Partition ``grammar``'s elements by body form, dropping everything else.

    A production without a body is sequence-form with no alternatives.
    """
    sequence: list[Production] = []
    one_of: list[Production] = []
    for element in grammar.elements:
        match element:
            case Production(body=RightHandSideList() | None):
                sequence.append(element)
            case Production(body=OneOfList()):
                one_of.append(element)
            case MetaElement():
                continue
            case _:
                typ.assert_never(element)
    return ClassifiedProductions(sequence=tuple(sequence), one_of=tuple(one_of))


__all__ = ["ClassifiedProductions", "classify_productions"]
