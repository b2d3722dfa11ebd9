"""Normalized grammar records handed to the downstream code generator.

Every record is immutable and knows how to render itself as a JSON-safe
mapping via ``as_json``. Symbol nodes form a closed union
(:data:`NormalizedNode`) with exactly one populated key per node.

Example
-------
>>> NameNode("Arguments", optional=True).as_json()
{'name': {'name': 'Arguments', 'optional': True}}
>>> NameNode("Arguments").as_json()
{'name': {'name': 'Arguments'}}
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

JsonMapping = dict[str, typ.Any]


@dc.dataclass(frozen=True, slots=True)
class LiteralNode:
    """An exact terminal match."""

    literal: str

    def as_json(self) -> JsonMapping:
        return {"literal": self.literal}


@dc.dataclass(frozen=True, slots=True)
class SymbolNode:
    """A non-literal terminal such as ``<TAB>``."""

    symbol: str

    def as_json(self) -> JsonMapping:
        return {"symbol": self.symbol}


@dc.dataclass(frozen=True, slots=True)
class NameNode:
    """A reference to another production.

    ``optional`` is only rendered when true; consumers read a missing key as
    a required reference.
    """

    name: str
    optional: bool = False

    def as_json(self) -> JsonMapping:
        reference: JsonMapping = {"name": self.name}
        if self.optional:
            reference["optional"] = True
        return {"name": reference}


@dc.dataclass(frozen=True, slots=True)
class OneOfNode:
    """Several literals, any one of which may appear at this position."""

    options: tuple[str, ...]

    def as_json(self) -> JsonMapping:
        return {"oneOf": list(self.options)}


NormalizedNode: typ.TypeAlias = LiteralNode | SymbolNode | NameNode | OneOfNode


@dc.dataclass(frozen=True, slots=True)
class Alternative:
    """One right-hand side: its original text and its normalized symbols."""

    source: str
    sequence: tuple[NormalizedNode, ...] = ()

    def as_json(self) -> JsonMapping:
        return {
            "source": self.source,
            "sequence": [node.as_json() for node in self.sequence],
        }


@dc.dataclass(frozen=True, slots=True)
class SequenceProduction:
    """A production whose body is a list of alternatives."""

    name: str
    body: tuple[Alternative, ...] = ()

    def as_json(self) -> JsonMapping:
        return {"name": self.name, "body": [alt.as_json() for alt in self.body]}


@dc.dataclass(frozen=True, slots=True)
class OneOfProduction:
    """A production whose body is a flat list of terminals."""

    name: str
    terminals: tuple[str, ...] = ()

    def as_json(self) -> JsonMapping:
        return {"name": self.name, "terminals": list(self.terminals)}


__all__ = [
    "Alternative",
    "JsonMapping",
    "LiteralNode",
    "NameNode",
    "NormalizedNode",
    "OneOfNode",
    "OneOfProduction",
    "SequenceProduction",
    "SymbolNode",
]
