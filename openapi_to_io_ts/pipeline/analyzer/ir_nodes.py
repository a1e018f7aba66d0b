"""
IR (Intermediate Representation) node definitions.

These nodes represent the analyzed schema, ready for ordering and
code generation. References are reduced to declaration names and
every shape is expressed in a small type algebra.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass
class TypeExpr:
    """Base class for all type expressions."""

    def children(self) -> list[TypeExpr]:
        """Direct sub-expressions, in order."""
        return []

    def walk(self) -> Iterator[TypeExpr]:
        """Yield this expression and all nested ones, depth first."""
        yield self
        for child in self.children():
            yield from child.walk()


@dataclass
class PrimitiveExpr(TypeExpr):
    """boolean, integer, null, number or string."""

    kind: str = ""


@dataclass
class ArrayExpr(TypeExpr):
    """Array of a single item type."""

    items: TypeExpr | None = None

    def children(self) -> list[TypeExpr]:
        return [self.items] if self.items is not None else []


@dataclass
class Property:
    """A property of a record."""

    name: str = ""
    type: TypeExpr | None = None
    optional: bool = False


@dataclass
class RecordExpr(TypeExpr):
    """An object shape, with properties in source order."""

    properties: list[Property] = field(default_factory=list)

    def children(self) -> list[TypeExpr]:
        return [p.type for p in self.properties if p.type is not None]


@dataclass
class IdentifierExpr(TypeExpr):
    """Reference to another declaration by name."""

    name: str = ""


@dataclass
class UnionExpr(TypeExpr):
    """Value matches at least one member."""

    members: list[TypeExpr] = field(default_factory=list)

    def children(self) -> list[TypeExpr]:
        return list(self.members)


@dataclass
class IntersectionExpr(TypeExpr):
    """Value matches every member."""

    members: list[TypeExpr] = field(default_factory=list)

    def children(self) -> list[TypeExpr]:
        return list(self.members)


@dataclass
class KeyofExpr(TypeExpr):
    """One of a fixed set of string values."""

    values: list[str] = field(default_factory=list)


@dataclass
class Declaration:
    """A named, top-level type/codec pair."""

    name: str = ""
    type: TypeExpr | None = None
    exported: bool = True

    def referenced_names(self) -> list[str]:
        """Names of all identifiers in the type tree, first occurrence order."""
        if self.type is None:
            return []
        names: dict[str, None] = {}
        for expr in self.type.walk():
            if isinstance(expr, IdentifierExpr):
                names.setdefault(expr.name)
        return list(names)


@dataclass
class Unsupported:
    """Explicit "nothing producible" outcome, carrying the reason."""

    reason: str = ""
    path: str = ""
