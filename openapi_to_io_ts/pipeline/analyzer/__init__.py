"""
Analyzer module.

Contains reference resolution, declaration building and dependency ordering.
"""

from __future__ import annotations

from .analyzer import DeclarationBuilder, PropertyCollector
from .dependency_sorter import DependencySorter, SortResult
from .ir_nodes import (
    ArrayExpr,
    Declaration,
    IdentifierExpr,
    IntersectionExpr,
    KeyofExpr,
    PrimitiveExpr,
    Property,
    RecordExpr,
    TypeExpr,
    UnionExpr,
    Unsupported,
)
from .reference_resolver import ReferenceResolver

__all__ = [
    "TypeExpr",
    "PrimitiveExpr",
    "ArrayExpr",
    "RecordExpr",
    "IdentifierExpr",
    "UnionExpr",
    "IntersectionExpr",
    "KeyofExpr",
    "Property",
    "Declaration",
    "Unsupported",
    "ReferenceResolver",
    "PropertyCollector",
    "DeclarationBuilder",
    "DependencySorter",
    "SortResult",
]
