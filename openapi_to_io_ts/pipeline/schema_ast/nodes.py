"""
AST (Abstract Syntax Tree) node definitions for OpenAPI schemas.

These nodes represent the classified shape of each schema in the
document before any type resolution or code generation happens.
Every raw schema maps to exactly one of these node types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Primitive kinds that map one-to-one to a codec (string is handled separately)
PRIMITIVE_KINDS = ("boolean", "integer", "null", "number")


@dataclass
class SchemaNode:
    """Base class for all AST nodes."""

    # Location in the document, for diagnostics
    source_path: str = ""


@dataclass
class RefNode(SchemaNode):
    """Represents a $ref. Sibling fields are never inspected."""

    target: str = ""  # e.g., "#/components/schemas/Pet"


@dataclass
class ArrayNode(SchemaNode):
    """Represents an array schema (anything carrying `items`)."""

    items: SchemaNode | None = None


@dataclass
class ObjectNode(SchemaNode):
    """Represents an object schema, optionally composed with allOf/oneOf."""

    # Insertion order of the source mapping is preserved
    properties: dict[str, SchemaNode] = field(default_factory=dict)
    required: set[str] = field(default_factory=set)

    all_of: list[SchemaNode] | None = None
    one_of: list[SchemaNode] | None = None


@dataclass
class PrimitiveNode(SchemaNode):
    """Represents boolean, integer, null or number."""

    kind: str = ""


@dataclass
class StringNode(SchemaNode):
    """Represents a string, optionally restricted to an enumeration."""

    # Kept verbatim: non-string values are rejected at resolution time
    enum_values: list[Any] | None = None


@dataclass
class UnclassifiedNode(SchemaNode):
    """Classification failure marker. Carries the reason instead of raising."""

    reason: str = ""


@dataclass
class ComponentSchema:
    """A named entry of `components.schemas`."""

    name: str = ""
    body: SchemaNode | None = None


@dataclass
class SchemaAST:
    """Root of the classified document."""

    components: list[ComponentSchema] = field(default_factory=list)

    # Raw document for reference
    raw_document: dict[str, Any] = field(default_factory=dict)
