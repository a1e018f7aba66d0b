"""
Schema AST (Abstract Syntax Tree) module.

Contains the AST node definitions and the classifier for OpenAPI schemas.
"""

from __future__ import annotations

from .classifier import SchemaClassifier
from .nodes import (
    ArrayNode,
    ComponentSchema,
    ObjectNode,
    PrimitiveNode,
    RefNode,
    SchemaAST,
    SchemaNode,
    StringNode,
    UnclassifiedNode,
)

__all__ = [
    "SchemaNode",
    "RefNode",
    "ArrayNode",
    "ObjectNode",
    "PrimitiveNode",
    "StringNode",
    "UnclassifiedNode",
    "ComponentSchema",
    "SchemaAST",
    "SchemaClassifier",
]
