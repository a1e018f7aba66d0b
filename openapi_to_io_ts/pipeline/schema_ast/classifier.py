"""
Schema classifier that builds the schema AST.

Phase 1 of the pipeline: classify every component schema of an
OpenAPI document into exactly one node type, recursively, without
resolving references or doing any output-specific processing.
"""

from __future__ import annotations

import logging
from typing import Any

from .nodes import (
    PRIMITIVE_KINDS,
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

logger = logging.getLogger(__name__)

SCHEMAS_PATH = "#/components/schemas"


class SchemaClassifier:
    """Classifies raw OpenAPI schemas into AST nodes."""

    def parse(self, document: dict[str, Any]) -> SchemaAST:
        """
        Classify all component schemas of a document.

        Args:
            document: The (bundled) OpenAPI document

        Returns:
            SchemaAST with one ComponentSchema per `components.schemas` entry,
            in document order
        """
        ast = SchemaAST(raw_document=document)

        components = document.get("components") or {}
        schemas = components.get("schemas") or {}
        for name, raw_schema in schemas.items():
            path = f"{SCHEMAS_PATH}/{name}"
            ast.components.append(ComponentSchema(name=name, body=self.classify(raw_schema, path)))

        logger.debug("Classified %d component schemas", len(ast.components))
        return ast

    def classify(self, schema: Any, path: str) -> SchemaNode:
        """
        Classify a schema node recursively.

        Rules are evaluated in priority order: $ref, items, object
        (or composition without a type tag), string, other primitives.

        Args:
            schema: The raw schema mapping
            path: Current path in the document (for diagnostics)

        Returns:
            The matching SchemaNode subclass, or an UnclassifiedNode
        """
        if not isinstance(schema, dict):
            return UnclassifiedNode(reason=f"expected a schema object, got {type(schema).__name__}", source_path=path)

        # A reference never carries meaningful siblings
        if "$ref" in schema:
            return RefNode(target=str(schema["$ref"]), source_path=path)

        if "items" in schema:
            return ArrayNode(items=self.classify(schema["items"], f"{path}/items"), source_path=path)

        type_value = schema.get("type")

        if type_value == "object" or (type_value is None and self._has_composition(schema)):
            return self._classify_object(schema, path)

        if type_value == "string":
            enum_values = schema.get("enum")
            return StringNode(enum_values=list(enum_values) if enum_values is not None else None, source_path=path)

        if type_value in PRIMITIVE_KINDS:
            return PrimitiveNode(kind=type_value, source_path=path)

        if type_value is None:
            reason = "no type, items, $ref or composition keyword"
        else:
            reason = f"unsupported type {type_value!r}"
        return UnclassifiedNode(reason=reason, source_path=path)

    def _has_composition(self, schema: dict[str, Any]) -> bool:
        return "allOf" in schema or "oneOf" in schema

    def _classify_object(self, schema: dict[str, Any], path: str) -> ObjectNode:
        """Classify an object schema and its nested properties and members."""
        properties = {}
        for prop_name, prop_schema in (schema.get("properties") or {}).items():
            properties[prop_name] = self.classify(prop_schema, f"{path}/properties/{prop_name}")

        return ObjectNode(
            properties=properties,
            required=set(schema.get("required") or []),
            all_of=self._classify_members(schema, "allOf", path),
            one_of=self._classify_members(schema, "oneOf", path),
            source_path=path,
        )

    def _classify_members(self, schema: dict[str, Any], keyword: str, path: str) -> list[SchemaNode] | None:
        """Classify the members of a composition keyword, if present."""
        if keyword not in schema:
            return None
        members = schema[keyword] or []
        return [self.classify(member, f"{path}/{keyword}/{i}") for i, member in enumerate(members)]
