"""
Schema analyzer that transforms the schema AST into declarations.

Phase 2 of the pipeline: resolve every classified node into a type
expression, collect object properties and apply the allOf/oneOf
composition rules to produce one declaration per component schema.

Failures never abort the analysis. An unsupported node produces an
Unsupported value, the enclosing property or declaration is omitted
and a diagnostic is recorded.
"""

from __future__ import annotations

import logging

from ..config import CodeGeneratorConfig
from ..errors import Diagnostic, DiagnosticKind
from ..schema_ast.nodes import (
    ArrayNode,
    ObjectNode,
    PrimitiveNode,
    RefNode,
    SchemaAST,
    SchemaNode,
    StringNode,
    UnclassifiedNode,
)
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

logger = logging.getLogger(__name__)


def _unsupported_diagnostic(unsupported: Unsupported) -> Diagnostic:
    return Diagnostic(DiagnosticKind.UNSUPPORTED_SHAPE, unsupported.reason, unsupported.path)


class PropertyCollector:
    """Resolves nested schema nodes into type expressions."""

    def __init__(self, resolver: ReferenceResolver, diagnostics: list[Diagnostic]):
        """
        Initialize the collector.

        Args:
            resolver: Resolver used for $ref nodes
            diagnostics: Shared list receiving one entry per omitted property
        """
        self.resolver = resolver
        self.diagnostics = diagnostics

    def collect(self, properties: dict[str, SchemaNode], required: set[str]) -> list[Property]:
        """
        Build the property list of an object shape.

        Args:
            properties: Classified properties, in source order
            required: Names of the mandatory properties

        Returns:
            One Property per resolvable entry; failed entries are omitted
        """
        result = []
        for name, node in properties.items():
            resolved = self.resolve_type(node)
            if isinstance(resolved, Unsupported):
                logger.debug("Omitting property %r: %s", name, resolved.reason)
                self.diagnostics.append(_unsupported_diagnostic(resolved))
                continue
            result.append(Property(name=name, type=resolved, optional=name not in required))
        return result

    def resolve_type(self, node: SchemaNode) -> TypeExpr | Unsupported:
        """Resolve a classified node into a type expression."""
        if isinstance(node, RefNode):
            return IdentifierExpr(name=self.resolver.resolve(node.target))

        if isinstance(node, ArrayNode):
            if node.items is None:
                return Unsupported(reason="array without items", path=node.source_path)
            items = self.resolve_type(node.items)
            if isinstance(items, Unsupported):
                return items
            return ArrayExpr(items=items)

        if isinstance(node, ObjectNode):
            # Inline objects stay anonymous, never new declarations
            return self.resolve_object(node)

        if isinstance(node, StringNode):
            return self.resolve_string(node)

        if isinstance(node, PrimitiveNode):
            return PrimitiveExpr(kind=node.kind)

        if isinstance(node, UnclassifiedNode):
            return Unsupported(reason=node.reason, path=node.source_path)

        return Unsupported(reason=f"unknown node {type(node).__name__}", path=node.source_path)

    def resolve_object(self, node: ObjectNode) -> TypeExpr:
        """
        Resolve an object node, layering composition on its own record.

        allOf gives the members followed by the own record, if any. oneOf
        gives the union of the members, intersected with the own record
        when there is one. allOf wins when both are present.

        Args:
            node: The classified object, at root level or inline

        Returns:
            A RecordExpr, IntersectionExpr or UnionExpr
        """
        base_record = RecordExpr(properties=self.collect(node.properties, node.required))
        has_own_properties = bool(node.properties)

        if node.all_of is not None:
            members = self._resolve_members(node.all_of)
            if has_own_properties:
                members.append(base_record)
            return IntersectionExpr(members=members)

        if node.one_of is not None:
            union = UnionExpr(members=self._resolve_members(node.one_of))
            if has_own_properties:
                # Local properties and oneOf combine rather than override
                return IntersectionExpr(members=[base_record, union])
            return union

        return base_record

    def resolve_string(self, node: StringNode) -> TypeExpr | Unsupported:
        """Resolve a string node, turning an enumeration into a keyof."""
        if node.enum_values is None:
            return PrimitiveExpr(kind="string")
        if not all(isinstance(v, str) for v in node.enum_values):
            return Unsupported(reason=f"enum values must all be strings, got {node.enum_values!r}", path=node.source_path)
        # keyof keys must be unique; first occurrence wins
        return KeyofExpr(values=list(dict.fromkeys(node.enum_values)))

    def _resolve_members(self, members: list[SchemaNode]) -> list[TypeExpr]:
        """Resolve composition members, omitting the ones that fail."""
        result = []
        for member in members:
            resolved = self.resolve_type(member)
            if isinstance(resolved, Unsupported):
                logger.debug("Omitting composition member at %s: %s", resolved.path, resolved.reason)
                self.diagnostics.append(_unsupported_diagnostic(resolved))
                continue
            result.append(resolved)
        return result


class DeclarationBuilder:
    """Builds top-level declarations from component schemas."""

    def __init__(self, config: CodeGeneratorConfig, resolver: ReferenceResolver | None = None):
        """
        Initialize the builder.

        Args:
            config: Code generation configuration
            resolver: Reference resolver (a default one is created if omitted)
        """
        self.config = config
        self.diagnostics: list[Diagnostic] = []
        self.collector = PropertyCollector(resolver or ReferenceResolver(), self.diagnostics)

    def analyze(self, ast: SchemaAST) -> list[Declaration]:
        """
        Build declarations for all component schemas, in document order.

        Args:
            ast: The classified document

        Returns:
            One Declaration per supported, non-ignored component schema
        """
        declarations = []
        for component in ast.components:
            if component.name in self.config.ignore_schemas:
                logger.debug("Ignoring schema %r", component.name)
                continue

            result = self.build(component.name, component.body)
            if isinstance(result, Unsupported):
                logger.debug("Skipping schema %r: %s", component.name, result.reason)
                self.diagnostics.append(_unsupported_diagnostic(result))
                continue
            declarations.append(result)

        logger.debug("Built %d declarations", len(declarations))
        return declarations

    def build(self, name: str, node: SchemaNode | None) -> Declaration | Unsupported:
        """
        Turn a root-level schema into a named declaration.

        Args:
            name: The component schema key
            node: The classified schema

        Returns:
            The Declaration, or Unsupported with the reason it was skipped
        """
        if node is None:
            return Unsupported(reason="empty schema", path="")

        if isinstance(node, RefNode):
            return Unsupported(reason="root-level $ref is not supported as a declaration", path=node.source_path)

        if isinstance(node, ArrayNode):
            return Unsupported(reason="root-level array is not supported as a declaration", path=node.source_path)

        if isinstance(node, ObjectNode):
            type_expr = self.collector.resolve_object(node)
        elif isinstance(node, StringNode):
            type_expr = self.collector.resolve_string(node)
        elif isinstance(node, PrimitiveNode):
            type_expr = PrimitiveExpr(kind=node.kind)
        else:
            type_expr = self.collector.resolve_type(node)

        if isinstance(type_expr, Unsupported):
            return type_expr

        return Declaration(name=name, type=type_expr, exported=self.config.export_declarations)
