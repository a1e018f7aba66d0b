"""
io-ts code generation backend.

Generates a TypeScript module with one io-ts codec and one static
type alias per declaration.
"""

from __future__ import annotations

import re

from ..analyzer.ir_nodes import (
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
)
from ..config import CodeGeneratorConfig
from .base import CodeBackend

_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

INDENT = "  "

GENERATION_COMMENT = "Generated by openapi_to_io_ts. Do not edit by hand."


class IoTsBackend(CodeBackend):
    """io-ts code generation backend."""

    TEMPLATE_LANG = "io_ts"
    FILE_EXTENSION = "ts"

    TYPE_MAP = {
        "string": "t.string",
        "number": "t.number",
        "boolean": "t.boolean",
        "null": "t.null",
    }

    def __init__(self, config: CodeGeneratorConfig, known_names: set[str] | None = None):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
            known_names: Declared names, for the dangling reference policy.
                `generate` replaces them with the names it is given; when
                unset, every identifier is printed verbatim.
        """
        super().__init__(config)
        self.known_names = known_names

    def generate(self, declarations: list[Declaration]) -> str:
        """Generate the TypeScript module from ordered declarations."""
        self.known_names = {d.name for d in declarations}

        prefix = self.prefix_template.render(
            generation_comment=GENERATION_COMMENT if self.config.add_generation_comment else "",
        )

        parts = [prefix + "\n\n"]
        for declaration in declarations:
            codec = self.translate_type(declaration.type)
            parts.append(self.runtime_template.render(name=declaration.name, exported=declaration.exported, codec=codec) + "\n\n")
        for declaration in declarations:
            parts.append(self.static_template.render(name=declaration.name, exported=declaration.exported) + "\n\n")

        return "".join(parts)

    def translate_type(self, type_expr: TypeExpr, indent: int = 0) -> str:
        """Translate a type expression to an io-ts codec."""
        if isinstance(type_expr, PrimitiveExpr):
            if type_expr.kind == "integer":
                return self.config.integer_codec
            return self.TYPE_MAP[type_expr.kind]

        if isinstance(type_expr, IdentifierExpr):
            if self._is_dangling(type_expr.name) and self.config.dangling_reference_policy == "unknown":
                return "t.unknown"
            return type_expr.name

        if isinstance(type_expr, ArrayExpr):
            return f"t.array({self.translate_type(type_expr.items, indent)})"

        if isinstance(type_expr, RecordExpr):
            return self._translate_record(type_expr, indent)

        if isinstance(type_expr, UnionExpr):
            return self._translate_combinator("union", type_expr.members, indent, empty="t.never")

        if isinstance(type_expr, IntersectionExpr):
            return self._translate_combinator("intersection", type_expr.members, indent, empty="t.unknown")

        if isinstance(type_expr, KeyofExpr):
            entries = [f"{self.escape_property_key(value)}: null" for value in type_expr.values]
            return f"t.keyof({self._format_object(entries, indent)})"

        raise TypeError(f"Cannot translate {type(type_expr).__name__}")

    def _translate_record(self, record: RecordExpr, indent: int) -> str:
        """Records split into a t.type part and a t.partial part."""
        required = [p for p in record.properties if not p.optional]
        optional = [p for p in record.properties if p.optional]

        if not optional:
            return f"t.type({self._format_properties(required, indent)})"
        if not required:
            return f"t.partial({self._format_properties(optional, indent)})"
        return (
            f"t.intersection([t.type({self._format_properties(required, indent)}), "
            f"t.partial({self._format_properties(optional, indent)})])"
        )

    def _translate_combinator(self, combinator: str, members: list[TypeExpr], indent: int, empty: str) -> str:
        # io-ts unions and intersections need at least two members
        if not members:
            return empty
        if len(members) == 1:
            return self.translate_type(members[0], indent)
        codecs = ", ".join(self.translate_type(m, indent) for m in members)
        return f"t.{combinator}([{codecs}])"

    def _format_properties(self, properties: list[Property], indent: int) -> str:
        entries = [f"{self.escape_property_key(p.name)}: {self.translate_type(p.type, indent + 1)}" for p in properties]
        return self._format_object(entries, indent)

    def _format_object(self, entries: list[str], indent: int) -> str:
        """Format object literal entries one per line."""
        if not entries:
            return "{}"
        inner = INDENT * (indent + 1)
        body = ",\n".join(f"{inner}{entry}" for entry in entries)
        return "{\n" + body + "\n" + INDENT * indent + "}"

    @staticmethod
    def escape_property_key(key: str) -> str:
        """Quote a property key unless it is a valid identifier."""
        if _IDENTIFIER.fullmatch(key):
            return key
        escaped = key.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
        return f"'{escaped}'"

    def _is_dangling(self, name: str) -> bool:
        return self.known_names is not None and name not in self.known_names
