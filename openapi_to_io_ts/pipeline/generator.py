"""
Pipeline generator.

Runs the phases for one document:

1. Classify component schemas into the schema AST
2. Build declarations (properties, composition, references)
3. Sort declarations in dependency order
4. Check identifiers against the final declaration set
5. Render the io-ts module
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .analyzer import Declaration, DeclarationBuilder, DependencySorter
from .backends import IoTsBackend
from .config import CodeGeneratorConfig
from .errors import DanglingReferenceError, Diagnostic, DiagnosticKind, UnsupportedShapeError
from .loader import check_document
from .schema_ast import SchemaClassifier

logger = logging.getLogger(__name__)


@dataclass
class CompilationResult:
    """Outcome of compiling one document."""

    # Declarations in emission order
    declarations: list[Declaration] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)


class PipelineGenerator:
    """Compiles the component schemas of an OpenAPI document to io-ts."""

    def __init__(self, document: dict[str, Any], config: CodeGeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            document: Bundled OpenAPI document
            config: Code generation configuration

        Raises:
            DocumentError: If the document is not an OpenAPI document
        """
        self.document = check_document(document)
        self.config = config or CodeGeneratorConfig()

    def compile(self) -> CompilationResult:
        """
        Build and order the declarations of the document.

        Returns:
            CompilationResult with ordered declarations and diagnostics

        Raises:
            UnsupportedShapeError: In strict mode, for the first unsupported shape
            DanglingReferenceError: In strict mode, for the first unresolved identifier
        """
        ast = SchemaClassifier().parse(self.document)

        builder = DeclarationBuilder(self.config)
        declarations = builder.analyze(ast)
        diagnostics = list(builder.diagnostics)

        sorted_result = DependencySorter().sort(declarations)
        for cycle in sorted_result.cycles:
            diagnostics.append(
                Diagnostic(
                    DiagnosticKind.REFERENCE_CYCLE,
                    f"declarations reference each other: {', '.join(cycle)}",
                )
            )

        diagnostics.extend(self._check_references(sorted_result.declarations))

        for diagnostic in diagnostics:
            logger.warning("%s", diagnostic)

        if self.config.strict:
            self._raise_first(diagnostics)

        return CompilationResult(
            declarations=sorted_result.declarations,
            diagnostics=diagnostics,
            cycles=sorted_result.cycles,
        )

    def generate(self) -> str:
        """Compile the document and render the io-ts module."""
        result = self.compile()
        return IoTsBackend(self.config).generate(result.declarations)

    def _check_references(self, declarations: list[Declaration]) -> list[Diagnostic]:
        """Report identifiers that name no declaration in the final set."""
        known = {d.name for d in declarations}
        diagnostics = []
        for declaration in declarations:
            for name in declaration.referenced_names():
                if name not in known:
                    diagnostics.append(
                        Diagnostic(
                            DiagnosticKind.DANGLING_REFERENCE,
                            f"{declaration.name} references undeclared {name!r}",
                            f"#/components/schemas/{declaration.name}",
                        )
                    )
        return diagnostics

    def _raise_first(self, diagnostics: list[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            if diagnostic.kind == DiagnosticKind.UNSUPPORTED_SHAPE:
                raise UnsupportedShapeError(str(diagnostic))
            if diagnostic.kind == DiagnosticKind.DANGLING_REFERENCE:
                raise DanglingReferenceError(str(diagnostic))
