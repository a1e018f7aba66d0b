"""
Pipeline - OpenAPI component schemas to io-ts generator.

This module provides a multi-phase architecture for generating io-ts
codecs and static types from an OpenAPI document:

1. Phase 1 (Classifier): Classify schemas into the Schema AST
2. Phase 2 (Analyzer): Resolve references and build declarations
3. Phase 3 (Sorter): Order declarations by their references
4. Phase 4 (Backend): Render codecs and static types
5. Phase 5 (Writer): Atomically write the generated module
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, OutputConfig, OutputMode
from .errors import (
    DanglingReferenceError,
    Diagnostic,
    DiagnosticKind,
    DocumentError,
    OpenApiToIoTsError,
    UnsupportedShapeError,
    WriteError,
)
from .generator import CompilationResult, PipelineGenerator
from .loader import DocumentLoader, load_document
from .output import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "CompilationResult",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "DocumentLoader",
    "load_document",
    "AtomicWriter",
    "Diagnostic",
    "DiagnosticKind",
    "OpenApiToIoTsError",
    "DocumentError",
    "UnsupportedShapeError",
    "DanglingReferenceError",
    "WriteError",
]
