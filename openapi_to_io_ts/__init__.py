"""OpenAPI to io-ts Generator

A Python package for generating io-ts runtime codecs and TypeScript
static types from the component schemas of OpenAPI 3 documents.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    CompilationResult,
    DocumentError,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    WriteError,
    load_document,
)

__all__ = [
    "PipelineGenerator",
    "CompilationResult",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
    "load_document",
    "DocumentError",
    "WriteError",
]
