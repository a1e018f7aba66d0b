"""
Errors and diagnostics raised or recorded by the pipeline.

Fatal problems (unreadable document, failed write) are exceptions.
Per-schema problems are recorded as Diagnostic values so that the
rest of the compilation can proceed; strict mode turns them into
exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OpenApiToIoTsError(Exception):
    """Base exception for all pipeline errors."""

    pass


class DocumentError(OpenApiToIoTsError):
    """Raised when the input is not a recognizable OpenAPI document.

    This can happen when:
    - The file cannot be read or parsed
    - The top level is not a mapping
    - The `openapi` format marker is missing
    - A relative-file $ref cannot be bundled
    """

    pass


class UnsupportedShapeError(OpenApiToIoTsError):
    """Raised in strict mode when a schema matches no supported shape."""

    pass


class DanglingReferenceError(OpenApiToIoTsError):
    """Raised in strict mode when an identifier names no declaration."""

    pass


class WriteError(OpenApiToIoTsError):
    """Raised when the generated artifact cannot be persisted."""

    pass


class DiagnosticKind(str, Enum):
    """Kind of non-fatal problem found during compilation."""

    UNSUPPORTED_SHAPE = "unsupported_shape"
    DANGLING_REFERENCE = "dangling_reference"
    REFERENCE_CYCLE = "reference_cycle"


@dataclass(frozen=True)
class Diagnostic:
    """A recorded, non-fatal compilation problem."""

    kind: DiagnosticKind
    message: str
    path: str = ""

    def __str__(self) -> str:
        location = f" at {self.path}" if self.path else ""
        return f"{self.kind.value}{location}: {self.message}"
