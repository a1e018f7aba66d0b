"""
Configuration for the code generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DANGLING_REFERENCE_POLICIES = ("identifier", "unknown")


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    FORCE = "force"  # Default: overwrite the existing file
    ERROR_IF_EXISTS = "error"  # Raise an error if the file exists


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.FORCE
    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Component schemas to ignore during generation
    ignore_schemas: list[str] = field(default_factory=list)

    # Whether declarations are emitted with `export`
    export_declarations: bool = True

    # Codec used for integer schemas
    integer_codec: str = "t.Int"

    # How identifiers naming no declaration are emitted: verbatim or as t.unknown
    dangling_reference_policy: str = "identifier"

    # Add generation comment at top of file
    add_generation_comment: bool = False

    # Raise on unsupported shapes and dangling references instead of recording them
    strict: bool = False

    # Name of the generated file inside the output directory
    output_filename: str = "file.ts"

    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        if self.dangling_reference_policy not in DANGLING_REFERENCE_POLICIES:
            raise ValueError(
                f"dangling_reference_policy must be one of {', '.join(DANGLING_REFERENCE_POLICIES)}, got {self.dangling_reference_policy!r}"
            )

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.FORCE)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        # Re-run validation on values set after construction
        config.__post_init__()
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "ignore_schemas": self.ignore_schemas,
            "export_declarations": self.export_declarations,
            "integer_codec": self.integer_codec,
            "dangling_reference_policy": self.dangling_reference_policy,
            "add_generation_comment": self.add_generation_comment,
            "strict": self.strict,
            "output_filename": self.output_filename,
            "output": {
                "mode": self.output.mode.value,
                "atomic_write": self.output.atomic_write,
            },
        }
