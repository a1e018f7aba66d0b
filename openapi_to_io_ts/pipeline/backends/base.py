"""
Base class for code generation backends.

Defines the interface that all output backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ..analyzer.ir_nodes import Declaration, TypeExpr
from ..config import CodeGeneratorConfig


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            undefined=jinja2.StrictUndefined,
        )

        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.runtime_template = self.jinja_env.get_template(f"runtime.{self.FILE_EXTENSION}.jinja2")
        self.static_template = self.jinja_env.get_template(f"static.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def generate(self, declarations: list[Declaration]) -> str:
        """
        Generate code from ordered declarations.

        Args:
            declarations: Declarations in dependency order

        Returns:
            Generated code as a string
        """

    @abstractmethod
    def translate_type(self, type_expr: TypeExpr, indent: int = 0) -> str:
        """
        Translate a type expression to a runtime codec string.

        Args:
            type_expr: The type expression
            indent: Current nesting level, for multi-line output

        Returns:
            Codec source text
        """
