"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from ..config import OutputConfig, OutputMode
from ..errors import WriteError

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Handles atomic file writes.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(self, config: OutputConfig | None = None):
        """Initialize the atomic writer.

        Args:
            config: Output configuration (defaults overwrite existing files)
        """
        self.config = config or OutputConfig()

    def write(self, path: Path, content: str) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            WriteError: If the file exists in error mode, or any file operation fails
        """
        path = Path(path)
        if self.config.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise WriteError(f"Output file already exists: {path}. Use force mode to overwrite.")

        try:
            # Ensure parent directory exists
            path.parent.mkdir(parents=True, exist_ok=True)
            if self.config.atomic_write:
                self._write_atomic(path, content)
            else:
                path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise WriteError(f"failed to save project to {path}: {e}") from e

        logger.debug("Wrote %d characters to %s", len(content), path)

    def _write_atomic(self, path: Path, content: str) -> None:
        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            # On POSIX systems, rename() is atomic if source and dest are on same filesystem
            temp_path.replace(path)

        except Exception:
            # Clean up temp file on any error
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.warning("Could not remove temporary file %s", temp_path)
            raise
