"""
Code generation backends.

Contains the output-specific code generators.
"""

from __future__ import annotations

from .base import CodeBackend
from .io_ts_backend import IoTsBackend

__all__ = [
    "CodeBackend",
    "IoTsBackend",
]
