"""Utility modules for Debug Bundle."""

from .errors import (
    DebugBundleError,
    DuplicateNameError,
    SourceWriteError,
    ConstructionError,
)
from .logger import setup_logging

__all__ = [
    "DebugBundleError",
    "DuplicateNameError",
    "SourceWriteError",
    "ConstructionError",
    "setup_logging",
]
