"""
Exception hierarchy for dirgrep.

Only configuration and directory-level failures are surfaced to callers.
Per-file and per-line failures are absorbed by the line reader.
"""

from pathlib import Path
from typing import Union


class DirgrepError(Exception):
    """Base class for all dirgrep errors."""
    pass


class ConfigurationError(DirgrepError):
    """Raised when configuration parsing or validation fails."""
    pass


class DirectoryAccessError(DirgrepError):
    """Raised when the search directory or one of its entries cannot be read."""

    def __init__(self, directory: Union[str, Path], reason: str):
        self.directory = str(directory)
        self.reason = reason
        super().__init__(f"Cannot read directory {self.directory}: {reason}")
