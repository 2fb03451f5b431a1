"""
Error types for the hardcoded-text audit.
"""

from pathlib import Path
from typing import Optional


class AuditError(Exception):
    """Base class for audit errors."""


class ParseFailure(AuditError):
    """A file's syntax tree could not be built."""

    def __init__(self, file_path: Path, detail: str = ""):
        self.file_path = file_path
        self.detail = detail
        message = f"Could not parse {file_path}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class IOFailure(AuditError):
    """A file or directory could not be read."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        message = f"Could not read {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class ConfigurationError(AuditError):
    """The role table or scan options are malformed."""
