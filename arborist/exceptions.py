"""Custom exceptions for arborist"""

from typing import Optional


class ArboristError(Exception):
    """Base exception for all arborist errors."""
    pass


class GitOperationError(ArboristError):
    """Exception raised when a git invocation exits with a nonzero status."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class InvalidPathError(ArboristError):
    """Exception raised when a filesystem path cannot be represented as text."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Invalid path: Path contains non-UTF8 characters: {path!r}")


class ArboristIOError(ArboristError):
    """Exception raised for I/O failures (directory changes, process spawns)."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(f"IO error: {message}")
