"""
Storage Exception Hierarchy

This module defines the exception hierarchy for portastore. Every failure that
reaches a caller is one of these types, carrying the offending path and enough
context to log or serialize the error.

Hierarchy:
    StorageError
    ├── InvalidSegmentError
    └── StorageIOError
        ├── NotFoundError
        └── AlreadyExistsError
            └── TooManyCollisionsError
"""

import time
from typing import Any, Dict, Optional


class StorageError(Exception):
    """
    Base exception class for all storage errors.

    Attributes:
        error_code: Unique error code for programmatic handling
        path: Path the failing operation was acting on (if applicable)
        timestamp: When the error occurred
        context: Additional context information
        suggestion: Suggested fix or next steps (if applicable)
    """

    def __init__(
        self,
        message: str,
        error_code: str = "STORAGE_ERROR",
        path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ):
        """
        Initialize storage error with context.

        Args:
            message: Technical error message
            error_code: Unique error code for programmatic handling
            path: Path the operation was acting on
            context: Additional context information
            suggestion: Suggested fix or next steps
        """
        super().__init__(message)
        self.error_code = error_code
        self.path = path
        self.timestamp = time.time()
        self.context = context or {}
        self.message = message
        self.suggestion = suggestion

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "path": self.path,
            "timestamp": self.timestamp,
            "context": self.context,
            "suggestion": self.suggestion,
        }

    def __str__(self) -> str:
        """String representation with context."""
        parts = [f"[{self.error_code}]"]
        if self.path:
            parts.append(f"Path:{self.path}")
        parts.append(self.message)
        return " ".join(parts)


# =============================================================================
# PATH ERRORS
# =============================================================================

class InvalidSegmentError(StorageError, ValueError):
    """
    Raised when a path segment is malformed.

    Examples:
    - Empty segment
    - Segment containing the path separator
    - "." or ".." used as an entry name
    """

    def __init__(self, message: str, segment: Optional[str] = None, **kwargs):
        self.segment = segment

        context = kwargs.pop("context", {})
        if segment is not None:
            context["segment"] = segment

        super().__init__(
            message,
            error_code="INVALID_SEGMENT",
            context=context,
            suggestion=kwargs.pop(
                "suggestion",
                "Pass a single, non-empty entry name without path separators.",
            ),
            **kwargs,
        )


# =============================================================================
# I/O ERRORS
# =============================================================================

class StorageIOError(StorageError):
    """
    Raised when the storage adapter fails to carry out an operation.

    Covers permission problems, disk errors, entry kind mismatches (a folder
    where a file was expected) and handles reused after their target was deleted.
    """

    def __init__(self, message: str, **kwargs):
        error_code = kwargs.pop("error_code", "STORAGE_IO_ERROR")
        super().__init__(message, error_code=error_code, **kwargs)


class NotFoundError(StorageIOError):
    """Raised when a file or folder does not exist at the requested path."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("error_code", "NOT_FOUND")
        super().__init__(message, **kwargs)


class AlreadyExistsError(StorageIOError):
    """
    Raised when creating an entry whose name is already taken.

    This happens under CollisionPolicy.FAIL_IF_EXISTS, or when an exclusive
    create loses a race against another writer.
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("error_code", "ALREADY_EXISTS")
        kwargs.setdefault(
            "suggestion",
            "Use a different name or another collision policy "
            "(replace_existing, open_if_exists, generate_unique_name).",
        )
        super().__init__(message, **kwargs)


class TooManyCollisionsError(AlreadyExistsError):
    """Raised when unique-name generation exhausts its configured attempts."""

    def __init__(self, message: str, attempts: Optional[int] = None, **kwargs):
        self.attempts = attempts

        context = kwargs.pop("context", {})
        if attempts is not None:
            context["attempts"] = attempts

        kwargs.setdefault("error_code", "TOO_MANY_COLLISIONS")
        kwargs.setdefault(
            "suggestion",
            "Clean up numbered duplicates or raise max_unique_name_attempts.",
        )
        super().__init__(message, context=context, **kwargs)
