"""
Custom exceptions for the workout cycle engine.

Storage adapters raise these; the public service boundary catches them,
logs them, and substitutes a safe fallback value. Each exception carries:
- A descriptive message
- An error code usable in structured log records
- Optional details for debugging
"""

from typing import Any, Dict, Optional
from enum import Enum

class ErrorCode(str, Enum):
    """Error codes for consistent error reporting."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Storage errors
    STORAGE_READ_ERROR = "STORAGE_READ_ERROR"
    STORAGE_WRITE_ERROR = "STORAGE_WRITE_ERROR"
    STATE_PARSE_ERROR = "STATE_PARSE_ERROR"

class WorkoutCycleError(Exception):
    """
    Base exception for all workout cycle errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for structured logging."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Storage Errors
# ============================================================================

class StorageError(WorkoutCycleError):
    """Base class for persistence failures."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if key:
            error_details["key"] = key
        if original_error is not None:
            error_details["original_error"] = str(original_error)
        super().__init__(message=message, code=code, details=error_details)
        self.original_error = original_error


class StorageReadError(StorageError):
    """Raised when reading from a store fails."""

    def __init__(
        self,
        message: str = "Failed to read from storage",
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.STORAGE_READ_ERROR,
            key=key,
            original_error=original_error,
        )


class StorageWriteError(StorageError):
    """Raised when writing to a store fails."""

    def __init__(
        self,
        message: str = "Failed to write to storage",
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.STORAGE_WRITE_ERROR,
            key=key,
            original_error=original_error,
        )


class StateParseError(WorkoutCycleError):
    """Raised when a persisted cycle state record is malformed."""

    def __init__(
        self,
        message: str = "Persisted cycle state is malformed",
        raw_value: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: Dict[str, Any] = {}
        if raw_value is not None:
            details["raw_length"] = len(raw_value)
        if original_error is not None:
            details["original_error"] = str(original_error)
        super().__init__(
            message=message,
            code=ErrorCode.STATE_PARSE_ERROR,
            details=details,
        )
        self.original_error = original_error
