"""Error kinds and the Result type shared by the resolution pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from loguru import logger

T = TypeVar("T")


# =============================================================================
# Exceptions
# =============================================================================


class EditorWindowsError(Exception):
    """Base class for errors raised by the resolution engine."""


class SnapshotUnavailable(EditorWindowsError):
    """The window-server snapshot could not be obtained. Fatal for a pass."""


class AccessibilityUnavailable(EditorWindowsError):
    """An accessibility query for one process failed.

    Raised by accessibility services and always recovered by the correlator:
    the affected process's windows resolve with an empty identity.
    """

    def __init__(self, message: str, pid: int | None = None, permission_denied: bool = False):
        super().__init__(message)
        self.pid = pid
        self.permission_denied = permission_denied


# =============================================================================
# Error Handling Types (Result + ErrorReport)
# =============================================================================


class ErrorType(Enum):
    SNAPSHOT_UNAVAILABLE = "snapshot_unavailable"
    ACCESSIBILITY_UNAVAILABLE = "accessibility_unavailable"
    MALFORMED_RECORD = "malformed_record"
    PERMISSION_ERROR = "permission_error"
    FILE_NOT_FOUND = "file_not_found"
    PARSE_ERROR = "parse_error"
    VALIDATION_ERROR = "validation_error"


@dataclass
class Error:
    error_type: ErrorType
    message: str
    context: dict = field(default_factory=dict)
    original_exception: Exception | None = None


@dataclass
class Result(Generic[T]):
    success: bool
    value: T | None = None
    error: Error | None = None

    @staticmethod
    def ok(value: T) -> "Result[T]":
        return Result(success=True, value=value)

    @staticmethod
    def err(error: Error) -> "Result[T]":
        return Result(success=False, error=error)

    def is_ok(self) -> bool:
        return self.success

    def is_err(self) -> bool:
        return not self.success


@dataclass
class ErrorReport:
    errors: list[Error] = field(default_factory=list)
    warnings: list[Error] = field(default_factory=list)

    def add_error(self, error: Error):
        self.errors.append(error)
        logger.bind(
            operation="error_report",
            status="error",
            error_type=error.error_type.value,
            **error.context
        ).error(error.message)

    def add_warning(self, error: Error):
        self.warnings.append(error)
        logger.bind(
            operation="error_report",
            status="warning",
            error_type=error.error_type.value,
            **error.context
        ).warning(error.message)

    def collect_result(self, result: Result, as_warning: bool = False) -> bool:
        """Collect error from Result into report if failed."""
        if result.is_err():
            if as_warning:
                self.add_warning(result.error)
            else:
                self.add_error(result.error)
            return False
        return True

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def log_summary(self, op_trace_id: str):
        """Log final summary for the pass."""
        logger.info(
            "Operation complete",
            operation="error_report",
            status="complete",
            trace_id=op_trace_id,
            metrics={
                "total_errors": len(self.errors),
                "total_warnings": len(self.warnings)
            }
        )
