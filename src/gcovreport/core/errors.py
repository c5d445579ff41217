"""gcovreport error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Report
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2003

    # Report (3xxx)
    REPORT_MISSING_SOURCE = 3001
    REPORT_UNREADABLE = 3002


@dataclass(frozen=True, slots=True)
class GcovReportError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'REPORT_MISSING_SOURCE')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(GcovReportError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ReportError(GcovReportError):
    """A single gcov report could not be processed.

    Scoped to one unit: callers parsing several reports record the error
    and carry on with the rest.
    """

    @classmethod
    def missing_source(cls, first_line: str, origin: str | None = None) -> "ReportError":
        details: dict[str, Any] = {"first_line": first_line}
        if origin is not None:
            details["origin"] = origin
        return cls(
            code=ErrorCode.REPORT_MISSING_SOURCE,
            message="First line of gcov report has no '0:Source:' marker",
            details=details,
        )

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_UNREADABLE,
            message=f"Failed to read gcov report at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

