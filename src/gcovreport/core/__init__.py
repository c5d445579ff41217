"""Core module exports."""

from gcovreport.core.errors import (
    ConfigError,
    ErrorCode,
    GcovReportError,
    ReportError,
)
from gcovreport.core.logging import (
    configure_logging,
    get_log_file_path,
    get_logger,
)
from gcovreport.core.numbers import parse_large_integer

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "GcovReportError",
    "ReportError",
    # Logging
    "configure_logging",
    "get_log_file_path",
    "get_logger",
    # Numbers
    "parse_large_integer",
]
