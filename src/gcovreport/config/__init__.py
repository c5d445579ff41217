"""Config module exports."""

from gcovreport.config.loader import GcovReportSettings, load_config
from gcovreport.config.models import (
    GcovReportConfig,
    LoggingConfig,
    LogOutputConfig,
    ParserConfig,
)

__all__ = [
    "load_config",
    "GcovReportConfig",
    "GcovReportSettings",
    "LoggingConfig",
    "LogOutputConfig",
    "ParserConfig",
]
