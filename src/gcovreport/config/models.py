"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (GCOVREPORT__SECTION__KEY)
3. Project YAML (.gcovreport.yaml)
4. Global YAML (~/.config/gcovreport/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    GCOVREPORT__<SECTION>__<KEY>=<VALUE>

Examples:
    GCOVREPORT__LOGGING__LEVEL=DEBUG
    GCOVREPORT__PARSER__DEFAULT_ASSEMBLY_NAME=firmware
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        GCOVREPORT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs one event per parsed report.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ParserConfig(BaseModel):
    """gcov parser configuration.

    Env vars:
        GCOVREPORT__PARSER__DEFAULT_ASSEMBLY_NAME: Label of the top-level grouping

    Filter entries use glob syntax. A leading "+" (or no prefix) includes,
    a leading "-" excludes. Matching ignores case.
    """

    default_assembly_name: str = Field(
        default="Default",
        description="Name of the single assembly that collects all parsed files.",
    )
    file_filters: list[str] = Field(
        default_factory=list,
        description="Patterns matched against the source path from the report.",
    )
    class_filters: list[str] = Field(
        default_factory=list,
        description="Patterns matched against the last path segment of the source path.",
    )

    @field_validator("default_assembly_name")
    @classmethod
    def validate_assembly_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Assembly name must not be empty")
        return v

    @field_validator("file_filters", "class_filters")
    @classmethod
    def validate_filters(cls, v: list[str]) -> list[str]:
        for pattern in v:
            if not pattern.lstrip("+-"):
                raise ValueError(f"Empty filter pattern: {pattern!r}")
        return v


class GcovReportConfig(BaseModel):
    """Root configuration for gcovreport.

    All settings can be configured via:
    1. Environment variables: GCOVREPORT__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
