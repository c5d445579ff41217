"""Tests for config/models.py module.

Covers:
- LogOutputConfig model
- LoggingConfig model
- ParserConfig model
- GcovReportConfig root model
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gcovreport.config.models import (
    GcovReportConfig,
    LoggingConfig,
    LogOutputConfig,
    ParserConfig,
)


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    def test_absolute_path_destination(self) -> None:
        config = LogOutputConfig(destination="/var/log/gcovreport.log")
        assert config.destination == "/var/log/gcovreport.log"

    def test_relative_path_fails(self) -> None:
        with pytest.raises(ValidationError):
            LogOutputConfig(destination="relative/path.log")

    def test_invalid_format_fails(self) -> None:
        with pytest.raises(ValidationError):
            LogOutputConfig(format="xml")  # type: ignore[arg-type]


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert len(config.outputs) == 1

    def test_invalid_level_fails(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")  # type: ignore[arg-type]


class TestParserConfig:
    """Tests for ParserConfig model."""

    def test_defaults(self) -> None:
        config = ParserConfig()
        assert config.default_assembly_name == "Default"
        assert config.file_filters == []
        assert config.class_filters == []

    def test_blank_assembly_name_fails(self) -> None:
        with pytest.raises(ValidationError):
            ParserConfig(default_assembly_name="   ")

    @pytest.mark.parametrize("pattern", ["", "+", "-"])
    def test_empty_filter_pattern_fails(self, pattern: str) -> None:
        with pytest.raises(ValidationError):
            ParserConfig(file_filters=[pattern])

    def test_valid_filters(self) -> None:
        config = ParserConfig(file_filters=["+/src/*", "-*/gen/*"], class_filters=["*.c"])
        assert config.file_filters == ["+/src/*", "-*/gen/*"]


class TestGcovReportConfig:
    def test_defaults(self) -> None:
        config = GcovReportConfig()
        assert config.parser.default_assembly_name == "Default"
        assert config.logging.level == "INFO"
