"""Report parsers.

This module provides:
- PARSER_BY_FORMAT: Available parsers keyed by format id
- parse_artifact: Convenience function to parse a report file
"""

from pathlib import Path

from gcovreport.config.models import GcovReportConfig
from gcovreport.coverage.models import ParserResult

from .base import CoverageParser
from .gcov import (
    BRANCH_COVERAGE_RE,
    LINE_COVERAGE_RE,
    SOURCE_MARKER,
    BranchRecord,
    CoverageAggregator,
    FunctionMarker,
    FunctionStart,
    GcovParser,
    LineRecord,
    classify_line,
    derive_line_status,
    extract_source_path,
    infer_function_ranges,
)

PARSER_BY_FORMAT: dict[str, type[GcovParser]] = {"gcov": GcovParser}

__all__ = [
    "BRANCH_COVERAGE_RE",
    "LINE_COVERAGE_RE",
    "PARSER_BY_FORMAT",
    "SOURCE_MARKER",
    "BranchRecord",
    "CoverageAggregator",
    "CoverageParser",
    "FunctionMarker",
    "FunctionStart",
    "GcovParser",
    "LineRecord",
    "classify_line",
    "derive_line_status",
    "extract_source_path",
    "infer_function_ranges",
    "parse_artifact",
]


def parse_artifact(
    path: Path,
    *,
    format_id: str = "gcov",
    config: GcovReportConfig | None = None,
) -> ParserResult:
    """Parse a report file into a ParserResult.

    Args:
        path: Path to the report file.
        format_id: Report format. Only "gcov" is supported.
        config: Parser settings; defaults are used when None.

    Raises:
        ReportError: If the file cannot be read or is malformed.
        ValueError: If format_id is unknown.
    """
    parser_cls = PARSER_BY_FORMAT.get(format_id)
    if parser_cls is None:
        valid = ", ".join(sorted(PARSER_BY_FORMAT))
        raise ValueError(f"Unknown report format: {format_id!r}. Valid formats: {valid}")

    config = config or GcovReportConfig()
    parser: CoverageParser = parser_cls.from_config(config.parser)
    return parser.parse_file(path)
