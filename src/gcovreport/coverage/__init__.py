"""gcov report ingestion into a normalized coverage model.

Usage:
    from gcovreport.coverage import GcovParser, parse_artifact

    # Parse one .gcov file with configured defaults
    result = parse_artifact(Path("build/main.c.gcov"))

    # Parse several reports into one assembly
    parser = GcovParser(default_assembly_name="firmware")
    result = parser.parse_reports([lines_a, lines_b])
    result.supports_branch_coverage
"""

from gcovreport.coverage.filters import ElementFilter, ElementPredicate, include_all
from gcovreport.coverage.models import (
    Assembly,
    Branch,
    ClassCoverage,
    CodeElement,
    CodeFile,
    CoverageSummary,
    LineVisitStatus,
    ParserResult,
)
from gcovreport.coverage.parsers import (
    PARSER_BY_FORMAT,
    CoverageParser,
    GcovParser,
    parse_artifact,
)

__all__ = [
    # Models
    "Assembly",
    "Branch",
    "ClassCoverage",
    "CodeElement",
    "CodeFile",
    "CoverageSummary",
    "LineVisitStatus",
    "ParserResult",
    # Filters
    "ElementFilter",
    "ElementPredicate",
    "include_all",
    # Parsers
    "CoverageParser",
    "GcovParser",
    "PARSER_BY_FORMAT",
    "parse_artifact",
]
