"""Coverage parser protocol."""

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol

from gcovreport.coverage.models import ParserResult


class CoverageParser(Protocol):
    """Protocol for report parsers feeding the coverage model.

    Each parser handles one report format and converts it to a ParserResult.
    """

    @property
    def format_id(self) -> str:
        """Format identifier (e.g., 'gcov')."""
        ...

    def can_parse(self, path: Path) -> bool:
        """Check if this parser can handle the given file.

        Uses content sniffing for auto-detection.
        """
        ...

    def parse(self, lines: Sequence[str]) -> ParserResult:
        """Parse one report, already split into lines.

        Raises:
            ReportError: If the report is malformed.
        """
        ...

    def parse_reports(self, reports: Iterable[Sequence[str]]) -> ParserResult:
        """Parse several reports, skipping malformed ones."""
        ...

    def parse_file(self, path: Path) -> ParserResult:
        """Read and parse one report file.

        Raises:
            ReportError: If the file cannot be read or is malformed.
        """
        ...
