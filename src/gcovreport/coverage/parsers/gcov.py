"""gcov annotated-source parser.

gcov writes one ``<source>.gcov`` file per source file, shaped like:

        -:    0:Source:/src/app/main.c
        -:    0:Graph:main.gcno
    function main called 1 returned 100% blocks executed 80%
        1:    3:int main(void) {
    #####:    4:    if (argc > 1)
    branch  0 taken 0
    branch  1 never executed
        -:    5:}

Record kinds, tested in this order:
- Line coverage: ``<visits>:<line>:<source>`` where visits is a count,
  ``#####``/``=====`` (instrumented, never executed) or ``-`` (not
  instrumented). Repeated records for one line are summed.
- Branch coverage: ``branch <n> taken <count>`` or ``branch <n> never
  executed``. Belongs to the highest line number seen so far; repeated
  records for the same (line, n) are summed.
- Function marker: ``function <name> ...``. Precedes the first line of the
  function body, so the function starts right after the highest line seen.

Anything else (headers, ``call`` lines, garbage) is ignored.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

import structlog

from gcovreport.config.models import ParserConfig
from gcovreport.core.errors import ReportError
from gcovreport.core.numbers import parse_large_integer
from gcovreport.coverage.filters import ElementFilter, ElementPredicate, include_all
from gcovreport.coverage.models import (
    Assembly,
    Branch,
    ClassCoverage,
    CodeElement,
    CodeFile,
    LineVisitStatus,
    ParserResult,
    last_path_segment,
)

logger = structlog.get_logger()

SOURCE_MARKER = "0:Source:"
FUNCTION_PREFIX = "function "
DEFAULT_ASSEMBLY_NAME = "Default"

LINE_COVERAGE_RE = re.compile(
    r"\s*(?P<visits>-|#####|=====|\d+):\s*(?P<line_number>[1-9]\d*):.*"
)
BRANCH_COVERAGE_RE = re.compile(
    r"branch\s*(?P<number>\d+)\s*(?:taken\s*(?P<visits>\d+)|never\sexecuted?)"
)

_NOT_INSTRUMENTED = "-"
_UNEXECUTED = frozenset({"#####", "====="})


@dataclass(frozen=True, slots=True)
class LineRecord:
    """Line coverage record. visits is None for non-instrumented lines."""

    line_number: int
    visits: int | None


@dataclass(frozen=True, slots=True)
class BranchRecord:
    identifier: str
    visits: int


@dataclass(frozen=True, slots=True)
class FunctionMarker:
    name: str


GcovRecord = LineRecord | BranchRecord | FunctionMarker


@dataclass(frozen=True, slots=True)
class FunctionStart:
    """A function marker pinned to the first line of its body."""

    name: str
    first_line: int


def extract_source_path(first_line: str, *, origin: str | None = None) -> str:
    """Return the source path following the ``0:Source:`` marker.

    Raises:
        ReportError: If the marker is missing.
    """
    index = first_line.find(SOURCE_MARKER)
    if index < 0:
        raise ReportError.missing_source(first_line, origin)
    return first_line[index + len(SOURCE_MARKER) :].rstrip("\r\n")


def classify_line(line: str) -> GcovRecord | None:
    """Classify one report line, or return None if it carries no coverage."""
    match = LINE_COVERAGE_RE.search(line)
    if match:
        line_number = int(match.group("line_number"))
        visits_text = match.group("visits")
        if visits_text == _NOT_INSTRUMENTED:
            return LineRecord(line_number, None)
        if visits_text in _UNEXECUTED:
            return LineRecord(line_number, 0)
        return LineRecord(line_number, parse_large_integer(visits_text))

    match = BRANCH_COVERAGE_RE.search(line)
    if match:
        taken = match.group("visits")
        visits = parse_large_integer(taken) if taken is not None else 0
        return BranchRecord(match.group("number"), visits)

    if line.startswith(FUNCTION_PREFIX):
        rest = line[len(FUNCTION_PREFIX) :]
        name, _, _ = rest.partition(" ")
        return FunctionMarker(name.rstrip("\r\n"))

    return None


class CoverageAggregator:
    """Accumulates records from a single forward pass over a report."""

    def __init__(self) -> None:
        self.max_line = 0
        self.visits_by_line: dict[int, int] = {}
        self.function_starts: list[FunctionStart] = []
        # (line, branch identifier) -> visits, in first-seen order
        self._branch_visits: dict[tuple[int, str], int] = {}

    def add(self, record: GcovRecord) -> None:
        if isinstance(record, LineRecord):
            self._add_line(record)
        elif isinstance(record, BranchRecord):
            self._add_branch(record)
        else:
            self.function_starts.append(FunctionStart(record.name, self.max_line + 1))

    def consume(self, lines: Iterable[str]) -> CoverageAggregator:
        for line in lines:
            record = classify_line(line)
            if record is not None:
                self.add(record)
        return self

    def _add_line(self, record: LineRecord) -> None:
        self.max_line = max(self.max_line, record.line_number)
        if record.visits is None:
            return
        self.visits_by_line[record.line_number] = (
            self.visits_by_line.get(record.line_number, 0) + record.visits
        )

    def _add_branch(self, record: BranchRecord) -> None:
        if self.max_line == 0:
            logger.debug("gcov.branch_without_line", branch=record.identifier)
            return
        key = (self.max_line, record.identifier)
        self._branch_visits[key] = self._branch_visits.get(key, 0) + record.visits

    def branches_by_line(self) -> dict[int, list[Branch]]:
        result: dict[int, list[Branch]] = {}
        for (line, identifier), visits in self._branch_visits.items():
            result.setdefault(line, []).append(Branch(identifier, visits))
        return result


def derive_line_status(
    visits_by_line: dict[int, int],
    branches_by_line: dict[int, list[Branch]],
    max_line: int,
) -> tuple[list[int], list[LineVisitStatus]]:
    """Build the dense visit and status arrays (index 0 unused)."""
    coverage = [-1] * (max_line + 1)
    status = [LineVisitStatus.NOT_COVERABLE] * (max_line + 1)

    for line, visits in visits_by_line.items():
        coverage[line] = visits

        if visits == 0:
            line_status = LineVisitStatus.NOT_COVERED
        elif any(b.visits == 0 for b in branches_by_line.get(line, ())):
            line_status = LineVisitStatus.PARTIALLY_COVERED
        else:
            line_status = LineVisitStatus.COVERED

        status[line] = LineVisitStatus.strongest(status[line], line_status)

    return coverage, status


def infer_function_ranges(
    starts: Sequence[FunctionStart], max_line: int
) -> list[tuple[str, int, int]]:
    """Split the file into (name, first_line, last_line) ranges.

    Each function runs up to the line before the next one starts; the last
    one runs to max_line. Starts are ordered by first line (stable).
    """
    ordered = sorted(starts, key=lambda s: s.first_line)
    ranges: list[tuple[str, int, int]] = []
    for i, start in enumerate(ordered):
        last_line = ordered[i + 1].first_line - 1 if i + 1 < len(ordered) else max_line
        ranges.append((start.name, start.first_line, last_line))
    return ranges


class GcovParser:
    """Parser for gcov annotated-source (``.gcov``) reports.

    Each report describes one source file, which becomes one class with one
    file inside a single assembly.
    """

    def __init__(
        self,
        file_filter: ElementPredicate = include_all,
        class_filter: ElementPredicate = include_all,
        default_assembly_name: str = DEFAULT_ASSEMBLY_NAME,
    ) -> None:
        self.file_filter = file_filter
        self.class_filter = class_filter
        self.default_assembly_name = default_assembly_name

    @classmethod
    def from_config(cls, config: ParserConfig) -> GcovParser:
        return cls(
            file_filter=ElementFilter(config.file_filters),
            class_filter=ElementFilter(config.class_filters),
            default_assembly_name=config.default_assembly_name,
        )

    @property
    def format_id(self) -> str:
        return "gcov"

    def can_parse(self, path: Path) -> bool:
        """Check if the file's first line carries the gcov source marker."""
        if not path.is_file():
            return False
        try:
            with path.open(encoding="utf-8", errors="replace") as f:
                first_line = f.readline()
        except OSError:
            return False
        return SOURCE_MARKER in first_line

    def parse(self, lines: Sequence[str] | None) -> ParserResult:
        """Parse one report given as its lines.

        Raises:
            ValueError: If lines is None.
            ReportError: If the first line has no source marker.
        """
        if lines is None:
            raise ValueError("lines must not be None")

        assembly = Assembly(self.default_assembly_name)
        if lines:
            self._process_class(assembly, lines)
        return self._result(assembly)

    def parse_reports(self, reports: Iterable[Sequence[str]]) -> ParserResult:
        """Parse several reports into one assembly.

        A malformed report is logged and recorded in ``errors``; the others
        are still parsed.
        """
        assembly = Assembly(self.default_assembly_name)
        errors: list[ReportError] = []
        for lines in reports:
            if lines is None:
                raise ValueError("lines must not be None")
            if not lines:
                continue
            try:
                self._process_class(assembly, lines)
            except ReportError as e:
                logger.warning("gcov.report_skipped", error=e.error_name, **e.details)
                errors.append(e)
        return self._result(assembly, errors)

    def parse_file(self, path: Path) -> ParserResult:
        """Read and parse a single ``.gcov`` file.

        Raises:
            ReportError: If the file cannot be read or is malformed.
        """
        lines = _read_lines(path)
        assembly = Assembly(self.default_assembly_name)
        if lines:
            self._process_class(assembly, lines, origin=str(path))
        return self._result(assembly)

    def parse_files(self, paths: Iterable[Path]) -> ParserResult:
        """Read and parse several ``.gcov`` files, skipping broken ones."""
        assembly = Assembly(self.default_assembly_name)
        errors: list[ReportError] = []
        for path in paths:
            try:
                lines = _read_lines(path)
                if lines:
                    self._process_class(assembly, lines, origin=str(path))
            except ReportError as e:
                logger.warning("gcov.report_skipped", error=e.error_name, **e.details)
                errors.append(e)
        return self._result(assembly, errors)

    def _result(
        self, assembly: Assembly, errors: list[ReportError] | None = None
    ) -> ParserResult:
        # Not every gcov report contains branch coverage
        supports_branch_coverage = any(c.total_branches > 0 for c in assembly.classes)
        return ParserResult(
            assemblies=[assembly],
            supports_branch_coverage=supports_branch_coverage,
            parser_name=self.format_id,
            errors=errors or [],
        )

    def _process_class(
        self, assembly: Assembly, lines: Sequence[str], *, origin: str | None = None
    ) -> None:
        file_name = extract_source_path(lines[0], origin=origin)

        if not self.file_filter(file_name):
            logger.debug("gcov.file_filtered", path=file_name)
            return

        class_name = last_path_segment(file_name)
        if not self.class_filter(class_name):
            logger.debug("gcov.class_filtered", path=file_name, class_name=class_name)
            return

        cls = ClassCoverage(name=file_name, assembly_name=assembly.name)
        cls.add_file(self._build_code_file(file_name, lines))
        assembly.add_class(cls)

    def _build_code_file(self, file_name: str, lines: Sequence[str]) -> CodeFile:
        aggregator = CoverageAggregator().consume(lines)
        branches_by_line = aggregator.branches_by_line()

        coverage, status = derive_line_status(
            aggregator.visits_by_line, branches_by_line, aggregator.max_line
        )
        code_file = CodeFile(file_name, coverage, status, branches_by_line)

        for name, first_line, last_line in infer_function_ranges(
            aggregator.function_starts, aggregator.max_line
        ):
            code_file.add_code_element(
                CodeElement(
                    name=name,
                    first_line=first_line,
                    last_line=last_line,
                    coverage_quota=code_file.coverage_quota_in_range(first_line, last_line),
                )
            )

        logger.debug(
            "gcov.file_parsed",
            path=file_name,
            max_line=aggregator.max_line,
            coverable_lines=code_file.coverable_lines,
            branches=code_file.total_branches,
            functions=len(aggregator.function_starts),
        )
        return code_file


def _read_lines(path: Path) -> list[str]:
    try:
        return path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as e:
        raise ReportError.unreadable(str(path), str(e)) from e
