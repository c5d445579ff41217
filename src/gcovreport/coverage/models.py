"""Coverage data model produced by the gcov parser.

Hierarchy: ParserResult -> Assembly -> ClassCoverage -> CodeFile -> CodeElement.

Line arrays are dense and indexed by 1-based line number; index 0 is an
unused sentinel. A visit count of -1 marks a line that is not coverable.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from types import MappingProxyType

from gcovreport.core.errors import ReportError


@total_ordering
class LineVisitStatus(Enum):
    """Coverage classification of a single source line."""

    NOT_COVERABLE = "not_coverable"
    NOT_COVERED = "not_covered"
    PARTIALLY_COVERED = "partially_covered"
    COVERED = "covered"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LineVisitStatus):
            return NotImplemented
        return self.rank < other.rank

    @classmethod
    def strongest(cls, first: LineVisitStatus, second: LineVisitStatus) -> LineVisitStatus:
        """Return whichever status ranks higher."""
        return second if first < second else first


_STATUS_RANK: dict[LineVisitStatus, int] = {
    LineVisitStatus.NOT_COVERABLE: 0,
    LineVisitStatus.NOT_COVERED: 1,
    LineVisitStatus.PARTIALLY_COVERED: 2,
    LineVisitStatus.COVERED: 3,
}


@dataclass(frozen=True, slots=True)
class Branch:
    """A branch leaving a source line.

    The identifier is the ordinal gcov prints ("branch 0", "branch 1", ...).
    """

    identifier: str
    visits: int


@dataclass(frozen=True, slots=True)
class CodeElement:
    """A function and the line range attributed to it."""

    name: str
    first_line: int
    last_line: int
    coverage_quota: float | None  # None when the range has no coverable lines


class CodeFile:
    """Coverage of one source file.

    The arrays and branch mapping are fixed at construction; only code
    elements can be added afterwards.
    """

    def __init__(
        self,
        path: str,
        line_coverage: Sequence[int],
        line_visit_status: Sequence[LineVisitStatus],
        branches_by_line: Mapping[int, Sequence[Branch]] | None = None,
    ) -> None:
        if len(line_coverage) != len(line_visit_status):
            raise ValueError(
                f"Coverage and status arrays differ in length: "
                f"{len(line_coverage)} != {len(line_visit_status)}"
            )
        self.path = path
        self._line_coverage = tuple(line_coverage)
        self._line_visit_status = tuple(line_visit_status)
        self._branches_by_line: Mapping[int, tuple[Branch, ...]] = MappingProxyType(
            {line: tuple(branches) for line, branches in (branches_by_line or {}).items()}
        )
        self._code_elements: list[CodeElement] = []

    def __repr__(self) -> str:
        return f"CodeFile(path={self.path!r}, lines={self.max_line})"

    @property
    def line_coverage(self) -> tuple[int, ...]:
        return self._line_coverage

    @property
    def line_visit_status(self) -> tuple[LineVisitStatus, ...]:
        return self._line_visit_status

    @property
    def branches_by_line(self) -> Mapping[int, tuple[Branch, ...]]:
        return self._branches_by_line

    @property
    def code_elements(self) -> tuple[CodeElement, ...]:
        return tuple(self._code_elements)

    @property
    def max_line(self) -> int:
        """Highest line number covered by the arrays (0 when empty)."""
        return max(len(self._line_coverage) - 1, 0)

    @property
    def coverable_lines(self) -> int:
        return sum(1 for visits in self._line_coverage if visits >= 0)

    @property
    def covered_lines(self) -> int:
        return sum(1 for visits in self._line_coverage if visits > 0)

    @property
    def total_branches(self) -> int:
        return sum(len(branches) for branches in self._branches_by_line.values())

    @property
    def covered_branches(self) -> int:
        return sum(
            1
            for branches in self._branches_by_line.values()
            for branch in branches
            if branch.visits > 0
        )

    @property
    def line_rate(self) -> float:
        """Fraction of coverable lines covered (0.0 to 1.0)."""
        coverable = self.coverable_lines
        return self.covered_lines / coverable if coverable else 0.0

    @property
    def branch_rate(self) -> float:
        """Fraction of branches taken at least once (0.0 to 1.0)."""
        total = self.total_branches
        return self.covered_branches / total if total else 0.0

    def coverage_quota_in_range(self, first_line: int, last_line: int) -> float | None:
        """Fraction of coverable lines in [first_line, last_line] that were visited.

        The range is clamped to the known lines. Returns None when it
        contains no coverable line at all.
        """
        start = max(first_line, 1)
        stop = min(last_line, len(self._line_coverage) - 1)
        if start > stop:
            return None

        coverable = [v for v in self._line_coverage[start : stop + 1] if v >= 0]
        if not coverable:
            return None
        return sum(1 for v in coverable if v > 0) / len(coverable)

    def add_code_element(self, element: CodeElement) -> None:
        self._code_elements.append(element)


@dataclass(slots=True)
class ClassCoverage:
    """A class in the report model. For gcov, one class per source file.

    The name is the full source path as reported; display_name is its last
    path segment.
    """

    name: str
    assembly_name: str
    files: list[CodeFile] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return last_path_segment(self.name)

    @property
    def coverable_lines(self) -> int:
        return sum(f.coverable_lines for f in self.files)

    @property
    def covered_lines(self) -> int:
        return sum(f.covered_lines for f in self.files)

    @property
    def total_branches(self) -> int:
        return sum(f.total_branches for f in self.files)

    @property
    def covered_branches(self) -> int:
        return sum(f.covered_branches for f in self.files)

    def add_file(self, code_file: CodeFile) -> None:
        self.files.append(code_file)


@dataclass(slots=True)
class Assembly:
    """Top-level grouping of classes."""

    name: str
    classes: list[ClassCoverage] = field(default_factory=list)

    def add_class(self, cls: ClassCoverage) -> None:
        self.classes.append(cls)


@dataclass(frozen=True, slots=True)
class CoverageSummary:
    """Aggregate coverage statistics.

    Computed from a ParserResult; immutable summary snapshot.
    """

    lines_found: int
    lines_hit: int
    branches_found: int
    branches_hit: int
    line_rate: float
    branch_rate: float


@dataclass(slots=True)
class ParserResult:
    """Everything one parser run produced."""

    assemblies: list[Assembly]
    supports_branch_coverage: bool
    parser_name: str
    errors: list[ReportError] = field(default_factory=list)  # units skipped as malformed

    @property
    def classes(self) -> list[ClassCoverage]:
        return [cls for assembly in self.assemblies for cls in assembly.classes]

    @property
    def summary(self) -> CoverageSummary:
        """Compute aggregate summary across all classes."""
        classes = self.classes
        lines_found = sum(c.coverable_lines for c in classes)
        lines_hit = sum(c.covered_lines for c in classes)
        branches_found = sum(c.total_branches for c in classes)
        branches_hit = sum(c.covered_branches for c in classes)

        return CoverageSummary(
            lines_found=lines_found,
            lines_hit=lines_hit,
            branches_found=branches_found,
            branches_hit=branches_hit,
            line_rate=lines_hit / lines_found if lines_found > 0 else 0.0,
            branch_rate=branches_hit / branches_found if branches_found > 0 else 0.0,
        )


def last_path_segment(path: str) -> str:
    """Return the text after the last '/' or '\\' in path."""
    return path[max(path.rfind("/"), path.rfind("\\")) + 1 :]
