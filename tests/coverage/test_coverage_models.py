"""Tests for the coverage data model."""

import pytest

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

NC = LineVisitStatus.NOT_COVERABLE
NO = LineVisitStatus.NOT_COVERED
PA = LineVisitStatus.PARTIALLY_COVERED
CO = LineVisitStatus.COVERED


def _file(coverage: list[int], branches: dict[int, list[Branch]] | None = None) -> CodeFile:
    status = [NC if v < 0 else (CO if v > 0 else NO) for v in coverage]
    return CodeFile("/src/x.c", coverage, status, branches)


class TestLineVisitStatus:
    """Ordering of line statuses."""

    def test_total_order(self) -> None:
        assert NC < NO < PA < CO
        assert sorted([CO, NC, PA, NO]) == [NC, NO, PA, CO]

    def test_strongest_picks_higher_rank(self) -> None:
        assert LineVisitStatus.strongest(NO, CO) is CO
        assert LineVisitStatus.strongest(CO, PA) is CO
        assert LineVisitStatus.strongest(NC, NC) is NC

    def test_comparison_with_other_types_is_unsupported(self) -> None:
        with pytest.raises(TypeError):
            _ = NC < 1  # type: ignore[operator]


class TestCodeFile:
    """Tests for CodeFile counters and quota."""

    def test_mismatched_arrays_rejected(self) -> None:
        with pytest.raises(ValueError):
            CodeFile("/x.c", [-1, 1], [NC])

    def test_counts(self) -> None:
        code_file = _file(
            [-1, 3, 0, -1, 1],
            {1: [Branch("0", 2), Branch("1", 0)], 4: [Branch("0", 1)]},
        )

        assert code_file.max_line == 4
        assert code_file.coverable_lines == 3
        assert code_file.covered_lines == 2
        assert code_file.total_branches == 3
        assert code_file.covered_branches == 2
        assert code_file.line_rate == pytest.approx(2 / 3)
        assert code_file.branch_rate == pytest.approx(2 / 3)

    def test_empty_file_rates(self) -> None:
        code_file = _file([-1])

        assert code_file.max_line == 0
        assert code_file.line_rate == 0.0
        assert code_file.branch_rate == 0.0

    def test_quota_in_range(self) -> None:
        code_file = _file([-1, 1, 0, -1, 2, 0])

        assert code_file.coverage_quota_in_range(1, 5) == pytest.approx(2 / 4)
        assert code_file.coverage_quota_in_range(1, 1) == 1.0
        assert code_file.coverage_quota_in_range(2, 2) == 0.0

    def test_quota_none_without_coverable_lines(self) -> None:
        code_file = _file([-1, 1, -1, -1])

        assert code_file.coverage_quota_in_range(2, 3) is None

    def test_quota_range_is_clamped(self) -> None:
        code_file = _file([-1, 1, 0])

        assert code_file.coverage_quota_in_range(0, 99) == pytest.approx(0.5)
        assert code_file.coverage_quota_in_range(5, 9) is None
        assert code_file.coverage_quota_in_range(2, 1) is None

    def test_code_elements_in_insertion_order(self) -> None:
        code_file = _file([-1, 1, 1])
        code_file.add_code_element(CodeElement("a", 1, 1, 1.0))
        code_file.add_code_element(CodeElement("b", 2, 2, 1.0))

        assert [e.name for e in code_file.code_elements] == ["a", "b"]

    def test_input_lists_are_copied(self) -> None:
        coverage = [-1, 1]
        branches = {1: [Branch("0", 1)]}
        code_file = CodeFile("/x.c", coverage, [NC, CO], branches)

        coverage[1] = 0
        branches[1].append(Branch("1", 0))

        assert code_file.line_coverage == (-1, 1)
        assert code_file.branches_by_line[1] == (Branch("0", 1),)


class TestContainers:
    """Class, assembly and result aggregation."""

    def test_class_aggregates_files(self) -> None:
        cls = ClassCoverage(name="/src/x.c", assembly_name="Default")
        cls.add_file(_file([-1, 1, 0], {1: [Branch("0", 0)]}))
        cls.add_file(_file([-1, 4]))

        assert cls.display_name == "x.c"
        assert cls.coverable_lines == 3
        assert cls.covered_lines == 2
        assert cls.total_branches == 1
        assert cls.covered_branches == 0

    def test_summary(self) -> None:
        assembly = Assembly("Default")
        cls = ClassCoverage(name="/src/x.c", assembly_name="Default")
        cls.add_file(_file([-1, 1, 0, 2], {1: [Branch("0", 1), Branch("1", 0)]}))
        assembly.add_class(cls)

        result = ParserResult(
            assemblies=[assembly], supports_branch_coverage=True, parser_name="gcov"
        )
        summary = result.summary

        assert summary.lines_found == 3
        assert summary.lines_hit == 2
        assert summary.branches_found == 2
        assert summary.branches_hit == 1
        assert summary.line_rate == pytest.approx(2 / 3)
        assert summary.branch_rate == 0.5

    def test_empty_summary(self) -> None:
        result = ParserResult(
            assemblies=[Assembly("Default")], supports_branch_coverage=False, parser_name="gcov"
        )

        assert result.summary.line_rate == 0.0
        assert result.errors == []


class TestLastPathSegment:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/a/b/c.c", "c.c"),
            ("C:\\a\\b.c", "b.c"),
            ("mixed/dir\\f.c", "f.c"),
            ("plain.c", "plain.c"),
            ("/trailing/", ""),
        ],
    )
    def test_segments(self, path: str, expected: str) -> None:
        assert last_path_segment(path) == expected
