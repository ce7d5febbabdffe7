from __future__ import annotations

import pytest

from covmerge.core import CoverageSummary, Totals, percent
from covmerge.core.summary import compute_branch_totals, compute_simple_totals


@pytest.mark.parametrize(
    ("covered", "total", "expected"),
    [
        (0, 0, 100.0),
        (0, 4, 0.0),
        (1, 4, 25.0),
        (1, 2, 50.0),
        (1, 3, 33.33),
        (2, 3, 66.66),
        (57, 100, 57.0),
        (4, 4, 100.0),
    ],
)
def test_percent(covered: int, total: int, expected: float) -> None:
    assert percent(covered, total) == expected


def test_percent_precision() -> None:
    assert percent(1, 3, precision=0) == 33.0
    assert percent(1, 3, precision=4) == 33.3333


def test_simple_totals_count_entries() -> None:
    assert compute_simple_totals({0: 0, 1: 3, 2: 1}) == Totals(3, 2, 0, 66.66)
    assert compute_simple_totals({}) == Totals(0, 0, 0, 100.0)


def test_branch_totals_count_paths() -> None:
    assert compute_branch_totals({0: [1, 0], 1: [0, 0, 0, 2]}) == Totals(6, 2, 0, 33.33)


def test_totals_validation() -> None:
    with pytest.raises(ValueError, match="covered <= total"):
        Totals(total=1, covered=2)
    with pytest.raises(ValueError, match="must be >= 0"):
        Totals(total=-1)


def test_totals_merge_recomputes_pct() -> None:
    merged = Totals.of(4, 1).merge(Totals.of(2, 2))
    assert merged == Totals(6, 3, 0, 50.0)
    assert merged.missed == 3


def _summary(covered: int, total: int, *, with_true: bool = False) -> CoverageSummary:
    totals = Totals.of(total, covered)
    return CoverageSummary(totals, totals, totals, totals, totals if with_true else None)


def test_summary_merge_sums_each_category() -> None:
    merged = _summary(1, 2).merge(_summary(1, 4))
    assert merged.lines == Totals(6, 2, 0, 33.33)
    assert merged.branches == Totals(6, 2, 0, 33.33)
    assert merged.branches_true is None


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [
        (True, False, Totals(2, 1, 0, 50.0)),
        (False, True, Totals(4, 1, 0, 25.0)),
        (True, True, Totals(6, 2, 0, 33.33)),
    ],
)
def test_summary_merge_keeps_branches_true(left: bool, right: bool, expected: Totals) -> None:
    merged = _summary(1, 2, with_true=left).merge(_summary(1, 4, with_true=right))
    assert merged.branches_true == expected


def test_empty_summary() -> None:
    summary = CoverageSummary.empty()
    assert summary.is_empty()
    assert summary.branches_true is None
    assert CoverageSummary.empty(report_logic=True).branches_true == Totals()


def test_summary_to_dict() -> None:
    assert _summary(1, 2, with_true=True).to_dict() == {
        "lines": {"total": 2, "covered": 1, "skipped": 0, "pct": 50.0},
        "statements": {"total": 2, "covered": 1, "skipped": 0, "pct": 50.0},
        "functions": {"total": 2, "covered": 1, "skipped": 0, "pct": 50.0},
        "branches": {"total": 2, "covered": 1, "skipped": 0, "pct": 50.0},
        "branchesTrue": {"total": 2, "covered": 1, "skipped": 0, "pct": 50.0},
    }
    assert "branchesTrue" not in _summary(1, 2).to_dict()
