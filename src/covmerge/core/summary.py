"""Totals and summaries derived from file coverage records.

Everything here is an immutable snapshot: a summary computed from a record
does not follow later changes to that record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from covmerge.core.config import FULL_COVERAGE
from covmerge.core.metrics import percent

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


# --------------------------- Totals ------------------------------------------
@dataclass(frozen=True, slots=True)
class Totals:
    """Coverage counts for one category (lines, statements, ...)."""

    total: int = 0
    covered: int = 0
    skipped: int = 0
    pct: float = FULL_COVERAGE

    def __post_init__(self) -> None:
        """Validate that counts are non-negative and consistent."""
        if self.total < 0 or self.covered < 0 or self.skipped < 0:
            msg = "Totals fields must be >= 0"
            raise ValueError(msg)
        if self.covered > self.total:
            msg = "Totals requires covered <= total"
            raise ValueError(msg)

    @classmethod
    def of(cls, total: int, covered: int) -> Totals:
        return cls(total=total, covered=covered, skipped=0, pct=percent(covered, total))

    @property
    def missed(self) -> int:
        return self.total - self.covered

    def merge(self, other: Totals) -> Totals:
        total = self.total + other.total
        covered = self.covered + other.covered
        return Totals(total=total, covered=covered, skipped=self.skipped + other.skipped, pct=percent(covered, total))

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total, "covered": self.covered, "skipped": self.skipped, "pct": self.pct}


def compute_simple_totals(hits: Mapping[int, int]) -> Totals:
    """Count entries, and entries with a non-zero count."""
    return Totals.of(len(hits), sum(1 for count in hits.values() if count > 0))


def compute_branch_totals(hits: Mapping[int, list[int]]) -> Totals:
    """Count branch *paths* (not branches), and paths taken at least once."""
    total = covered = 0
    for counts in hits.values():
        total += len(counts)
        covered += sum(1 for count in counts if count > 0)
    return Totals.of(total, covered)


# --------------------------- Per-line branch coverage ------------------------
@dataclass(frozen=True, slots=True)
class LineBranchCoverage:
    """Paths covered on a single source line."""

    covered: int
    total: int
    percentage: float

    @classmethod
    def from_counts(cls, counts: Iterable[int]) -> LineBranchCoverage:
        values = list(counts)
        covered = sum(1 for count in values if count > 0)
        return cls(covered=covered, total=len(values), percentage=percent(covered, len(values)))


# --------------------------- Summary -----------------------------------------
@dataclass(frozen=True, slots=True)
class CoverageSummary:
    """Per-category totals for one file, or for a whole coverage map."""

    lines: Totals
    statements: Totals
    functions: Totals
    branches: Totals
    branches_true: Totals | None = None

    @classmethod
    def empty(cls, *, report_logic: bool = False) -> CoverageSummary:
        return cls(
            lines=Totals(),
            statements=Totals(),
            functions=Totals(),
            branches=Totals(),
            branches_true=Totals() if report_logic else None,
        )

    def is_empty(self) -> bool:
        return self.lines.total == 0

    def merge(self, other: CoverageSummary) -> CoverageSummary:
        """Return a new summary adding *other*'s counts to this one."""
        if self.branches_true is None:
            branches_true = other.branches_true
        elif other.branches_true is None:
            branches_true = self.branches_true
        else:
            branches_true = self.branches_true.merge(other.branches_true)

        return CoverageSummary(
            lines=self.lines.merge(other.lines),
            statements=self.statements.merge(other.statements),
            functions=self.functions.merge(other.functions),
            branches=self.branches.merge(other.branches),
            branches_true=branches_true,
        )

    def to_dict(self) -> dict[str, Any]:
        out = {
            "lines": self.lines.to_dict(),
            "statements": self.statements.to_dict(),
            "functions": self.functions.to_dict(),
            "branches": self.branches.to_dict(),
        }
        if self.branches_true is not None:
            out["branchesTrue"] = self.branches_true.to_dict()
        return out


__all__ = [
    "CoverageSummary",
    "LineBranchCoverage",
    "Totals",
    "compute_branch_totals",
    "compute_simple_totals",
]
