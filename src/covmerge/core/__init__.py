from covmerge.core.config import (
    FULL_COVERAGE,
    LOG_FORMAT,
    PERCENT_PRECISION,
    CovmergeConfig,
    get_schema,
    load_config,
)
from covmerge.core.coverage_map import CoverageMap, merge_file_coverages
from covmerge.core.descriptors import Branch, Function
from covmerge.core.exceptions import (
    BranchLineError,
    CoverageIntegrityError,
    CovmergeError,
    FileCoverageNotFoundError,
    InvalidCoverageDataError,
    PathMismatchError,
)
from covmerge.core.file_coverage import FileCoverage
from covmerge.core.metrics import percent
from covmerge.core.range import Position, Range
from covmerge.core.summary import CoverageSummary, LineBranchCoverage, Totals
from covmerge.core.types import (
    BranchHitMap,
    BranchMap,
    BranchType,
    FunctionMap,
    LineHitMap,
    StatementMap,
)

__all__ = [
    "FULL_COVERAGE",
    "LOG_FORMAT",
    "PERCENT_PRECISION",
    "Branch",
    "BranchHitMap",
    "BranchLineError",
    "BranchMap",
    "BranchType",
    "CoverageIntegrityError",
    "CoverageMap",
    "CoverageSummary",
    "CovmergeConfig",
    "CovmergeError",
    "FileCoverage",
    "FileCoverageNotFoundError",
    "Function",
    "FunctionMap",
    "InvalidCoverageDataError",
    "LineBranchCoverage",
    "LineHitMap",
    "PathMismatchError",
    "Position",
    "Range",
    "StatementMap",
    "Totals",
    "get_schema",
    "load_config",
    "merge_file_coverages",
    "percent",
]
