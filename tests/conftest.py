from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from covmerge.core import Branch, BranchType, FileCoverage, Function, Range

PATH = "/path/to/file.js"

# Source locations shared by every record built below; only the indices differ.
STATEMENT_LOCS = (
    Range.new(1, 1, 1, 100),
    Range.new(2, 1, 2, 50),
    Range.new(2, 51, 2, 100),
    Range.new(2, 101, 3, 100),
)
FUNCTION = Function(name="foobar", line=1, loc=Range.new(1, 1, 1, 50), decl=Range.new(1, 10, 1, 16))
BRANCH = Branch.from_line(BranchType.IF, 2, [Range.new(2, 1, 2, 20), Range.new(2, 50, 2, 100)])


def build_coverage(
    *,
    start: int = 0,
    s: Sequence[int] = (0, 0, 0, 0),
    f: int = 0,
    b: Sequence[int] = (0, 0),
    b_t: Sequence[int] | None = None,
    path: str = PATH,
) -> FileCoverage:
    """Return a record over the shared locations with indices starting at *start*."""
    return FileCoverage(
        path=path,
        statement_map={start + i: loc for i, loc in enumerate(STATEMENT_LOCS)},
        fn_map={start: FUNCTION},
        branch_map={start: BRANCH},
        s={start + i: hits for i, hits in enumerate(s)},
        f={start: f},
        b={start: list(b)},
        b_t={start: list(b_t)} if b_t is not None else None,
    )


@pytest.fixture
def make_coverage() -> Callable[..., FileCoverage]:
    return build_coverage


@pytest.fixture
def base_coverage() -> FileCoverage:
    return build_coverage()
