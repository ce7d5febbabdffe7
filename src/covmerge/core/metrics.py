from __future__ import annotations

from covmerge.core.config import FULL_COVERAGE, PERCENT_PRECISION


def percent(covered: int, total: int, *, precision: int = PERCENT_PRECISION) -> float:
    """Return ``covered / total * 100`` floored to *precision* decimal places.

    A category with nothing to measure is fully covered, so a zero *total*
    yields ``FULL_COVERAGE``.
    """
    if total <= 0:
        return FULL_COVERAGE
    scale = 10**precision
    return (covered * int(FULL_COVERAGE) * scale // total) / scale


__all__ = ["percent"]
