"""Keyed collection of file coverage records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from covmerge._meta import logger
from covmerge.core.config import CovmergeConfig
from covmerge.core.exceptions import FileCoverageNotFoundError, InvalidCoverageDataError, PathMismatchError
from covmerge.core.file_coverage import FileCoverage
from covmerge.core.summary import CoverageSummary

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Mapping


@dataclass(slots=True)
class CoverageMap:
    """Coverage records keyed by file path.

    Adding a record for a path already present merges it into the stored
    record; otherwise a copy is stored, so callers keep ownership of whatever
    they pass in. Records for different paths never share state.
    """

    config: CovmergeConfig = field(default_factory=CovmergeConfig)
    data: dict[str, FileCoverage] = field(default_factory=dict)

    @classmethod
    def from_file_coverages(
        cls,
        coverages: Iterable[FileCoverage],
        *,
        config: CovmergeConfig | None = None,
    ) -> CoverageMap:
        coverage_map = cls(config=config or CovmergeConfig())
        for fc in coverages:
            coverage_map.add_file_coverage(fc)
        return coverage_map

    def __contains__(self, path: object) -> bool:
        return path in self.data

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[FileCoverage]:
        return iter(self.data.values())

    def files(self) -> list[str]:
        return list(self.data)

    def file_coverage_for(self, path: str) -> FileCoverage:
        try:
            return self.data[path]
        except KeyError as exc:
            msg = f"No file coverage available for: {path}"
            raise FileCoverageNotFoundError(msg) from exc

    def ensure(self, path: str) -> FileCoverage:
        """Return the record for *path*, creating an empty one when missing."""
        fc = self.data.get(path)
        if fc is None:
            fc = FileCoverage.empty(path, report_logic=self.config.report_logic)
            self.data[path] = fc
        return fc

    def add_file_coverage(self, fc: FileCoverage) -> None:
        """Merge *fc* into the stored record for its path, or store a copy."""
        existing = self.data.get(fc.path)
        if existing is None:
            logger.debug("Adding coverage for %s", fc.path)
            self.data[fc.path] = fc.copy()
            return
        logger.debug("Merging coverage for %s", fc.path)
        existing.merge(fc)

    def merge(self, other: CoverageMap | Iterable[FileCoverage]) -> None:
        """Merge every record of *other* into this map."""
        for fc in other:
            self.add_file_coverage(fc)

    def filter(self, predicate: Callable[[str], bool]) -> None:
        """Drop every record whose path fails *predicate*."""
        for path in [p for p in self.data if not predicate(p)]:
            logger.debug("Dropping coverage for %s", path)
            del self.data[path]

    def get_coverage_summary(self) -> CoverageSummary:
        summary = CoverageSummary.empty(report_logic=self.config.report_logic)
        for fc in self.data.values():
            summary = summary.merge(fc.to_summary())
        return summary

    # ------------------------------------------------------------------ #
    # Wire format                                                        #
    # ------------------------------------------------------------------ #
    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {path: fc.to_dict() for path, fc in self.data.items()}

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Mapping[str, Any]],
        *,
        config: CovmergeConfig | None = None,
    ) -> CoverageMap:
        """Build a map from ``{path: record}`` wire data.

        Each record's own ``path`` must match the key it is stored under.
        """
        config = config or CovmergeConfig()
        coverage_map = cls(config=config)
        for key, record in data.items():
            fc = FileCoverage.from_dict(record, validate_input=config.validate_input)
            if fc.path != key:
                msg = f"Record stored under {key!r} describes {fc.path!r}"
                raise InvalidCoverageDataError(msg)
            coverage_map.add_file_coverage(fc)
        return coverage_map


def merge_file_coverages(coverages: Iterable[FileCoverage]) -> FileCoverage:
    """Reduce records for one path into a single new record.

    The inputs are left untouched. Mixing paths raises
    :class:`PathMismatchError`.
    """
    it = iter(coverages)
    try:
        merged = next(it).copy()
    except StopIteration:
        msg = "Cannot merge an empty sequence of file coverage records"
        raise ValueError(msg) from None
    for fc in it:
        if fc.path != merged.path:
            msg = f"Cannot merge coverage for {fc.path} into {merged.path}"
            raise PathMismatchError(msg)
        merged.merge(fc)
    return merged


__all__ = ["CoverageMap", "merge_file_coverages"]
