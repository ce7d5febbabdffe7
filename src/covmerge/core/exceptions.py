"""Centralised exception hierarchy for covmerge."""

from __future__ import annotations


class CovmergeError(Exception):
    """Base class for all custom covmerge exceptions."""


class CoverageIntegrityError(CovmergeError):
    """A hit map references an index missing from its descriptor map."""


class BranchLineError(CovmergeError):
    """A branch descriptor has neither an explicit line nor a fallback range."""


class InvalidCoverageDataError(CovmergeError):
    """Serialized coverage data does not match the file coverage schema."""


class PathMismatchError(CovmergeError):
    """Two file coverage records for different paths were combined."""


class FileCoverageNotFoundError(CovmergeError, KeyError):
    """No file coverage record exists for the requested path."""


__all__ = [
    "BranchLineError",
    "CoverageIntegrityError",
    "CovmergeError",
    "FileCoverageNotFoundError",
    "InvalidCoverageDataError",
    "PathMismatchError",
]
