"""Shared type aliases and enumerations used across covmerge."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from covmerge.core.descriptors import Branch, Function
    from covmerge.core.range import Range

# ---------------------------------------------------------------------------
# Common type aliases
# ---------------------------------------------------------------------------

LineHitMap: TypeAlias = dict[int, int]
"""Scalar hit counts keyed by statement/function index (or by line number)."""

BranchHitMap: TypeAlias = dict[int, list[int]]
"""Per-path hit counts keyed by branch index."""

StatementMap: TypeAlias = "dict[int, Range]"
FunctionMap: TypeAlias = "dict[int, Function]"
BranchMap: TypeAlias = "dict[int, Branch]"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class BranchType(StrEnum):
    """Kinds of branching constructs recorded by instrumenters."""

    BINARY_EXPR = "binary-expr"
    COND_EXPR = "cond-expr"
    DEFAULT_ARG = "default-arg"
    IF = "if"
    LOGICAL_EXPR = "logical-expr"
    SWITCH = "switch"


__all__ = [
    "BranchHitMap",
    "BranchMap",
    "BranchType",
    "FunctionMap",
    "LineHitMap",
    "StatementMap",
]
