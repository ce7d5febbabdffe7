"""Location-keyed merging of descriptor/hit map pairs.

Indices carry no meaning across independently instrumented runs, so entries
are joined on an identity key derived from each descriptor's location and
re-indexed densely (``0..n-1``) afterwards. Totals are independent of merge
order; the indices given to newly seen keys are not.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from covmerge.core.exceptions import CoverageIntegrityError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from covmerge.core.descriptors import Branch, Function
    from covmerge.core.range import Range

T = TypeVar("T")
V = TypeVar("V")


# --------------------------- Identity keys -----------------------------------
def statement_key(statement: Range) -> str:
    return statement.key


def function_key(function: Function) -> str:
    return function.loc.key


def branch_key(branch: Branch) -> str:
    # Only the first path's location; kind, line and other paths are ignored.
    return branch.key


# --------------------------- Helpers -----------------------------------------
def descriptor_for(descriptors: Mapping[int, T], index: int, *, kind: str) -> T:
    """Return the descriptor paired with hit-map *index* or fail loudly."""
    try:
        return descriptors[index]
    except KeyError as exc:
        msg = f"{kind} hit map references index {index} missing from the {kind} map"
        raise CoverageIntegrityError(msg) from exc


def _reindexed(items: Mapping[str, tuple[V, T]]) -> tuple[dict[int, V], dict[int, T]]:
    values = list(items.values())
    hits = {idx: count for idx, (count, _) in enumerate(values)}
    descriptors = {idx: item for idx, (_, item) in enumerate(values)}
    return hits, descriptors


# --------------------------- Merging -----------------------------------------
def merge_properties(
    first_hits: Mapping[int, int],
    first_map: Mapping[int, T],
    second_hits: Mapping[int, int],
    second_map: Mapping[int, T],
    key_fn: Callable[[T], str],
    *,
    kind: str = "statement",
) -> tuple[dict[int, int], dict[int, T]]:
    """Merge scalar hit counts by identity key.

    Entries of *first* keep their order and descriptors; entries of *second*
    either add to a matching entry or are appended.
    """
    items: dict[str, tuple[int, T]] = {}

    for index, count in first_hits.items():
        item = descriptor_for(first_map, index, kind=kind)
        items[key_fn(item)] = (count, item)

    for index, count in second_hits.items():
        item = descriptor_for(second_map, index, kind=kind)
        key = key_fn(item)
        existing = items.get(key)
        if existing is None:
            items[key] = (count, item)
        else:
            items[key] = (existing[0] + count, existing[1])

    return _reindexed(items)


def merge_branch_properties(
    first_hits: Mapping[int, list[int]],
    first_map: Mapping[int, Branch],
    second_hits: Mapping[int, list[int]],
    second_map: Mapping[int, Branch],
    key_fn: Callable[[Branch], str] = branch_key,
    *,
    kind: str = "branch",
) -> tuple[dict[int, list[int]], dict[int, Branch]]:
    """Merge per-path hit vectors by identity key.

    A shorter existing vector is zero-extended to the incoming length before
    element-wise addition; a longer one keeps its tail untouched. Positions are
    added without checking that both sides describe the same paths.
    """
    items: dict[str, tuple[list[int], Branch]] = {}

    for index, counts in first_hits.items():
        item = descriptor_for(first_map, index, kind=kind)
        items[key_fn(item)] = (list(counts), item)

    for index, counts in second_hits.items():
        item = descriptor_for(second_map, index, kind=kind)
        key = key_fn(item)
        existing = items.get(key)
        if existing is None:
            items[key] = (list(counts), item)
            continue
        merged = existing[0]
        if len(merged) < len(counts):
            merged.extend([0] * (len(counts) - len(merged)))
        for pos, count in enumerate(counts):
            merged[pos] += count

    return _reindexed(items)


__all__ = [
    "branch_key",
    "descriptor_for",
    "function_key",
    "merge_branch_properties",
    "merge_properties",
    "statement_key",
]
