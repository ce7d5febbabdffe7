"""Per-file coverage record: descriptors, hit counts, merge and derived views."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

from jsonschema import ValidationError
from jsonschema import validate as validate_schema

from covmerge._meta import logger
from covmerge.core.config import get_schema
from covmerge.core.descriptors import Branch, Function
from covmerge.core.exceptions import CoverageIntegrityError, InvalidCoverageDataError
from covmerge.core.merge import (
    branch_key,
    descriptor_for,
    function_key,
    merge_branch_properties,
    merge_properties,
    statement_key,
)
from covmerge.core.range import Range
from covmerge.core.summary import (
    CoverageSummary,
    LineBranchCoverage,
    compute_branch_totals,
    compute_simple_totals,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from covmerge.core.types import BranchHitMap, BranchMap, FunctionMap, LineHitMap, StatementMap


@dataclass(slots=True)
class FileCoverage:
    """Coverage for a single file.

    Parameters
    ----------
    path:
        The file the record describes; the aggregator's identity key.
    all:
        Placeholder meaning "fully covered, no detail". While set, the maps are
        not representative of the file.
    statement_map, fn_map, branch_map:
        Descriptors keyed by 0-based index.
    s, f, b:
        Hit counts keyed by the same indices as the matching descriptor map.
    b_t:
        Optional branch truthiness counts for logical expressions, keyed like
        ``b``. ``None`` when truthiness is not tracked.
    input_source_map:
        Opaque source map carried through untouched.

    Notes
    -----
    Dict insertion order is significant: merging walks both records in order and
    assigns fresh indices in the order keys were first seen.
    """

    path: str
    all: bool = False
    statement_map: StatementMap = field(default_factory=dict)
    fn_map: FunctionMap = field(default_factory=dict)
    branch_map: BranchMap = field(default_factory=dict)
    s: LineHitMap = field(default_factory=dict)
    f: LineHitMap = field(default_factory=dict)
    b: BranchHitMap = field(default_factory=dict)
    b_t: BranchHitMap | None = None
    input_source_map: Any = None

    @classmethod
    def empty(cls, path: str, *, report_logic: bool = False) -> FileCoverage:
        """Return a record with no descriptors, tracking truthiness when *report_logic*."""
        return cls(path=path, b_t={} if report_logic else None)

    def copy(self) -> FileCoverage:
        return copy.deepcopy(self)

    # ------------------------------------------------------------------ #
    # Integrity                                                          #
    # ------------------------------------------------------------------ #
    def validate(self) -> None:
        """Raise :class:`CoverageIntegrityError` unless every hit has a descriptor."""
        pairs: list[tuple[str, Mapping[int, object], Mapping[int, object]]] = [
            ("statement", self.s, self.statement_map),
            ("function", self.f, self.fn_map),
            ("branch", self.b, self.branch_map),
        ]
        if self.b_t is not None:
            pairs.append(("branch truthiness", self.b_t, self.branch_map))
        for kind, hits, descriptors in pairs:
            missing = [idx for idx in hits if idx not in descriptors]
            if missing:
                msg = f"{self.path}: {kind} hit map references indices {missing} missing from the descriptor map"
                raise CoverageIntegrityError(msg)

    # ------------------------------------------------------------------ #
    # Derived views                                                      #
    # ------------------------------------------------------------------ #
    def get_line_coverage(self) -> dict[int, int]:
        """Return hits per source line.

        A line takes the largest count among the statements starting on it, so
        ``a; b`` on one line counts as covered when either statement ran.
        """
        line_map: dict[int, int] = {}
        for index, count in self.s.items():
            line = descriptor_for(self.statement_map, index, kind="statement").start.line
            previous = line_map.get(line)
            if previous is None or previous < count:
                line_map[line] = count
        return line_map

    def get_uncovered_lines(self) -> list[int]:
        return [line for line, hits in self.get_line_coverage().items() if hits == 0]

    def get_branch_coverage_by_line(self) -> dict[int, LineBranchCoverage]:
        """Return path coverage per line, pooling every branch on the same line."""
        buckets: dict[int, list[int]] = {}
        for index, branch in self.branch_map.items():
            line = branch.resolve_line()
            try:
                counts = self.b[index]
            except KeyError as exc:
                msg = f"{self.path}: branch {index} has no hit counts"
                raise CoverageIntegrityError(msg) from exc
            buckets.setdefault(line, []).extend(counts)

        return {line: LineBranchCoverage.from_counts(counts) for line, counts in buckets.items()}

    def to_summary(self) -> CoverageSummary:
        return CoverageSummary(
            lines=compute_simple_totals(self.get_line_coverage()),
            statements=compute_simple_totals(self.s),
            functions=compute_simple_totals(self.f),
            branches=compute_branch_totals(self.b),
            branches_true=compute_branch_totals(self.b_t) if self.b_t is not None else None,
        )

    # ------------------------------------------------------------------ #
    # Mutation                                                           #
    # ------------------------------------------------------------------ #
    def merge(self, other: FileCoverage) -> None:
        """Merge *other* into this record in place.

        An incoming placeholder (``all``) is discarded. A placeholder receiver
        is replaced wholesale by a copy of *other*. Otherwise statements,
        functions and branches are joined on source location and re-indexed.
        Truthiness counts merge only when both records carry them.
        """
        if other.all:
            logger.debug("%s: ignoring placeholder coverage in merge", self.path)
            return

        if self.all:
            logger.debug("%s: replacing placeholder coverage", self.path)
            for fld in fields(self):
                setattr(self, fld.name, copy.deepcopy(getattr(other, fld.name)))
            return

        statements, statement_map = merge_properties(
            self.s,
            self.statement_map,
            other.s,
            other.statement_map,
            statement_key,
            kind="statement",
        )
        functions, fn_map = merge_properties(
            self.f,
            self.fn_map,
            other.f,
            other.fn_map,
            function_key,
            kind="function",
        )

        branches, branch_map = merge_branch_properties(
            self.b,
            self.branch_map,
            other.b,
            other.branch_map,
            branch_key,
        )

        b_t = self.b_t
        if self.b_t is not None and other.b_t is not None:
            # Own truthiness indices are resolved against the merged branch map.
            b_t, _ = merge_branch_properties(
                self.b_t,
                branch_map,
                other.b_t,
                other.branch_map,
                branch_key,
                kind="branch truthiness",
            )

        # Nothing is assigned until every map merged cleanly.
        self.s, self.statement_map = statements, statement_map
        self.f, self.fn_map = functions, fn_map
        self.b, self.branch_map = branches, branch_map
        self.b_t = b_t

        logger.debug(
            "%s: merged to %d statements, %d functions, %d branches",
            self.path,
            len(self.s),
            len(self.f),
            len(self.b),
        )

    def reset_hits(self) -> None:
        """Zero every count in place; descriptors are untouched."""
        for index in self.s:
            self.s[index] = 0
        for index in self.f:
            self.f[index] = 0
        for counts in self.b.values():
            counts[:] = [0] * len(counts)
        if self.b_t is not None:
            for counts in self.b_t.values():
                counts[:] = [0] * len(counts)

    # ------------------------------------------------------------------ #
    # Wire format                                                        #
    # ------------------------------------------------------------------ #
    def to_dict(self) -> dict[str, Any]:
        """Convert the record into its JSON-serialisable wire shape."""
        out: dict[str, Any] = {
            "all": self.all,
            "path": self.path,
            "statementMap": {str(k): v.to_dict() for k, v in self.statement_map.items()},
            "fnMap": {str(k): v.to_dict() for k, v in self.fn_map.items()},
            "branchMap": {str(k): v.to_dict() for k, v in self.branch_map.items()},
            "s": {str(k): v for k, v in self.s.items()},
            "f": {str(k): v for k, v in self.f.items()},
            "b": {str(k): list(v) for k, v in self.b.items()},
        }
        if self.b_t is not None:
            out["bT"] = {str(k): list(v) for k, v in self.b_t.items()}
        if self.input_source_map is not None:
            out["inputSourceMap"] = self.input_source_map
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, validate_input: bool = True) -> FileCoverage:
        """Create a :class:`FileCoverage` from its wire shape.

        With *validate_input* the data is checked against the bundled JSON
        schema first; any mismatch raises :class:`InvalidCoverageDataError`.
        """
        if validate_input:
            try:
                validate_schema(dict(data), get_schema("v1"))
            except ValidationError as exc:
                path = data.get("path", "<unknown>")
                msg = f"{path}: invalid file coverage data: {exc.message}"
                raise InvalidCoverageDataError(msg) from exc

        b_t = data.get("bT")
        try:
            return cls(
                path=str(data["path"]),
                all=bool(data.get("all", False)),
                statement_map={int(k): Range.from_dict(v) for k, v in data["statementMap"].items()},
                fn_map={int(k): Function.from_dict(v) for k, v in data["fnMap"].items()},
                branch_map={int(k): Branch.from_dict(v) for k, v in data["branchMap"].items()},
                s={int(k): int(v) for k, v in data["s"].items()},
                f={int(k): int(v) for k, v in data["f"].items()},
                b={int(k): [int(c) for c in v] for k, v in data["b"].items()},
                b_t={int(k): [int(c) for c in v] for k, v in b_t.items()} if b_t is not None else None,
                input_source_map=data.get("inputSourceMap"),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            msg = f"invalid file coverage data: {exc}"
            raise InvalidCoverageDataError(msg) from exc

    def to_json(self, *, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str, *, validate_input: bool = True) -> FileCoverage:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"failed to decode file coverage JSON: {exc}"
            raise InvalidCoverageDataError(msg) from exc
        if not isinstance(data, dict):
            msg = f"expected a JSON object, got {type(data).__name__}"
            raise InvalidCoverageDataError(msg)
        return cls.from_dict(data, validate_input=validate_input)


__all__ = ["FileCoverage"]
