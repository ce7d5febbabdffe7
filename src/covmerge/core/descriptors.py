"""Static descriptors for functions and branches.

Statement descriptors are plain :class:`~covmerge.core.range.Range` objects and
need no wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from covmerge.core.exceptions import BranchLineError, CoverageIntegrityError
from covmerge.core.range import Range
from covmerge.core.types import BranchType


@dataclass(frozen=True, slots=True)
class Function:
    """A function declaration.

    ``name`` is informational only; two functions are the same construct when
    their ``loc`` ranges are equal.
    """

    name: str
    line: int
    loc: Range
    decl: Range | None = None

    @property
    def key(self) -> str:
        return self.loc.key

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "decl": (self.decl or self.loc).to_dict(),
            "loc": self.loc.to_dict(),
            "line": self.line,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Function:
        loc = Range.from_dict(data["loc"])
        decl = Range.from_dict(data["decl"]) if data.get("decl") else None
        return cls(name=str(data["name"]), line=int(data["line"]), loc=loc, decl=decl)


@dataclass(frozen=True, slots=True)
class Branch:
    """A branching construct with one location per path.

    The line of a branch is ``line`` when set, otherwise the start line of
    ``loc``. Identity is the location of the first path.
    """

    type: BranchType
    locations: tuple[Range, ...] = field(default_factory=tuple)
    line: int | None = None
    loc: Range | None = None

    @classmethod
    def from_line(cls, branch_type: BranchType | str, line: int, locations: list[Range]) -> Branch:
        return cls(type=BranchType(branch_type), locations=tuple(locations), line=line)

    @classmethod
    def from_loc(cls, branch_type: BranchType | str, loc: Range, locations: list[Range]) -> Branch:
        return cls(type=BranchType(branch_type), locations=tuple(locations), loc=loc)

    @property
    def key(self) -> str:
        if not self.locations:
            msg = f"{self.type} branch has no path locations to derive an identity from"
            raise CoverageIntegrityError(msg)
        return self.locations[0].key

    def resolve_line(self) -> int:
        """Return the source line this branch is reported on."""
        if self.line is not None:
            return self.line
        if self.loc is not None:
            return self.loc.start.line
        msg = f"{self.type} branch has neither a line nor a location"
        raise BranchLineError(msg)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "type": str(self.type),
            "locations": [loc.to_dict() for loc in self.locations],
        }
        if self.line is not None:
            out["line"] = self.line
        if self.loc is not None:
            out["loc"] = self.loc.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Branch:
        line = data.get("line")
        loc = data.get("loc")
        return cls(
            type=BranchType(data["type"]),
            locations=tuple(Range.from_dict(item) for item in data.get("locations", [])),
            line=int(line) if line is not None else None,
            loc=Range.from_dict(loc) if loc else None,
        )


__all__ = ["Branch", "Function"]
