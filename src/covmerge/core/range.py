"""Source locations used as the identity basis for coverage descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Position:
    """A 1-indexed line and 0-indexed column."""

    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate that the coordinates are sane."""
        if self.line < 0 or self.column < 0:
            msg = "Position.line/column must be >= 0"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "column": self.column}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Position:
        return cls(line=int(data["line"]), column=int(data["column"]))


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open source span between two positions."""

    start: Position
    end: Position

    @classmethod
    def new(cls, start_line: int, start_column: int, end_line: int, end_column: int) -> Range:
        return cls(Position(start_line, start_column), Position(end_line, end_column))

    @property
    def key(self) -> str:
        """Identity key used to match the same construct across records."""
        return f"{self.start.line}|{self.start.column}|{self.end.line}|{self.end.column}"

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Range:
        return cls(Position.from_dict(data["start"]), Position.from_dict(data["end"]))


__all__ = ["Position", "Range"]
