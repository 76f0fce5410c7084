"""Data models supporting the puzzle core."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .constants import CellKind, ExtendOutcome, ORTHOGONAL_STEPS


@dataclass(frozen=True, order=True)
class Coordinate:
    """A 0-indexed (row, col) grid position."""

    row: int
    col: int

    def neighbors(self) -> Iterator["Coordinate"]:
        for dr, dc in ORTHOGONAL_STEPS:
            yield Coordinate(self.row + dr, self.col + dc)

    def is_adjacent(self, other: "Coordinate") -> bool:
        return abs(self.row - other.row) + abs(self.col - other.col) == 1

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)


SolutionPath = Tuple[Coordinate, ...]


@dataclass
class Cell:
    """Represents a grid cell; ``anchor_value`` is set iff the cell is an anchor."""

    kind: CellKind = CellKind.EMPTY
    anchor_value: Optional[int] = None

    def is_anchor(self) -> bool:
        return self.kind == CellKind.FIXED_ANCHOR


@dataclass(frozen=True)
class Anchor:
    """A numbered cell placed by the segmenter."""

    coord: Coordinate
    value: int


@dataclass
class Line:
    """A player-drawn line leaving ``start_anchor`` towards ``start_anchor + 1``."""

    start_anchor: int
    points: List[Coordinate] = field(default_factory=list)

    @property
    def target_anchor(self) -> int:
        return self.start_anchor + 1

    @property
    def head(self) -> Coordinate:
        return self.points[-1]

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class ExtendResult:
    """Outcome of a single extend request, inspected by the renderer."""

    outcome: ExtendOutcome
    anchor: Optional[int] = None
    solved: bool = False

    @property
    def changed(self) -> bool:
        return self.outcome != ExtendOutcome.REJECTED


REJECTED = ExtendResult(ExtendOutcome.REJECTED)
GREW = ExtendResult(ExtendOutcome.GREW)
RETRACTED = ExtendResult(ExtendOutcome.RETRACTED)


def committed(anchor: int, solved: bool) -> ExtendResult:
    return ExtendResult(ExtendOutcome.COMMITTED, anchor=anchor, solved=solved)
