"""Grid representation and anchor accessors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from ..core.constants import Bounds, CellKind
from ..core.models import Anchor, Cell, Coordinate
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class GridConfig:
    """Configuration values driving the grid layout."""

    size: int

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"Grid size must be at least 1, got {self.size}")

    def bounds(self) -> Bounds:
        return Bounds(rows=self.size, cols=self.size)


class PuzzleGrid:
    """Fixed N x N cell table holding the numbered anchors."""

    def __init__(self, config: GridConfig) -> None:
        self.config = config
        self.bounds = config.bounds()
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(self.bounds.cols)] for _ in range(self.bounds.rows)
        ]
        self._anchor_positions: Dict[int, Coordinate] = {}

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def anchor_count(self) -> int:
        return len(self._anchor_positions)

    def contains(self, coord: Coordinate) -> bool:
        return self.bounds.contains(coord.row, coord.col)

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def cell_at(self, coord: Coordinate) -> Cell:
        return self.cells[coord.row][coord.col]

    def coordinates(self) -> Iterator[Coordinate]:
        for r in range(self.bounds.rows):
            for c in range(self.bounds.cols):
                yield Coordinate(r, c)

    # ------------------------------------------------------------------
    # Anchors
    # ------------------------------------------------------------------
    def place_anchor(self, coord: Coordinate, value: int) -> None:
        if not self.contains(coord):
            raise ValueError(f"Anchor outside bounds: {coord}")
        if value < 1:
            raise ValueError(f"Anchor values start at 1, got {value}")
        if value in self._anchor_positions:
            raise ValueError(f"Anchor {value} already placed at {self._anchor_positions[value]}")
        cell = self.cell_at(coord)
        if cell.is_anchor():
            raise ValueError(f"Cell {coord} already holds anchor {cell.anchor_value}")
        cell.kind = CellKind.FIXED_ANCHOR
        cell.anchor_value = value
        self._anchor_positions[value] = coord

    def anchor_at(self, coord: Coordinate) -> Optional[int]:
        if not self.contains(coord):
            return None
        return self.cell_at(coord).anchor_value

    def anchor_position(self, value: int) -> Optional[Coordinate]:
        return self._anchor_positions.get(value)

    def anchors(self) -> List[Anchor]:
        return [
            Anchor(coord=self._anchor_positions[value], value=value)
            for value in sorted(self._anchor_positions)
        ]

    def anchor_cells(self) -> List[Coordinate]:
        return list(self._anchor_positions.values())

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "cells": [
                [
                    {"kind": cell.kind.value, "anchor": cell.anchor_value}
                    for cell in row
                ]
                for row in self.cells
            ],
        }

    @classmethod
    def from_jsonable(cls, data: Dict[str, Any]) -> "PuzzleGrid":
        grid = cls(GridConfig(size=int(data["size"])))
        for r, row in enumerate(data["cells"]):
            for c, entry in enumerate(row):
                if CellKind(entry["kind"]) == CellKind.FIXED_ANCHOR:
                    grid.place_anchor(Coordinate(r, c), int(entry["anchor"]))
        LOGGER.debug("Restored %dx%d grid with %d anchors", grid.size, grid.size, grid.anchor_count)
        return grid
