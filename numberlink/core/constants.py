"""Shared constants and enumerations for the puzzle core."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CellKind(str, Enum):
    """All supported cell kinds in the grid."""

    EMPTY = "EMPTY"
    FIXED_ANCHOR = "FIXED_ANCHOR"


class DrawState(str, Enum):
    """Line engine gesture states."""

    IDLE = "IDLE"
    DRAWING = "DRAWING"


class ExtendOutcome(str, Enum):
    """What happened to the draft after an extend request."""

    GREW = "GREW"
    RETRACTED = "RETRACTED"
    COMMITTED = "COMMITTED"
    REJECTED = "REJECTED"


ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))

MAX_PATH_ATTEMPTS = 100
MAX_EXPANSIONS_PER_CELL = 20
MIN_ANCHOR_GAP = 2
MAX_ANCHOR_GAP = 4

# Level progression: 5x5 for the first five levels, one size up every five
# levels after that, capped at 8x8.
BASE_GRID_SIZE = 5
MAX_GRID_SIZE = 8
LEVELS_PER_SIZE = 5


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    @property
    def area(self) -> int:
        return self.rows * self.cols
