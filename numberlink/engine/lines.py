"""Line drawing state machine: drafts, commits, undo and the win check.

One gesture moves the engine ``IDLE -> DRAWING -> IDLE``. While drawing, the
draft grows one orthogonal step at a time and never enters a cell that is
already claimed by an anchor, a completed line, or an earlier point of the
draft itself. Stepping back onto the previous draft point retracts the draft
instead. Reaching the next anchor commits the draft; releasing anywhere else
discards it.

Rejected requests never raise and never change state: they are the normal
result of pointer jitter and fast input, and the caller only needs to know
whether to repaint.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set

from ..core.constants import DrawState
from ..core.models import (GREW, REJECTED, RETRACTED, Coordinate, ExtendResult, Line,
                           committed)
from ..utils.logger import get_logger
from .grid import PuzzleGrid


LOGGER = get_logger(__name__)


class LineEngine:
    """Owns the completed lines and the single in-progress draft for one grid."""

    def __init__(self, grid: PuzzleGrid) -> None:
        self.grid = grid
        # Insertion order is commit order; undo pops from the end.
        self._lines: Dict[int, Line] = {}
        self._draft: Optional[Line] = None

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> DrawState:
        return DrawState.DRAWING if self._draft is not None else DrawState.IDLE

    @property
    def is_drawing(self) -> bool:
        return self._draft is not None

    @property
    def lines(self) -> List[Line]:
        return [_copy_line(line) for line in self._lines.values()]

    @property
    def draft(self) -> List[Coordinate]:
        return list(self._draft.points) if self._draft is not None else []

    @property
    def draft_anchor(self) -> Optional[int]:
        return self._draft.start_anchor if self._draft is not None else None

    def line_for(self, anchor: int) -> Optional[Line]:
        line = self._lines.get(anchor)
        return _copy_line(line) if line is not None else None

    # ------------------------------------------------------------------
    # Gesture operations
    # ------------------------------------------------------------------
    def begin(self, coord: Coordinate) -> bool:
        anchor = self.grid.anchor_at(coord)
        if anchor is None:
            LOGGER.debug("Begin rejected at %s: not an anchor", coord.as_tuple())
            return False
        if self._draft is not None:
            LOGGER.debug("Discarding open draft from anchor %d", self._draft.start_anchor)
        if self._lines.pop(anchor, None) is not None:
            LOGGER.debug("Evicted completed line from anchor %d", anchor)
        self._draft = Line(start_anchor=anchor, points=[coord])
        return True

    def extend(self, coord: Coordinate) -> ExtendResult:
        draft = self._draft
        if draft is None:
            return REJECTED
        if not self.grid.contains(coord):
            return REJECTED
        head = draft.head
        if coord == head or not coord.is_adjacent(head):
            return REJECTED

        if len(draft.points) > 1 and coord == draft.points[-2]:
            draft.points.pop()
            return RETRACTED

        anchor = self.grid.anchor_at(coord)
        if anchor is not None:
            if anchor != draft.target_anchor:
                LOGGER.debug(
                    "Move into anchor %d rejected while drawing from %d", anchor, draft.start_anchor
                )
                return REJECTED
            draft.points.append(coord)
            return self._commit(draft)

        if self.is_occupied(coord):
            return REJECTED

        draft.points.append(coord)
        return GREW

    def end(self) -> None:
        if self._draft is not None:
            LOGGER.debug(
                "Discarding draft from anchor %d (%d points)",
                self._draft.start_anchor, len(self._draft),
            )
        self._draft = None

    def undo(self) -> bool:
        if self._draft is not None or not self._lines:
            return False
        anchor = next(reversed(self._lines))
        del self._lines[anchor]
        LOGGER.debug("Undid line from anchor %d", anchor)
        return True

    def reset(self) -> None:
        self._lines.clear()
        self._draft = None

    # ------------------------------------------------------------------
    # Occupancy and completion
    # ------------------------------------------------------------------
    def is_occupied(self, coord: Coordinate) -> bool:
        if self.grid.anchor_at(coord) is not None:
            return True
        for line in self._lines.values():
            if coord in line.points:
                return True
        if self._draft is not None and coord in self._draft.points[:-1]:
            return True
        return False

    def covered_cells(self) -> Set[Coordinate]:
        covered = set(self.grid.anchor_cells())
        for line in self._lines.values():
            covered.update(line.points)
        return covered

    def is_solved(self) -> bool:
        return len(self.covered_cells()) == self.grid.bounds.area

    def _commit(self, draft: Line) -> ExtendResult:
        self._lines.pop(draft.start_anchor, None)
        self._lines[draft.start_anchor] = draft
        self._draft = None
        solved = self.is_solved()
        LOGGER.debug(
            "Committed line %d -> %d (%d points), solved=%s",
            draft.start_anchor, draft.target_anchor, len(draft), solved,
        )
        return committed(draft.start_anchor, solved)


def _copy_line(line: Line) -> Line:
    return Line(start_anchor=line.start_anchor, points=list(line.points))
