"""Split a solution path into numbered anchor segments."""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from ..core.constants import MAX_ANCHOR_GAP, MIN_ANCHOR_GAP
from ..core.models import Anchor, Coordinate
from ..utils.logger import get_logger
from .grid import PuzzleGrid


LOGGER = get_logger(__name__)


class AnchorSegmenter:
    """Places anchors 1..K along a path with gaps drawn from ``[min_gap, max_gap]``."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        min_gap: int = MIN_ANCHOR_GAP,
        max_gap: int = MAX_ANCHOR_GAP,
    ) -> None:
        if min_gap < 1 or max_gap < min_gap:
            raise ValueError(f"Invalid anchor gap range [{min_gap}, {max_gap}]")
        self.rng = rng or random.Random()
        self.min_gap = min_gap
        self.max_gap = max_gap

    def segment(self, path: Sequence[Coordinate], grid: PuzzleGrid) -> List[Anchor]:
        anchors: List[Anchor] = []
        if not path:
            LOGGER.warning("Empty path; no anchors placed")
            return anchors

        final_index = len(path) - 1
        index = 0
        value = 1
        while True:
            anchors.append(self._place(grid, path[index], value))
            if index >= final_index:
                break
            gap = self.rng.randint(self.min_gap, self.max_gap)
            # Clamping lands the last step exactly on the path end.
            index += min(gap, final_index - index)
            value += 1

        LOGGER.debug("Placed %d anchors along a %d-cell path", len(anchors), len(path))
        return anchors

    @staticmethod
    def _place(grid: PuzzleGrid, coord: Coordinate, value: int) -> Anchor:
        grid.place_anchor(coord, value)
        return Anchor(coord=coord, value=value)
