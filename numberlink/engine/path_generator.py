"""Randomized backtracking search for Hamiltonian paths on a square grid.

Each attempt is a depth-first search from a random start cell. Candidate
neighbours are shuffled every time a cell is entered, so repeated runs give
different path topologies. The search keeps its own stack of candidate lists
instead of recursing, which keeps the depth at N² frames regardless of the
interpreter recursion limit.

Attempts are bounded twice: a fixed number of restarts and an expansion
budget per attempt. When nothing covers the grid the longest partial path is
returned; callers decide whether to regenerate.
"""

from __future__ import annotations

import random
from collections import deque
from typing import List, Optional, Set

from ..core.constants import MAX_EXPANSIONS_PER_CELL, MAX_PATH_ATTEMPTS, Bounds
from ..core.models import Coordinate, SolutionPath
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class HamiltonianPathGenerator:
    """Produces a path visiting every grid cell exactly once."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_attempts: int = MAX_PATH_ATTEMPTS,
        max_expansions_per_cell: int = MAX_EXPANSIONS_PER_CELL,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be positive")
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts
        self.max_expansions_per_cell = max_expansions_per_cell
        self.last_attempts = 0

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, size: int) -> SolutionPath:
        if size < 1:
            raise ValueError(f"Grid size must be at least 1, got {size}")
        bounds = Bounds(rows=size, cols=size)
        starts = self._start_cells(bounds)
        best: List[Coordinate] = []
        for attempt in range(1, self.max_attempts + 1):
            self.last_attempts = attempt
            start = self.rng.choice(starts)
            path = self._search(bounds, start)
            if len(path) == bounds.area:
                LOGGER.info(
                    "Hamiltonian path on %dx%d found in %d attempt(s)", size, size, attempt
                )
                return tuple(path)
            LOGGER.debug(
                "Attempt %d/%d from %s stalled at %d/%d cells",
                attempt, self.max_attempts, start.as_tuple(), len(path), bounds.area,
            )
            if len(path) > len(best):
                best = path
        LOGGER.warning(
            "No full path on %dx%d after %d attempts; returning best partial path (%d/%d cells)",
            size, size, self.max_attempts, len(best), bounds.area,
        )
        return tuple(best)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def _search(self, bounds: Bounds, start: Coordinate) -> List[Coordinate]:
        """Run one bounded backtracking attempt, returning the longest path reached."""
        budget = self.max_expansions_per_cell * bounds.area
        expansions = 0
        path: List[Coordinate] = [start]
        visited: Set[Coordinate] = {start}
        frames: List[List[Coordinate]] = [self._shuffled_steps(start)]
        best: List[Coordinate] = list(path)

        while frames:
            if len(path) == bounds.area:
                return path
            if expansions >= budget:
                LOGGER.debug("Expansion budget of %d exhausted", budget)
                break
            candidates = frames[-1]
            moved = False
            while candidates:
                nxt = candidates.pop()
                if not bounds.contains(nxt.row, nxt.col) or nxt in visited:
                    continue
                expansions += 1
                path.append(nxt)
                visited.add(nxt)
                if self._is_viable(bounds, path, visited):
                    frames.append(self._shuffled_steps(nxt))
                    moved = True
                    break
                visited.discard(nxt)
                path.pop()
            if moved:
                if len(path) > len(best):
                    best = list(path)
                continue
            frames.pop()
            visited.discard(path.pop())
        return best

    def _shuffled_steps(self, cell: Coordinate) -> List[Coordinate]:
        steps = list(cell.neighbors())
        self.rng.shuffle(steps)
        return steps

    @staticmethod
    def _is_viable(bounds: Bounds, path: List[Coordinate], visited: Set[Coordinate]) -> bool:
        """Reject a head position that can no longer reach a full cover.

        The unvisited cells must form one region touching the head, balance
        the checkerboard colours, and hold at most one forced dead end (the
        eventual path end).
        """
        remaining = bounds.area - len(path)
        if remaining == 0:
            return True
        head = path[-1]
        entries = [
            n for n in head.neighbors()
            if bounds.contains(n.row, n.col) and n not in visited
        ]
        if not entries:
            return False

        seen = {entries[0]}
        queue = deque([entries[0]])
        while queue:
            current = queue.popleft()
            for n in current.neighbors():
                if n in seen or n in visited or not bounds.contains(n.row, n.col):
                    continue
                seen.add(n)
                queue.append(n)
        if len(seen) != remaining:
            return False

        # The rest of the path alternates colours starting opposite the head.
        head_colour = (head.row + head.col) % 2
        opposite = sum(1 for cell in seen if (cell.row + cell.col) % 2 != head_colour)
        if opposite - (remaining - opposite) not in (0, 1):
            return False

        dead_ends = 0
        for cell in seen:
            degree = sum(
                1 for n in cell.neighbors()
                if bounds.contains(n.row, n.col) and (n not in visited or n == head)
            )
            if degree <= 1:
                dead_ends += 1
                if dead_ends > 1:
                    return False
        return True

    @staticmethod
    def _start_cells(bounds: Bounds) -> List[Coordinate]:
        """Cells a Hamiltonian path can start from.

        On an odd-area grid the checkerboard colour of the corners has one
        more cell than the other, so every path starts and ends on it.
        """
        cells = [Coordinate(r, c) for r in range(bounds.rows) for c in range(bounds.cols)]
        if bounds.area % 2 == 1:
            cells = [cell for cell in cells if (cell.row + cell.col) % 2 == 0]
        return cells


def snake_path(size: int) -> SolutionPath:
    """Boustrophedon path: left to right on even rows, right to left on odd rows."""
    path: List[Coordinate] = []
    for r in range(size):
        cols = range(size) if r % 2 == 0 else range(size - 1, -1, -1)
        path.extend(Coordinate(r, c) for c in cols)
    return tuple(path)
