"""Deterministic rule validation for generated puzzles and drawn boards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from ..core.constants import MAX_ANCHOR_GAP
from ..core.exceptions import GenerationIncomplete, InvalidLineError, ValidationError
from ..core.models import Coordinate, Line
from ..utils.logger import get_logger
from .grid import PuzzleGrid


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class PuzzleValidator:
    """Runs deterministic validation over a solution path, its anchors and drawn lines."""

    def __init__(self, max_gap: int = MAX_ANCHOR_GAP) -> None:
        self.max_gap = max_gap

    def validate(self, grid: PuzzleGrid, path: Sequence[Coordinate]) -> ValidationResult:
        try:
            self.validate_path(path, grid.size)
            self.validate_anchors(grid, path)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        except GenerationIncomplete as exc:
            LOGGER.warning("Validation incomplete: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    # ------------------------------------------------------------------
    # Solution path
    # ------------------------------------------------------------------
    def validate_path(self, path: Sequence[Coordinate], size: int) -> None:
        seen = set()
        for index, coord in enumerate(path):
            if not (0 <= coord.row < size and 0 <= coord.col < size):
                raise ValidationError(f"Path cell {coord.as_tuple()} outside {size}x{size} grid")
            if coord in seen:
                raise ValidationError(f"Path revisits {coord.as_tuple()} at step {index}")
            if index and not coord.is_adjacent(path[index - 1]):
                raise ValidationError(
                    f"Path jumps from {path[index - 1].as_tuple()} to {coord.as_tuple()}"
                )
            seen.add(coord)
        if len(path) != size * size:
            raise GenerationIncomplete(
                f"Path covers {len(path)}/{size * size} cells"
            )

    # ------------------------------------------------------------------
    # Anchors
    # ------------------------------------------------------------------
    def validate_anchors(self, grid: PuzzleGrid, path: Sequence[Coordinate]) -> None:
        if not path:
            if grid.anchor_count:
                raise ValidationError("Anchors placed without a solution path")
            return
        anchors = grid.anchors()
        values = [anchor.value for anchor in anchors]
        if values != list(range(1, len(values) + 1)):
            raise ValidationError(f"Anchor values are not 1..{len(values)}: {values}")

        index_of = {coord: index for index, coord in enumerate(path)}
        positions: List[int] = []
        for anchor in anchors:
            if anchor.coord not in index_of:
                raise ValidationError(f"Anchor {anchor.value} at {anchor.coord.as_tuple()} is off the path")
            positions.append(index_of[anchor.coord])

        if positions[0] != 0:
            raise ValidationError("First path cell does not hold anchor 1")
        if positions[-1] != len(path) - 1:
            raise ValidationError("Last path cell does not hold the final anchor")
        for value, (before, after) in enumerate(zip(positions, positions[1:]), start=1):
            gap = after - before
            if gap < 1:
                raise ValidationError(f"Anchor {value + 1} precedes anchor {value} on the path")
            if gap > self.max_gap:
                raise ValidationError(
                    f"Gap of {gap} between anchors {value} and {value + 1} exceeds {self.max_gap}"
                )

    # ------------------------------------------------------------------
    # Drawn lines
    # ------------------------------------------------------------------
    def check_connections(self, grid: PuzzleGrid, lines: Iterable[Line]) -> None:
        """Require a valid completed line for every consecutive anchor pair."""
        by_anchor = {}
        claimed = set(grid.anchor_cells())
        for line in lines:
            self._check_line(grid, line)
            for coord in line.points[1:-1]:
                if coord in claimed:
                    raise InvalidLineError(
                        f"Line {line.start_anchor} overlaps a claimed cell at {coord.as_tuple()}"
                    )
                claimed.add(coord)
            by_anchor[line.start_anchor] = line
        for value in range(1, grid.anchor_count):
            if value not in by_anchor:
                raise InvalidLineError(f"Anchors {value} and {value + 1} are not connected")

    @staticmethod
    def _check_line(grid: PuzzleGrid, line: Line) -> None:
        points = line.points
        if len(points) < 2:
            raise InvalidLineError(f"Line {line.start_anchor} has fewer than two points")
        if grid.anchor_at(points[0]) != line.start_anchor:
            raise InvalidLineError(f"Line {line.start_anchor} does not start on its anchor")
        if grid.anchor_at(points[-1]) != line.target_anchor:
            raise InvalidLineError(f"Line {line.start_anchor} does not end on anchor {line.target_anchor}")
        if len(set(points)) != len(points):
            raise InvalidLineError(f"Line {line.start_anchor} crosses itself")
        for before, after in zip(points, points[1:]):
            if not before.is_adjacent(after):
                raise InvalidLineError(
                    f"Line {line.start_anchor} jumps from {before.as_tuple()} to {after.as_tuple()}"
                )
        for coord in points[1:-1]:
            if grid.anchor_at(coord) is not None:
                raise InvalidLineError(
                    f"Line {line.start_anchor} passes through anchor {grid.anchor_at(coord)}"
                )
