"""Puzzle session: the surface the UI, input and persistence layers call into.

A session owns exactly one puzzle at a time (grid, solution path) together
with the line engine drawing on it. Generating a new puzzle replaces all of
it and abandons any open draft. Every call is safe before the first puzzle
exists; it simply reports that nothing happened.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from ..core.exceptions import InvalidLineError
from ..core.models import REJECTED, Cell, Coordinate, ExtendResult, Line, SolutionPath
from ..utils.logger import get_logger
from .generator import GeneratorConfig, Puzzle, PuzzleGenerator
from .lines import LineEngine
from .validator import PuzzleValidator


LOGGER = get_logger(__name__)


class PuzzleSession:
    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        generator: Optional[PuzzleGenerator] = None,
    ) -> None:
        self.generator = generator or PuzzleGenerator(config)
        self.validator = PuzzleValidator(max_gap=self.generator.config.max_gap)
        self.puzzle: Optional[Puzzle] = None
        self.engine: Optional[LineEngine] = None

    def new_puzzle(self, size: int) -> Puzzle:
        return self.load_puzzle(self.generator.generate(size))

    def load_puzzle(self, puzzle: Puzzle) -> Puzzle:
        """Adopt an already generated (or stored) puzzle."""
        self.puzzle = puzzle
        self.engine = LineEngine(puzzle.grid)
        return puzzle

    def cell_at(self, row: int, col: int) -> Cell:
        """Return a copy of the cell; edits never reach the board."""
        if self.puzzle is None:
            raise LookupError("No puzzle loaded")
        coord = Coordinate(row, col)
        if not self.puzzle.grid.contains(coord):
            size = self.puzzle.size
            raise LookupError(f"Cell {coord.as_tuple()} is outside the {size}x{size} grid")
        return replace(self.puzzle.grid.cell_at(coord))

    @property
    def lines(self) -> List[Line]:
        if self.engine is None:
            return []
        return self.engine.lines

    def begin_line(self, row: int, col: int) -> bool:
        if self.engine is None:
            return False
        return self.engine.begin(Coordinate(row, col))

    def extend_line(self, row: int, col: int) -> ExtendResult:
        if self.engine is None:
            return REJECTED
        result = self.engine.extend(Coordinate(row, col))
        if result.solved and self.puzzle is not None:
            self._confirm_connections(self.puzzle, self.engine)
        return result

    def end_line(self) -> None:
        if self.engine is not None:
            self.engine.end()

    def undo(self) -> bool:
        if self.engine is None:
            return False
        return self.engine.undo()

    def reset_draws(self) -> None:
        if self.engine is not None:
            self.engine.reset()

    def is_solved(self) -> bool:
        if self.engine is None:
            return False
        return self.engine.is_solved()

    def hint_path(self) -> SolutionPath:
        if self.puzzle is None:
            return ()
        return self.puzzle.solution_path

    def _confirm_connections(self, puzzle: Puzzle, engine: LineEngine) -> None:
        # Coverage alone decides the win; a gap here means the drawing rules leaked.
        try:
            self.validator.check_connections(puzzle.grid, engine.lines)
        except InvalidLineError as exc:
            LOGGER.error("Board covered without connecting every anchor pair: %s", exc)
            return
        LOGGER.info("Puzzle solved with %d lines", len(engine.lines))
