"""Main puzzle generator orchestration.

Three steps:
  1. Path: randomized backtracking search for a Hamiltonian path.
  2. Anchors: segment the path into numbered anchors on a fresh grid.
  3. Validate: deterministic checks, recorded on the result but never raised.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.constants import (BASE_GRID_SIZE, LEVELS_PER_SIZE, MAX_ANCHOR_GAP,
                              MAX_EXPANSIONS_PER_CELL, MAX_GRID_SIZE, MAX_PATH_ATTEMPTS,
                              MIN_ANCHOR_GAP)
from ..core.models import Anchor, SolutionPath
from ..utils.logger import get_logger
from .grid import GridConfig, PuzzleGrid
from .path_generator import HamiltonianPathGenerator
from .segmenter import AnchorSegmenter
from .validator import PuzzleValidator


LOGGER = get_logger(__name__)


def size_for_level(level: int) -> int:
    """Grid size for a 1-based level: 5x5 at first, growing every five levels up to 8x8."""
    level = max(1, level)
    return min(MAX_GRID_SIZE, BASE_GRID_SIZE + (level - 1) // LEVELS_PER_SIZE)


@dataclass
class GeneratorConfig:
    size: int = BASE_GRID_SIZE
    seed: Optional[int] = None
    max_attempts: int = MAX_PATH_ATTEMPTS
    max_expansions_per_cell: int = MAX_EXPANSIONS_PER_CELL
    min_gap: int = MIN_ANCHOR_GAP
    max_gap: int = MAX_ANCHOR_GAP

    def to_grid_config(self, size_override: Optional[int] = None) -> GridConfig:
        return GridConfig(size=size_override if size_override is not None else self.size)


@dataclass
class Puzzle:
    grid: PuzzleGrid
    solution_path: SolutionPath
    anchors: List[Anchor]
    validation_messages: List[str] = field(default_factory=list)
    seed: Optional[int] = None

    @property
    def size(self) -> int:
        return self.grid.size

    @property
    def complete(self) -> bool:
        return len(self.solution_path) == self.grid.bounds.area


class PuzzleGenerator:
    """High-level orchestrator: path search, anchor placement, validation."""

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or GeneratorConfig()
        self.rng = random.Random(self.config.seed)
        self.path_generator = HamiltonianPathGenerator(
            rng=self.rng,
            max_attempts=self.config.max_attempts,
            max_expansions_per_cell=self.config.max_expansions_per_cell,
        )
        self.segmenter = AnchorSegmenter(
            rng=self.rng, min_gap=self.config.min_gap, max_gap=self.config.max_gap
        )
        self.validator = PuzzleValidator(max_gap=self.config.max_gap)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, size: Optional[int] = None) -> Puzzle:
        grid_config = self.config.to_grid_config(size_override=size)
        LOGGER.info("Generating %dx%d puzzle", grid_config.size, grid_config.size)

        path = self.path_generator.generate(grid_config.size)
        grid = PuzzleGrid(grid_config)
        anchors = self.segmenter.segment(path, grid)
        validation = self.validator.validate(grid, path)

        puzzle = Puzzle(
            grid=grid,
            solution_path=path,
            anchors=anchors,
            validation_messages=validation.messages,
            seed=self.config.seed,
        )
        if puzzle.complete:
            LOGGER.info(
                "Puzzle ready: %d anchors on %dx%d", len(anchors), grid.size, grid.size
            )
        else:
            LOGGER.warning(
                "Puzzle path covers %d/%d cells; regenerate for a playable board",
                len(path), grid.bounds.area,
            )
        return puzzle
