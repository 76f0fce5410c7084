"""Pretty-print helpers for puzzle grids."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Dict, Iterable, Optional, Sequence

from ..core.models import Coordinate, Line

if TYPE_CHECKING:
    from ..engine.generator import Puzzle
    from ..engine.grid import PuzzleGrid


EMPTY_SYMBOL = "."
LINE_SYMBOL = "*"
DRAFT_SYMBOL = "~"


def _header(width: int, cell_width: int) -> list:
    header_cells = [f"{c:>{cell_width}}" for c in range(width)]
    return [
        "    " + " ".join(header_cells),
        "    " + "-" * ((cell_width + 1) * width - 1),
    ]


def format_grid(
    grid: PuzzleGrid,
    lines: Iterable[Line] = (),
    draft: Sequence[Coordinate] = (),
) -> str:
    """Anchors as numbers, completed line cells as ``*``, draft cells as ``~``."""
    marks: Dict[Coordinate, str] = {}
    for line in lines:
        for coord in line.points:
            marks[coord] = LINE_SYMBOL
    for coord in draft:
        marks.setdefault(coord, DRAFT_SYMBOL)

    cell_width = max(2, len(str(grid.anchor_count)))
    out = _header(grid.size, cell_width)
    for r in range(grid.size):
        symbols = []
        for c in range(grid.size):
            anchor = grid.cell(r, c).anchor_value
            if anchor is not None:
                symbols.append(str(anchor))
            else:
                symbols.append(marks.get(Coordinate(r, c), EMPTY_SYMBOL))
        row_render = " ".join(f"{symbol:>{cell_width}}" for symbol in symbols)
        out.append(f"{r:>2} | {row_render}")
    return "\n".join(out)


def format_solution(path: Sequence[Coordinate], size: int) -> str:
    """Show the 1-based step at which the path visits each cell."""
    steps = {coord: index + 1 for index, coord in enumerate(path)}
    cell_width = max(2, len(str(size * size)))
    out = _header(size, cell_width)
    for r in range(size):
        symbols = [str(steps.get(Coordinate(r, c), EMPTY_SYMBOL)) for c in range(size)]
        row_render = " ".join(f"{symbol:>{cell_width}}" for symbol in symbols)
        out.append(f"{r:>2} | {row_render}")
    return "\n".join(out)


def print_puzzle_stats(
    puzzle: Puzzle,
    *,
    solution: Optional[Sequence[Coordinate]] = None,
    stream=None,
) -> None:
    """Print grid + stats for a generated puzzle."""

    stream = stream or sys.stdout
    print(format_grid(puzzle.grid), file=stream)

    grid = puzzle.grid
    total_cells = grid.bounds.area
    positions = {coord: index for index, coord in enumerate(puzzle.solution_path)}
    gaps = [
        positions[after.coord] - positions[before.coord]
        for before, after in zip(puzzle.anchors, puzzle.anchors[1:])
        if before.coord in positions and after.coord in positions
    ]

    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {grid.size} x {grid.size} ({total_cells} cells)", file=stream)
    print(f"  Path length:   {len(puzzle.solution_path)}", file=stream)
    print(f"  Anchors:       {len(puzzle.anchors)}", file=stream)
    if gaps:
        print(
            f"  Gap range:     {min(gaps)}-{max(gaps)} (avg {sum(gaps) / len(gaps):.1f})",
            file=stream,
        )
    if not puzzle.complete:
        print(f"  Uncovered:     {total_cells - len(puzzle.solution_path)}", file=stream)

    if solution is not None:
        print(file=stream)
        print("--- Solution ---", file=stream)
        print(format_solution(solution, grid.size), file=stream)

    if puzzle.validation_messages:
        print(file=stream)
        print("--- Validation ---", file=stream)
        for msg in puzzle.validation_messages:
            print(f"  {msg}", file=stream)

    if puzzle.seed is not None:
        print(file=stream)
        print(f"Seed: {puzzle.seed}", file=stream)
