"""CLI entrypoint for the Numberlink puzzle generator."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict

from numberlink.core.constants import MAX_ANCHOR_GAP, MAX_PATH_ATTEMPTS, MIN_ANCHOR_GAP
from numberlink.core.exceptions import NumberlinkError
from numberlink.engine.generator import GeneratorConfig, Puzzle, size_for_level
from numberlink.engine.puzzle_store import DEFAULT_STORE_DIR, PuzzleStore
from numberlink.engine.session import PuzzleSession
from numberlink.engine.solver import solve_puzzle, split_into_lines
from numberlink.utils.logger import configure_logging
from numberlink.utils.pretty import format_grid, print_puzzle_stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate Numberlink puzzles over Hamiltonian paths",
    )
    sizing = parser.add_mutually_exclusive_group()
    sizing.add_argument("--size", type=int, help="Grid size N for an N x N board")
    sizing.add_argument(
        "--level",
        type=int,
        help="Pick the grid size from the level progression (5x5 up to 8x8)",
    )
    sizing.add_argument("--load", type=str, metavar="ID", help="Load a stored puzzle instead of generating")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=MAX_PATH_ATTEMPTS,
        help="Restart budget for the path search",
    )
    parser.add_argument("--min-gap", type=int, default=MIN_ANCHOR_GAP, help="Smallest path gap between anchors")
    parser.add_argument("--max-gap", type=int, default=MAX_ANCHOR_GAP, help="Largest path gap between anchors")
    parser.add_argument(
        "--solve",
        action="store_true",
        help="Solve the board with CP-SAT and draw the result through the line engine",
    )
    parser.add_argument(
        "--show-solution",
        action="store_true",
        help="Print the generated solution path as step numbers",
    )
    parser.add_argument("--save", action="store_true", help="Store the puzzle as a JSON document")
    parser.add_argument(
        "--store-dir",
        type=Path,
        default=DEFAULT_STORE_DIR,
        help="Directory for stored puzzle documents",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def replay_solution(session: PuzzleSession, puzzle: Puzzle) -> bool:
    """Draw a CP-SAT solution move by move, as a player would."""
    path = solve_puzzle(puzzle.grid)
    if path is None:
        return False
    for line in split_into_lines(path, puzzle.grid):
        start = line.points[0]
        session.begin_line(start.row, start.col)
        for coord in line.points[1:]:
            session.extend_line(coord.row, coord.col)
        session.end_line()
    return session.is_solved()


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.min_gap < 1 or args.max_gap < args.min_gap:
        parser.error("--min-gap must be >= 1 and no larger than --max-gap")

    size = args.size
    if args.level is not None:
        size = size_for_level(args.level)
    config = GeneratorConfig(
        size=size if size is not None else size_for_level(1),
        seed=args.seed,
        max_attempts=args.max_attempts,
        min_gap=args.min_gap,
        max_gap=args.max_gap,
    )
    if config.size < 1:
        parser.error("--size must be at least 1")

    session = PuzzleSession(config)
    if args.load:
        try:
            puzzle = session.load_puzzle(PuzzleStore(args.store_dir).load(args.load))
        except NumberlinkError as exc:
            parser.error(str(exc))
    else:
        puzzle = session.new_puzzle(config.size)

    print_puzzle_stats(
        puzzle,
        solution=puzzle.solution_path if args.show_solution else None,
    )

    solved = None
    if args.solve:
        solved = replay_solution(session, puzzle)
        print()
        print("--- Solved board ---" if solved else "--- No solution found ---")
        print(format_grid(puzzle.grid, lines=session.lines))

    doc_id = None
    if args.save and not args.load:
        doc_id = PuzzleStore(args.store_dir).save(puzzle, config)

    if args.output:
        payload: Dict[str, Any] = {
            "id": doc_id,
            "seed": puzzle.seed,
            "complete": puzzle.complete,
            "grid": puzzle.grid.to_jsonable(),
            "anchors": [
                {"value": anchor.value, "cell": list(anchor.coord.as_tuple())}
                for anchor in puzzle.anchors
            ],
            "solution_path": [list(coord.as_tuple()) for coord in puzzle.solution_path],
            "solved_by_solver": solved,
            "validation": puzzle.validation_messages,
        }
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")


if __name__ == "__main__":  # pragma: no cover
    main()
