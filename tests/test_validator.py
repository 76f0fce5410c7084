import random
import unittest

from numberlink.core.exceptions import GenerationIncomplete, InvalidLineError, ValidationError
from numberlink.core.models import Coordinate, Line
from numberlink.engine.generator import GeneratorConfig, PuzzleGenerator
from numberlink.engine.grid import GridConfig, PuzzleGrid
from numberlink.engine.lines import LineEngine
from numberlink.engine.path_generator import snake_path
from numberlink.engine.solver import split_into_lines
from numberlink.engine.validator import PuzzleValidator


def snake_board(positions):
    path = snake_path(4)
    grid = PuzzleGrid(GridConfig(size=4))
    for value, index in enumerate(positions, start=1):
        grid.place_anchor(path[index], value)
    return grid, path


class PathValidationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = PuzzleValidator()

    def test_accepts_snake(self) -> None:
        self.validator.validate_path(snake_path(4), 4)

    def test_rejects_jump(self) -> None:
        path = list(snake_path(4))
        path[2], path[3] = path[3], path[2]
        with self.assertRaises(ValidationError):
            self.validator.validate_path(path, 4)

    def test_rejects_revisit(self) -> None:
        path = [Coordinate(0, 0), Coordinate(0, 1), Coordinate(0, 0)]
        with self.assertRaises(ValidationError):
            self.validator.validate_path(path, 2)

    def test_rejects_out_of_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            self.validator.validate_path([Coordinate(0, 0), Coordinate(0, 1), Coordinate(0, 2)], 2)

    def test_short_path_is_incomplete(self) -> None:
        with self.assertRaises(GenerationIncomplete):
            self.validator.validate_path(snake_path(4)[:10], 4)


class AnchorValidationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = PuzzleValidator()

    def test_accepts_valid_layout(self) -> None:
        grid, path = snake_board((0, 3, 6, 9, 12, 15))
        self.validator.validate_anchors(grid, path)
        self.assertTrue(self.validator.validate(grid, path).ok)

    def test_rejects_wide_gap(self) -> None:
        grid, path = snake_board((0, 5, 9, 13, 15))
        with self.assertRaises(ValidationError):
            self.validator.validate_anchors(grid, path)

    def test_rejects_out_of_order_values(self) -> None:
        path = snake_path(4)
        grid = PuzzleGrid(GridConfig(size=4))
        for value, index in ((1, 0), (3, 3), (2, 6), (4, 9), (5, 12), (6, 15)):
            grid.place_anchor(path[index], value)
        result = self.validator.validate(grid, path)
        self.assertFalse(result.ok)
        self.assertEqual(len(result.messages), 1)

    def test_rejects_unanchored_tail(self) -> None:
        grid, path = snake_board((0, 3, 6, 9, 12))
        with self.assertRaises(ValidationError):
            self.validator.validate_anchors(grid, path)

    def test_generated_puzzles_pass(self) -> None:
        generator = PuzzleGenerator(GeneratorConfig(seed=5))
        for size in (2, 3, 5, 6, 7, 8):
            puzzle = generator.generate(size)
            result = self.validator.validate(puzzle.grid, puzzle.solution_path)
            self.assertTrue(result.ok, result.messages)


class ConnectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = PuzzleValidator()
        self.grid, self.path = snake_board((0, 3, 6, 9, 12, 15))
        self.lines = split_into_lines(self.path, self.grid)

    def test_full_solution_is_connected(self) -> None:
        self.validator.check_connections(self.grid, self.lines)

    def test_missing_pair_detected(self) -> None:
        with self.assertRaises(InvalidLineError):
            self.validator.check_connections(self.grid, self.lines[:-1])

    def test_line_through_anchor_detected(self) -> None:
        bad = Line(start_anchor=1, points=list(self.path[:7]))
        with self.assertRaises(InvalidLineError):
            self.validator.check_connections(self.grid, [bad] + self.lines[1:])

    def test_overlapping_lines_detected(self) -> None:
        first = self.lines[0]
        detour = Line(
            start_anchor=2,
            points=[Coordinate(0, 3), Coordinate(0, 2), Coordinate(1, 2), Coordinate(1, 1)],
        )
        with self.assertRaises(InvalidLineError):
            self.validator.check_connections(self.grid, [first, detour] + self.lines[2:])

    def test_full_coverage_implies_every_pair_connected(self) -> None:
        rng = random.Random(21)
        generator = PuzzleGenerator(GeneratorConfig(seed=21))
        for size in (5, 6, 7):
            puzzle = generator.generate(size)
            engine = LineEngine(puzzle.grid)
            solution = split_into_lines(puzzle.solution_path, puzzle.grid)
            # Draw in random order, redrawing and undoing along the way.
            for _ in range(3):
                order = list(solution)
                rng.shuffle(order)
                for line in order:
                    engine.begin(line.points[0])
                    for coord in line.points[1:]:
                        engine.extend(coord)
                    if rng.random() < 0.3:
                        engine.undo()
                if engine.is_solved():
                    self.validator.check_connections(puzzle.grid, engine.lines)
            for line in solution:
                if engine.line_for(line.start_anchor) is None:
                    engine.begin(line.points[0])
                    for coord in line.points[1:]:
                        engine.extend(coord)
            self.assertTrue(engine.is_solved())
            self.validator.check_connections(puzzle.grid, engine.lines)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
