import random
import unittest

from numberlink.core.constants import CellKind
from numberlink.engine.grid import GridConfig, PuzzleGrid
from numberlink.engine.path_generator import HamiltonianPathGenerator, snake_path
from numberlink.engine.segmenter import AnchorSegmenter


class AnchorSegmenterTests(unittest.TestCase):
    def segment(self, path, size, seed=0, **kwargs):
        grid = PuzzleGrid(GridConfig(size=size))
        anchors = AnchorSegmenter(rng=random.Random(seed), **kwargs).segment(path, grid)
        return grid, anchors

    def test_values_are_sequential_along_path(self) -> None:
        for seed in range(25):
            path = snake_path(6)
            grid, anchors = self.segment(path, 6, seed=seed)
            index_of = {coord: i for i, coord in enumerate(path)}

            self.assertEqual([a.value for a in anchors], list(range(1, len(anchors) + 1)))
            self.assertEqual(anchors[0].coord, path[0])
            self.assertEqual(anchors[-1].coord, path[-1])

            positions = [index_of[a.coord] for a in anchors]
            gaps = [after - before for before, after in zip(positions, positions[1:])]
            for gap in gaps[:-1]:
                self.assertTrue(2 <= gap <= 4, gaps)
            self.assertTrue(1 <= gaps[-1] <= 4, gaps)

    def test_grid_cells_mirror_anchors(self) -> None:
        grid, anchors = self.segment(snake_path(5), 5, seed=11)
        anchored = {a.coord: a.value for a in anchors}
        for coord in grid.coordinates():
            cell = grid.cell_at(coord)
            if coord in anchored:
                self.assertEqual(cell.kind, CellKind.FIXED_ANCHOR)
                self.assertEqual(cell.anchor_value, anchored[coord])
            else:
                self.assertEqual(cell.kind, CellKind.EMPTY)
                self.assertIsNone(cell.anchor_value)
        self.assertEqual(grid.anchor_count, len(anchors))
        self.assertEqual(grid.anchors(), anchors)

    def test_generated_paths_segment_cleanly(self) -> None:
        rng = random.Random(2024)
        for size in (5, 6, 7, 8):
            path = HamiltonianPathGenerator(rng=rng).generate(size)
            grid, anchors = self.segment(path, size, seed=size)
            self.assertEqual(grid.anchor_position(1), path[0])
            self.assertEqual(grid.anchor_position(len(anchors)), path[-1])

    def test_final_cell_holds_last_value(self) -> None:
        for seed in range(10):
            path = snake_path(5)
            grid, anchors = self.segment(path, 5, seed=seed, min_gap=4, max_gap=4)
            self.assertEqual(grid.anchor_at(path[-1]), len(anchors))
            self.assertEqual(grid.anchor_count, 7)

    def test_short_path_uses_actual_length(self) -> None:
        path = snake_path(5)[:9]
        grid, anchors = self.segment(path, 5, seed=4)
        self.assertEqual(anchors[-1].coord, path[-1])
        self.assertTrue(all(a.coord in path for a in anchors))

    def test_empty_path_places_nothing(self) -> None:
        grid, anchors = self.segment((), 3)
        self.assertEqual(anchors, [])
        self.assertEqual(grid.anchor_count, 0)

    def test_single_cell_path(self) -> None:
        path = snake_path(1)
        grid, anchors = self.segment(path, 1)
        self.assertEqual(len(anchors), 1)
        self.assertEqual(anchors[0].value, 1)

    def test_two_cell_tail_forces_gap_of_one(self) -> None:
        path = snake_path(2)[:2]
        grid, anchors = self.segment(path, 2)
        self.assertEqual([a.value for a in anchors], [1, 2])
        self.assertEqual([a.coord for a in anchors], list(path))

    def test_custom_gap_range(self) -> None:
        path = snake_path(6)
        grid, anchors = self.segment(path, 6, seed=8, min_gap=3, max_gap=3)
        index_of = {coord: i for i, coord in enumerate(path)}
        positions = [index_of[a.coord] for a in anchors]
        self.assertEqual(positions[:-1], list(range(0, 35, 3))[: len(positions) - 1])

    def test_rejects_invalid_gap_range(self) -> None:
        with self.assertRaises(ValueError):
            AnchorSegmenter(min_gap=0)
        with self.assertRaises(ValueError):
            AnchorSegmenter(min_gap=4, max_gap=2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
