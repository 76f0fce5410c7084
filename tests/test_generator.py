import unittest

from numberlink.engine.generator import GeneratorConfig, PuzzleGenerator, size_for_level


class SizeForLevelTests(unittest.TestCase):
    def test_progression(self) -> None:
        self.assertEqual([size_for_level(level) for level in range(1, 6)], [5] * 5)
        self.assertEqual(size_for_level(6), 6)
        self.assertEqual(size_for_level(11), 7)
        self.assertEqual(size_for_level(16), 8)
        self.assertEqual(size_for_level(500), 8)

    def test_non_positive_level_clamps(self) -> None:
        self.assertEqual(size_for_level(0), 5)
        self.assertEqual(size_for_level(-3), 5)


class PuzzleGeneratorTests(unittest.TestCase):
    def test_complete_puzzles_validate(self) -> None:
        generator = PuzzleGenerator(GeneratorConfig(seed=12))
        for size in (5, 6, 7, 8):
            puzzle = generator.generate(size)
            self.assertTrue(puzzle.complete)
            self.assertEqual(puzzle.size, size)
            self.assertEqual(puzzle.validation_messages, [])
            self.assertEqual(puzzle.anchors, puzzle.grid.anchors())
            self.assertEqual(puzzle.seed, 12)

    def test_default_size_comes_from_config(self) -> None:
        puzzle = PuzzleGenerator(GeneratorConfig(size=4, seed=2)).generate()
        self.assertEqual(puzzle.size, 4)

    def test_degraded_path_is_reported_not_raised(self) -> None:
        config = GeneratorConfig(seed=3, max_attempts=2, max_expansions_per_cell=0)
        with self.assertLogs("numberlink", level="WARNING"):
            puzzle = PuzzleGenerator(config).generate(5)
        self.assertFalse(puzzle.complete)
        self.assertTrue(puzzle.validation_messages)
        self.assertEqual(puzzle.anchors[0].coord, puzzle.solution_path[0])

    def test_invalid_size(self) -> None:
        with self.assertRaises(ValueError):
            PuzzleGenerator(GeneratorConfig(seed=1)).generate(0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
