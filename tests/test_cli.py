import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from main import main


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.root = Path(self.tmp.name)

    def run_main(self, *argv: str) -> str:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            main(list(argv) + ["--log-level", "WARNING"])
        return buffer.getvalue()

    def test_generate_solve_and_write_output(self) -> None:
        output = self.root / "puzzle.json"
        text = self.run_main("--size", "5", "--seed", "3", "--solve", "--output", str(output))
        self.assertIn("Solved board", text)
        payload = json.loads(output.read_text(encoding="utf-8"))
        self.assertTrue(payload["complete"])
        self.assertTrue(payload["solved_by_solver"])
        self.assertEqual(len(payload["solution_path"]), 25)
        self.assertIsNone(payload["id"])

    def test_save_then_load(self) -> None:
        store_dir = self.root / "store"
        first = self.root / "first.json"
        self.run_main("--level", "6", "--seed", "9", "--save", "--store-dir", str(store_dir), "--output", str(first))
        saved = json.loads(first.read_text(encoding="utf-8"))
        self.assertIsNotNone(saved["id"])
        self.assertEqual(saved["grid"]["size"], 6)

        second = self.root / "second.json"
        self.run_main("--load", saved["id"], "--store-dir", str(store_dir), "--output", str(second))
        loaded = json.loads(second.read_text(encoding="utf-8"))
        self.assertEqual(loaded["solution_path"], saved["solution_path"])
        self.assertEqual(loaded["anchors"], saved["anchors"])

    def test_rejects_bad_gap_range(self) -> None:
        with self.assertRaises(SystemExit), redirect_stderr(io.StringIO()):
            main(["--min-gap", "5", "--max-gap", "2"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
