"""Persistent puzzle document store.

Every generated puzzle can be saved as a JSON document under
``local_db/collections/puzzles/``. Documents hold the grid, anchors, solution
path and a few stats so a frontend can replay the exact board. Player
progress and hint counts are never written here.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Sequence

from ..core.exceptions import PuzzleStoreError
from ..core.models import Coordinate
from ..utils.logger import get_logger
from .generator import GeneratorConfig, Puzzle
from .grid import PuzzleGrid


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/collections/puzzles")


class PuzzleStore:
    """Save and reload generated puzzles as structured JSON documents."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def save(self, puzzle: Puzzle, config: GeneratorConfig) -> str:
        """Persist a puzzle and return its document ID."""
        doc_id = self._new_id()
        doc = {
            "id": doc_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "status": "complete" if puzzle.complete else "degraded",
            "config": self._serialize_config(config),
            "seed": puzzle.seed,
            "grid": puzzle.grid.to_jsonable(),
            "anchors": [
                {"value": anchor.value, "cell": list(anchor.coord.as_tuple())}
                for anchor in puzzle.anchors
            ],
            "solution_path": self._serialize_path(puzzle.solution_path),
            "validation": puzzle.validation_messages,
            "stats": self._compute_stats(puzzle),
        }
        path = self.store_dir / f"{doc_id}.json"
        path.write_text(json.dumps(doc, indent=2), encoding="utf-8")
        LOGGER.info("Puzzle saved: %s", doc_id)
        return doc_id

    def load(self, doc_id: str) -> Puzzle:
        path = self.store_dir / f"{doc_id}.json"
        if not path.exists():
            raise PuzzleStoreError(f"No stored puzzle with id {doc_id}")
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
            grid = PuzzleGrid.from_jsonable(doc["grid"])
            solution = tuple(Coordinate(int(r), int(c)) for r, c in doc["solution_path"])
        except (KeyError, TypeError, ValueError) as exc:
            raise PuzzleStoreError(f"Malformed puzzle document {doc_id}: {exc}") from exc
        return Puzzle(
            grid=grid,
            solution_path=solution,
            anchors=grid.anchors(),
            validation_messages=list(doc.get("validation", [])),
            seed=doc.get("seed"),
        )

    def list_ids(self) -> List[str]:
        return sorted(path.stem for path in self.store_dir.glob("*.json"))

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _serialize_path(path: Sequence[Coordinate]) -> List[List[int]]:
        return [list(coord.as_tuple()) for coord in path]

    @staticmethod
    def _compute_stats(puzzle: Puzzle) -> Dict[str, Any]:
        positions = {coord: index for index, coord in enumerate(puzzle.solution_path)}
        gaps = [
            positions[after.coord] - positions[before.coord]
            for before, after in zip(puzzle.anchors, puzzle.anchors[1:])
            if before.coord in positions and after.coord in positions
        ]
        return {
            "size": puzzle.size,
            "total_cells": puzzle.grid.bounds.area,
            "path_length": len(puzzle.solution_path),
            "anchor_count": len(puzzle.anchors),
            "gap_min": min(gaps) if gaps else 0,
            "gap_max": max(gaps) if gaps else 0,
            "gap_avg": round(sum(gaps) / len(gaps), 2) if gaps else 0.0,
        }

    @staticmethod
    def _serialize_config(config: GeneratorConfig) -> dict:
        return {
            "size": config.size,
            "seed": config.seed,
            "max_attempts": config.max_attempts,
            "max_expansions_per_cell": config.max_expansions_per_cell,
            "min_gap": config.min_gap,
            "max_gap": config.max_gap,
        }

    @staticmethod
    def _new_id() -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
        short_uuid = uuid.uuid4().hex[:8]
        return f"{ts}_{short_uuid}"

