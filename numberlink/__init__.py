"""Numberlink puzzle core: Hamiltonian-path generation and line drawing.

This package exposes the public API surface via:

- ``numberlink.engine.session.PuzzleSession``: the interface UI layers call.
- ``numberlink.engine.generator.PuzzleGenerator``: path search and anchor placement.
- ``numberlink.engine.lines.LineEngine``: the line drawing state machine.
"""

from .engine.generator import GeneratorConfig, Puzzle, PuzzleGenerator, size_for_level
from .engine.lines import LineEngine
from .engine.session import PuzzleSession

__all__ = [
    "GeneratorConfig",
    "LineEngine",
    "Puzzle",
    "PuzzleGenerator",
    "PuzzleSession",
    "size_for_level",
]

__version__ = "0.1.0"
