"""Custom exception hierarchy for puzzle generation and play."""


class NumberlinkError(Exception):
    """Base exception for puzzle core failures."""


class GenerationIncomplete(NumberlinkError):
    """Raised when a solution path does not cover every cell of the grid."""


class ValidationError(NumberlinkError):
    """Raised when the puzzle integrity checks fail."""


class InvalidLineError(ValidationError):
    """Raised when a completed line breaks the connection rules."""


class SolverError(NumberlinkError):
    """Raised when the solver is handed a grid it cannot model."""


class PuzzleStoreError(NumberlinkError):
    """Raised when a stored puzzle document is missing or malformed."""
