"""
Exception types raised by the N-Queens core.

Board and classifier failures are ordinary, catchable exceptions. Budget
exhaustion and search exhaustion are not errors; they are reported through
SolverResult.outcome.
"""


class AndaluzError(Exception):
    """Base class for all errors raised by the solver package."""
    pass


class OutOfBoundsError(AndaluzError, IndexError):
    """Coordinate outside [1, cols]."""

    def __init__(self, x: int, y: int, cols: int):
        self.x = x
        self.y = y
        self.cols = cols
        super().__init__(f"Cell ({x}, {y}) is out of bounds for a {cols}x{cols} board")


class IllegalToggleError(AndaluzError, ValueError):
    """
    Illegal cell transition.

    Raised when placing a queen on an attacked cell, attacking a cell that
    holds a queen, or relieving a cell that is not attacked.
    """
    pass


class ZeroWeightClassifier(AndaluzError, ZeroDivisionError):
    """Scoring attempted without any positive heuristic weight."""
    pass
