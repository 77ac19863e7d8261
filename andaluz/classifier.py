"""
Weighted combination of heuristics.

The classifier never mutates the board: the solver places the candidate
queen, asks for a score, then removes the queen again.
"""

from typing import List, Optional

from .board import Board
from .errors import ZeroWeightClassifier
from .heuristics import Heuristic


class Classifier:
    """
    Weighted average of a set of heuristics.

    Attributes:
        _heuristics: Registered heuristics in push order
        _total_weight: Sum of their weights
    """

    def __init__(self):
        self._heuristics: List[Heuristic] = []
        self._total_weight = 0.0

    @property
    def heuristics(self) -> List[Heuristic]:
        return list(self._heuristics)

    @property
    def total_weight(self) -> float:
        return self._total_weight

    def is_empty(self) -> bool:
        return not self._heuristics

    def push(self, heuristic: Heuristic, weight: Optional[float] = None) -> None:
        """
        Add a heuristic to the active set.

        Args:
            heuristic: Heuristic to add
            weight: Overrides heuristic.weight when given
        """
        if weight is not None:
            heuristic = heuristic.with_weight(weight)
        self._heuristics.append(heuristic)
        self._total_weight += heuristic.weight

    def clear(self) -> None:
        self._heuristics = []
        self._total_weight = 0.0

    def score(self, board: Board, x: int, y: int) -> float:
        """
        Weighted average of all heuristic scores for the candidate (x, y).

        Raises:
            ZeroWeightClassifier: If the total weight is not positive.
        """
        if self._total_weight <= 0:
            raise ZeroWeightClassifier(
                f"Cannot score with total heuristic weight {self._total_weight}"
            )
        total = sum(h.score(board, x, y) for h in self._heuristics)
        return total / self._total_weight

    def describe(self) -> str:
        return '[' + ', '.join(str(h) for h in self._heuristics) + ']'

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"Classifier({self.describe()})"
