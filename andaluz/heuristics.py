"""
Heuristic scoring functions for candidate queen placements.

A heuristic is a label, a weight and a function of (board, x, y). The
board handed to the function already has the candidate queen placed on
(x, y). Every built-in heuristic returns a value in [0, 1].
"""

from dataclasses import dataclass, replace
from typing import Callable, Dict, List

from .board import Board


ScoreFunction = Callable[[Board, int, int], float]


@dataclass(frozen=True)
class Heuristic:
    """
    Named, weighted scoring function.

    Attributes:
        label: Name shown in result descriptions
        weight: Relative weight inside a classifier (>= 0)
        function: Callable (board, x, y) -> float
    """
    label: str
    weight: float
    function: ScoreFunction

    def evaluate(self, board: Board, x: int, y: int) -> float:
        """Unweighted score."""
        return float(self.function(board, x, y))

    def score(self, board: Board, x: int, y: int) -> float:
        """Weighted score."""
        return self.weight * self.evaluate(board, x, y)

    def with_weight(self, weight: float) -> 'Heuristic':
        return replace(self, weight=float(weight))

    def __str__(self) -> str:
        return f"{self.label}({self.weight})"


# =============================================================================
# Built-in Scoring Functions
# =============================================================================

KNIGHT_JUMPS = ((-1, -2), (-2, -1), (-2, 1), (-1, 2), (1, 2), (2, 1), (2, -1), (1, -2))


def brute_force_score(board: Board, x: int, y: int) -> float:
    return 1.0


def attack_sum(board: Board) -> int:
    return sum(cell.attacks for cell in board.cells)


def max_attack_sum(board: Board) -> float:
    return 4.0 * board.cols * board.cols


def attack_sum_score(board: Board, x: int, y: int) -> float:
    """Total attack count normalized by 4 * cols²."""
    return attack_sum(board) / max_attack_sum(board)


def attack_sum_inverse_score(board: Board, x: int, y: int) -> float:
    """Complement of attack_sum_score; quieter boards score higher."""
    maximum = max_attack_sum(board)
    return (maximum - attack_sum(board)) / maximum


def horse_score(board: Board, x: int, y: int) -> float:
    """1.0 if another queen sits a knight's move away from (x, y)."""
    cols = board.cols
    for dx, dy in KNIGHT_JUMPS:
        nx, ny = x + dx, y + dy
        if 1 <= nx <= cols and 1 <= ny <= cols and board.get_cell(nx, ny).is_queen():
            return 1.0
    return 0.0


def prioritize_center_score(board: Board, x: int, y: int) -> float:
    mid = board.cols // 2
    return 1.0 if x == mid and y == mid else 0.0


# =============================================================================
# Factories
# =============================================================================

def bruteforce(weight: float = 1.0) -> Heuristic:
    return Heuristic('BruteForce', float(weight), brute_force_score)


def attacksum(weight: float = 1.0) -> Heuristic:
    return Heuristic('AttackSum', float(weight), attack_sum_score)


def attacksuminverse(weight: float = 1.0) -> Heuristic:
    return Heuristic('AttackSumInverse', float(weight), attack_sum_inverse_score)


def horse(weight: float = 1.0) -> Heuristic:
    return Heuristic('Horse', float(weight), horse_score)


def prioritizecenter(weight: float = 1.0) -> Heuristic:
    return Heuristic('PrioritizeCenter', float(weight), prioritize_center_score)


HEURISTICS: Dict[str, Callable[[float], Heuristic]] = {
    'bruteforce': bruteforce,
    'attacksum': attacksum,
    'attacksuminverse': attacksuminverse,
    'horse': horse,
    'prioritizecenter': prioritizecenter,
}


def get_heuristic(name: str, weight: float = 1.0) -> Heuristic:
    """
    Get a built-in heuristic by name.

    Args:
        name: Heuristic name (case insensitive)
        weight: Weight to assign

    Returns:
        Heuristic instance.
    """
    key = name.lower()
    if key not in HEURISTICS:
        raise ValueError(f"Unknown heuristic: {name}. "
                         f"Valid options: {list(HEURISTICS.keys())}")
    return HEURISTICS[key](weight)


def get_heuristic_names() -> List[str]:
    return list(HEURISTICS.keys())
