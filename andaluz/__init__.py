"""
N-Queens Backtracking Solver Package

This package provides heuristically guided backtracking for the N-Queens
problem, with incremental attack tracking and pruning of boards that are
rotations or mirrors of already exhausted ones.

Modules:
    - interfaces: Abstract base classes for Board and Solver
    - cell: Tagged cell content (empty / queen / attacked count)
    - board: Board with incremental attacks, signatures and symmetries
    - heuristics: Built-in weighted scoring functions
    - classifier: Weighted average of heuristics
    - solver: Backtracking solver and results
    - config: Configuration management
    - runner: Config-driven execution over several sizes
    - errors: Exception types
    - utils: Line indices, dihedral transforms, signature packing

Visualization lives in andaluz.visualize and needs matplotlib.
"""

from .interfaces import BoardInterface, SolverInterface
from .cell import Cell, CellContent
from .board import Board
from .heuristics import (
    Heuristic,
    HEURISTICS,
    get_heuristic,
    get_heuristic_names,
    bruteforce,
    attacksum,
    attacksuminverse,
    horse,
    prioritizecenter,
)
from .classifier import Classifier
from .solver import Solver, SolverResult, SolutionNode, Outcome, create_solver
from .config import Config
from .runner import SolverRunner
from .errors import AndaluzError, OutOfBoundsError, IllegalToggleError, ZeroWeightClassifier

__all__ = [
    'BoardInterface',
    'SolverInterface',
    'Cell',
    'CellContent',
    'Board',
    'Heuristic',
    'HEURISTICS',
    'get_heuristic',
    'get_heuristic_names',
    'bruteforce',
    'attacksum',
    'attacksuminverse',
    'horse',
    'prioritizecenter',
    'Classifier',
    'Solver',
    'SolverResult',
    'SolutionNode',
    'Outcome',
    'create_solver',
    'Config',
    'SolverRunner',
    'AndaluzError',
    'OutOfBoundsError',
    'IllegalToggleError',
    'ZeroWeightClassifier',
]
