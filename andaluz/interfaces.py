"""
Abstract interfaces for Board and Solver classes.

These interfaces define the contract the backtracking search relies on:
the solver only mutates a board through toggle() and reads it through
the query and signature methods declared here.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

from .cell import Cell, CellContent


class BoardInterface(ABC):
    """
    Abstract interface for an N-Queens board.

    Attributes:
        cols: Board dimension (cols x cols cells, cols queens to place)
        queen_count: Number of queens currently placed
    """

    @property
    @abstractmethod
    def cols(self) -> int:
        """Board dimension."""
        pass

    @property
    @abstractmethod
    def queen_count(self) -> int:
        """Number of queens currently on the board."""
        pass

    @abstractmethod
    def toggle(self, x: int, y: int) -> CellContent:
        """
        Place or remove a queen at (x, y).

        Returns:
            The new content of the cell.
        """
        pass

    @abstractmethod
    def get_content(self, x: int, y: int) -> CellContent:
        pass

    @abstractmethod
    def get_attack_count(self, x: int, y: int) -> int:
        pass

    @abstractmethod
    def available_cells(self) -> List[Cell]:
        """Empty cells in a stable order, used as candidate moves."""
        pass

    @abstractmethod
    def is_solved(self) -> bool:
        pass

    @abstractmethod
    def signature(self) -> bytes:
        """Packed one-bit-per-cell queen signature."""
        pass

    @abstractmethod
    def equivalent_signatures(self) -> Tuple[bytes, ...]:
        """Signatures of the 8 dihedral images of this board."""
        pass


class SolverInterface(ABC):
    """
    Abstract interface for N-Queens solvers.

    A solver places queens on a board until it is solved, the search is
    exhausted, or the jump budget runs out.
    """

    @abstractmethod
    def solve(self, board: BoardInterface, verbose: bool = False, log_interval: int = 0):
        """
        Run the search on the board.

        Args:
            board: Board to solve, mutated in place
            verbose: Whether to print progress
            log_interval: Jumps between progress lines (0 disables them)

        Returns:
            SolverResult describing the outcome.
        """
        pass

    @abstractmethod
    def set_max_jumps(self, max_jumps: int) -> None:
        pass
