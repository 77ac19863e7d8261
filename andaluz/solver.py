"""
Backtracking solver for the N-Queens problem.

The search is depth-first. At every level the solver scores each empty
cell with the classifier (placing the queen, scoring, removing it) and
explores candidates best-first. When a branch is proven to dead-end, the
signatures of all eight dihedral images of that board are recorded as
depleted, so neither the branch nor any of its rotations/mirrors is
explored again during the same solve.

The pruning treats symmetric boards as interchangeable. That holds for the
attack relation itself, but move ordering is only symmetric if every
active heuristic is rotation/mirror invariant. With a positional heuristic
that is not, pruning can skip orderings that would have reached a
solution sooner (or at all within the budget). This is accepted.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Set, Tuple

from .board import Board
from .classifier import Classifier
from .config import Config
from .heuristics import Heuristic, bruteforce, get_heuristic
from .interfaces import SolverInterface
from .utils import signature_to_hex


DEFAULT_MAX_JUMPS = 100000


class Outcome(Enum):
    READY = 'ready'
    SEARCHING = 'searching'
    SOLVED = 'solved'
    EXHAUSTED = 'exhausted'
    BUDGET_EXCEEDED = 'budget_exceeded'


@dataclass(frozen=True)
class SolutionNode:
    """
    Scored candidate move.

    Attributes:
        x: Column (1-based)
        y: Row (1-based)
        score: Classifier score of the board with this queen placed
    """
    x: int
    y: int
    score: float

    def sort_key(self) -> Tuple[float, int, int]:
        """Best score first, ties in row-major coordinate order."""
        return (-self.score, self.y, self.x)


@dataclass
class SolverResult:
    """
    Outcome of a solve call.

    Attributes:
        board: Signature of the board when the solve started
        heuristics_description: Active heuristics with their weights
        jumps: Queen placements explored
        pruned: Candidates skipped because their signature was depleted
        solution: Signature of the solved board, None if unsolved
        outcome: Final search state
        elapsed: Wall time of the search in seconds
    """
    board: bytes
    heuristics_description: str
    jumps: int = 0
    pruned: int = 0
    solution: Optional[bytes] = None
    outcome: Outcome = Outcome.READY
    elapsed: float = 0.0

    def inc_jumps(self) -> None:
        self.jumps += 1

    def set_solved(self, solution: bytes) -> None:
        self.solution = solution
        self.outcome = Outcome.SOLVED

    @property
    def solved(self) -> bool:
        return self.solution is not None

    def summary(self) -> str:
        solution = signature_to_hex(self.solution) if self.solution is not None else '-'
        return (f"{self.outcome.value}: jumps={self.jumps}, pruned={self.pruned}, "
                f"heuristics={self.heuristics_description}, solution={solution}")


class Solver(SolverInterface):
    """
    Heuristically ordered backtracking with symmetry pruning.

    Attributes:
        _classifier: Scores candidate moves
        _max_jumps: Search budget
        _depleted: Signatures proven to dead-end in the current solve
        _result: Result of the current/last solve
    """

    def __init__(self, max_jumps: int = DEFAULT_MAX_JUMPS, classifier: Optional[Classifier] = None):
        self._classifier = classifier if classifier is not None else Classifier()
        self.set_max_jumps(max_jumps)
        self._depleted: Set[bytes] = set()
        self._result = SolverResult(board=b'', heuristics_description=str(self._classifier))
        self._budget_exceeded = False
        self._verbose = False
        self._log_interval = 0

    @property
    def classifier(self) -> Classifier:
        return self._classifier

    @property
    def max_jumps(self) -> int:
        return self._max_jumps

    @property
    def jumps(self) -> int:
        return self._result.jumps

    @property
    def result(self) -> SolverResult:
        return self._result

    @property
    def depleted_signatures(self) -> FrozenSet[bytes]:
        return frozenset(self._depleted)

    def set_max_jumps(self, max_jumps: int) -> None:
        if max_jumps < 0:
            raise ValueError(f"max_jumps must be non-negative, got {max_jumps}")
        self._max_jumps = int(max_jumps)

    def push_heuristic(self, heuristic: Heuristic, weight: Optional[float] = None) -> None:
        self._classifier.push(heuristic, weight)

    def reset(self, board: Board) -> None:
        """Clear depleted signatures and start a fresh result for board."""
        self._depleted = set()
        self._budget_exceeded = False
        self._result = SolverResult(
            board=board.signature(),
            heuristics_description=str(self._classifier),
        )

    def solve(self, board: Board, verbose: bool = False, log_interval: int = 0) -> SolverResult:
        """
        Search for a complete placement starting from the board's current state.

        On success the board is left in the solved configuration; otherwise
        it is returned to the state it had when the call started. This
        also holds when a heuristic raises mid-search.

        The budget is checked on entry to each level, after the jump that
        led there. With max_jumps=0 exactly one placement is tried before
        the check fires, so the result is BUDGET_EXCEEDED with one jump
        rather than EXHAUSTED.

        Args:
            board: Board to solve, mutated in place
            verbose: Whether to print progress
            log_interval: Jumps between progress lines (0 disables them)

        Returns:
            SolverResult for this call.

        Raises:
            OutOfBoundsError, IllegalToggleError: On an inconsistent board;
                these abort the search.
        """
        if self._classifier.total_weight <= 0:
            self.push_heuristic(bruteforce(1.0))

        self.reset(board)
        self._result.outcome = Outcome.SEARCHING
        self._verbose = verbose
        self._log_interval = log_interval

        if verbose:
            print("=" * 60)
            print(f"Backtracking Solver (N={board.cols})")
            print("=" * 60)
            print(f"Board: {board.cols}×{board.cols}, Queens placed: {board.queen_count}")
            print(f"Max jumps: {self._max_jumps}")
            print(f"Heuristics: {self._result.heuristics_description}")
            print("=" * 60)

        start_time = time.time()
        if board.is_solved():
            self._result.set_solved(board.signature())
        elif self._search(board):
            self._result.set_solved(board.signature())
        elif self._budget_exceeded:
            self._result.outcome = Outcome.BUDGET_EXCEEDED
        else:
            self._result.outcome = Outcome.EXHAUSTED
        self._result.elapsed = time.time() - start_time

        if verbose:
            elapsed = self._result.elapsed
            print("=" * 60)
            print(f"Completed in {elapsed:.3f}s ({self._result.jumps} jumps)")
            print(f"Outcome: {self._result.outcome.value}")
            print(f"Depleted signatures: {len(self._depleted)}, pruned: {self._result.pruned}")
            if self._result.solved:
                print(f"Solution: {signature_to_hex(self._result.solution)}")
                print(board.to_pretty_string())
            print("=" * 60)

        return self._result

    def _score_candidates(self, board: Board) -> Optional[List[SolutionNode]]:
        """
        Score every empty cell, leaving the board unchanged.

        Returns:
            Candidates ordered best-first, or None if one of them solves the
            board (that queen is then left in place).
        """
        nodes = []
        for cell in board.available_cells():
            x, y = cell.x, cell.y
            board.toggle(x, y)
            if board.is_solved():
                self._result.inc_jumps()
                return None
            try:
                score = self._classifier.score(board, x, y)
            finally:
                board.toggle(x, y)
            nodes.append(SolutionNode(x, y, score))

        nodes.sort(key=SolutionNode.sort_key)
        return nodes

    def _search(self, board: Board) -> bool:
        if self._result.jumps > self._max_jumps:
            self._budget_exceeded = True
            return False

        if board.signature() in self._depleted:
            self._result.pruned += 1
            return False

        nodes = self._score_candidates(board)
        if nodes is None:
            return True

        for node in nodes:
            board.toggle(node.x, node.y)
            solved = False

            try:
                if board.signature() in self._depleted:
                    self._result.pruned += 1
                else:
                    self._result.inc_jumps()
                    self._report_progress(board)
                    solved = self._search(board)
                    if solved:
                        return True
                    if self._budget_exceeded:
                        # An interrupted subtree is not proven dead
                        return False
                    self._depleted.update(board.equivalent_signatures())
            finally:
                # Retract unless this placement completed the solution
                if not solved:
                    board.toggle(node.x, node.y)

        return False

    def _report_progress(self, board: Board) -> None:
        if not self._verbose or self._log_interval <= 0:
            return
        jumps = self._result.jumps
        if jumps % self._log_interval == 0:
            print(f"Jump {jumps:>7}/{self._max_jumps}: "
                  f"queens={board.queen_count}, depleted={len(self._depleted)}, "
                  f"pruned={self._result.pruned}")


# =============================================================================
# Factory Function
# =============================================================================

def create_solver(config: Config) -> Solver:
    """
    Build a solver from configuration.

    Heuristics with weight 0 are left out; an empty set falls back to
    BruteForce at solve time.

    Raises:
        ValueError: If the configuration is invalid.
    """
    errors = config.validate()
    if errors:
        raise ValueError("Invalid configuration: " + "; ".join(errors))

    solver = Solver(max_jumps=config.max_jumps)
    for name, weight in config.heuristics.items():
        if weight > 0:
            solver.push_heuristic(get_heuristic(name, weight))
    return solver
