"""
Config-driven execution of the backtracking solver over several board sizes.
"""

from typing import Dict

from .board import Board
from .config import Config
from .solver import SolverResult, create_solver
from .utils import check_solvability


class SolverRunner:
    """
    Orchestrates solver execution based on configuration.
    """

    def __init__(self, config: Config):
        """
        Initialize runner with configuration.

        Args:
            config: Configuration instance
        """
        self.config = config

    def run_single(self, size: int) -> Dict:
        """
        Solve one board size.

        Args:
            size: Board dimension N

        Returns:
            Dictionary with the board, result and any saved files
        """
        board = Board(size)
        solver = create_solver(self.config)
        result: SolverResult = solver.solve(
            board,
            verbose=self.config.verbose,
            log_interval=self.config.log_interval,
        )

        saved = {}
        if self.config.save or self.config.show:
            from .visualize import save_results, visualize_board

            if self.config.save:
                saved = save_results(self.config.output_dir, board, result)
            if self.config.show:
                visualize_board(board, show=True, result=result)

        return {'board': board, 'result': result, 'files': saved}

    def run(self) -> Dict[int, Dict]:
        """
        Execute solver for every configured size.

        Returns:
            Dictionary with results for each board size
        """
        all_results = {}

        for size in self.config.sizes:
            if self.config.verbose:
                print(f"\n{'#'*60}")
                print(f"# Board Size N = {size}")
                print(f"{'#'*60}")
                self._print_solvability(check_solvability(size))

            all_results[size] = self.run_single(size)

        return all_results

    def _print_solvability(self, info: dict) -> None:
        """Print solvability information."""
        print(f"\nSolvability Check for N={info['N']}:")
        print(f"  Queens: {info['queens']}, Cells: {info['cells']}")
        print(f"  Signature bytes: {info['signature_bytes']}")

        if info['solvable']:
            print(f"  ✓ SOLVABLE: a non-attacking placement exists")
        else:
            print(f"  ✗ UNSOLVABLE: no placement of {info['N']} queens exists")
        print()
