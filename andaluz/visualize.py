"""
Visualization functions for the N-Queens backtracking solver.

This module provides:
- Board visualization with queens and per-cell attack counts
- Jump count comparison across solver runs
- Save functionality for figures
"""

import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path
from typing import Dict, List, Optional

from .board import Board
from .solver import SolverResult
from .utils import count_attacking_pairs


def visualize_board(
    board: Board,
    filename: Optional[str] = None,
    show: bool = False,
    result: Optional[SolverResult] = None
) -> Optional[str]:
    """
    Draw the board with queens and attack counts.

    Row y=1 is drawn at the top. Attacked cells are shaded by how many
    queens attack them.

    Args:
        board: Board to draw
        filename: Optional path to save the figure
        show: Whether to display the plot
        result: Optional solver result for the title

    Returns:
        Filename if saved, None otherwise
    """
    N = board.cols
    grid = board.to_array()
    attacks = np.where(grid < 0, -grid, 0)
    max_attacks = max(int(attacks.max()), 1)

    fig, ax = plt.subplots(figsize=(max(4, N * 0.8), max(4, N * 0.8)))
    cmap = plt.cm.Reds

    for row in range(N):
        for col in range(N):
            value = grid[row, col]
            top = N - 1 - row
            if value == 1:
                facecolor = 'gold'
            elif value < 0:
                facecolor = cmap(0.2 + 0.6 * (-value) / max_attacks)
            else:
                facecolor = 'white' if (row + col) % 2 == 0 else 'lightgray'
            ax.add_patch(plt.Rectangle(
                (col, top), 1, 1,
                facecolor=facecolor, edgecolor='black', linewidth=1
            ))
            if value == 1:
                ax.text(col + 0.5, top + 0.5, 'Q', ha='center', va='center',
                        fontsize=16, color='black', fontweight='bold')
            elif value < 0:
                ax.text(col + 0.5, top + 0.5, str(-value), ha='center', va='center',
                        fontsize=9, color='black')

    ax.set_xlim(0, N)
    ax.set_ylim(0, N)
    ax.set_aspect('equal')
    ax.set_xticks(np.arange(N) + 0.5)
    ax.set_yticks(np.arange(N) + 0.5)
    ax.set_xticklabels(np.arange(1, N + 1))
    ax.set_yticklabels(np.arange(N, 0, -1))
    ax.set_xlabel('x (column)', fontsize=11, fontweight='bold')
    ax.set_ylabel('y (row)', fontsize=11, fontweight='bold')

    conflicts = count_attacking_pairs(board.queens())
    status = "SOLVED!" if board.is_solved() and conflicts == 0 else f"{board.queen_count}/{N} queens"
    title = f'N-Queens: {N}×{N} Board | {status}'
    if result is not None:
        title += f'\nJumps: {result.jumps} | {result.heuristics_description}'
    ax.set_title(title, fontsize=12, fontweight='bold')

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=150, bbox_inches='tight', facecolor='white')
        if not show:
            plt.close(fig)
        return filename

    if show:
        plt.show()
    else:
        plt.close(fig)

    return None


def plot_jump_comparison(
    results: List[SolverResult],
    filename: Optional[str] = None,
    show: bool = False,
    title: str = 'Jumps per heuristic set'
) -> Optional[str]:
    """
    Bar chart of jump counts for several solver results.

    Unsolved runs are drawn in red.

    Args:
        results: Solver results to compare
        filename: Optional path to save the figure
        show: Whether to display the plot
        title: Plot title

    Returns:
        Filename if saved, None otherwise
    """
    labels = [r.heuristics_description for r in results]
    jumps = [r.jumps for r in results]
    colors = ['steelblue' if r.solved else 'indianred' for r in results]

    fig, ax = plt.subplots(figsize=(max(6, len(results) * 1.5), 5))
    ax.bar(np.arange(len(results)), jumps, color=colors, edgecolor='black')
    ax.set_xticks(np.arange(len(results)))
    ax.set_xticklabels(labels, rotation=30, ha='right', fontsize=8)
    ax.set_ylabel('Jumps', fontsize=11)
    ax.set_title(title, fontsize=12, fontweight='bold')
    ax.grid(True, axis='y', alpha=0.3)

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=150, bbox_inches='tight', facecolor='white')
        if not show:
            plt.close(fig)
        return filename

    if show:
        plt.show()
    else:
        plt.close(fig)

    return None


def save_results(
    output_dir: str,
    board: Board,
    result: SolverResult
) -> Dict[str, str]:
    """
    Save the board figure for a solve to a directory.

    Args:
        output_dir: Directory to save results
        board: Board after the solve
        result: Solver result

    Returns:
        Dict mapping result type to filename
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    prefix = f"N{board.cols}_{result.outcome.value}_jumps{result.jumps}"

    board_file = output_path / f"{prefix}_board.png"
    visualize_board(board, filename=str(board_file), result=result)

    return {'board': str(board_file)}
