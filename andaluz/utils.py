"""
Utility functions for the N-Queens backtracking solver.

This module contains:
- Attack line index calculations (row, column, both diagonals)
- Dihedral coordinate transforms (quarter rotation, mirror)
- Bit-signature packing and unpacking
- Pure Python attack checking used for verification
- Solvability information
"""

import math
from functools import lru_cache
from typing import Dict, Iterable, List, Tuple

import numpy as np


# =============================================================================
# Line Index Functions (for incremental attack updates)
# =============================================================================

def xy_to_index(x: int, y: int, cols: int) -> int:
    """Row-major linear index of a 1-based (x, y) coordinate."""
    return (x - 1) + cols * (y - 1)


def index_to_xy(i: int, cols: int) -> Tuple[int, int]:
    """Inverse of xy_to_index."""
    return i % cols + 1, i // cols + 1


def get_line_indices(x: int, y: int, cols: int) -> Dict[str, Tuple[int, ...]]:
    """
    Get the linear indices of the four attack lines through (x, y).

    The cell itself is excluded from every line. Diagonals stop at the
    board edges (no wraparound).

    Args:
        x: Column (1-based)
        y: Row (1-based)
        cols: Board dimension

    Returns:
        Dictionary mapping line family name to a tuple of linear indices.
    """
    row = tuple(xy_to_index(cx, y, cols) for cx in range(1, cols + 1) if cx != x)
    col = tuple(xy_to_index(x, cy, cols) for cy in range(1, cols + 1) if cy != y)

    # Top left -> lower right (x - y constant)
    diag = tuple(
        xy_to_index(x + d, y + d, cols)
        for d in range(-cols, cols + 1)
        if d != 0 and 1 <= x + d <= cols and 1 <= y + d <= cols
    )
    # Lower left -> top right (x + y constant)
    anti_diag = tuple(
        xy_to_index(x + d, y - d, cols)
        for d in range(-cols, cols + 1)
        if d != 0 and 1 <= x + d <= cols and 1 <= y - d <= cols
    )

    return {'row': row, 'col': col, 'diag': diag, 'anti_diag': anti_diag}


@lru_cache(maxsize=None)
def attack_table(cols: int) -> Tuple[Tuple[int, ...], ...]:
    """
    Attack targets for every cell of a cols x cols board.

    Entry i holds the linear indices attacked by a queen on cell i, in
    row, column, diagonal, anti-diagonal order.
    """
    table = []
    for i in range(cols * cols):
        x, y = index_to_xy(i, cols)
        lines = get_line_indices(x, y, cols)
        table.append(lines['row'] + lines['col'] + lines['diag'] + lines['anti_diag'])
    return tuple(table)


# =============================================================================
# Dihedral Transforms
# =============================================================================

def rotate_coordinate(x: int, y: int, cols: int) -> Tuple[int, int]:
    """
    Rotate a coordinate a quarter turn around the board center.

    Works on doubled coordinates relative to the center so odd and even
    board sizes share the same integer arithmetic: (dx, dy) -> (-dy, dx).
    """
    center = cols + 1
    dx = 2 * x - center
    dy = 2 * y - center
    rx, ry = -dy, dx
    return (rx + center) // 2, (ry + center) // 2


def mirror_coordinate(x: int, y: int) -> Tuple[int, int]:
    """Reflect a coordinate over the main diagonal (transpose)."""
    return y, x


# =============================================================================
# Signature Functions
# =============================================================================

def signature_length(cols: int) -> int:
    """Number of bytes in the signature of a cols x cols board."""
    return math.ceil(cols * cols / 8)


def empty_signature(cols: int) -> bytearray:
    return bytearray(signature_length(cols))


def pack_signature(bits: np.ndarray) -> bytes:
    """
    Pack a flat 0/1 array into a signature.

    Bits are taken in row-major order, most significant bit first within
    each byte; the trailing byte is zero padded.
    """
    return np.packbits(np.asarray(bits, dtype=np.uint8).ravel(), bitorder='big').tobytes()


def unpack_signature(signature: bytes, cols: int) -> np.ndarray:
    """
    Unpack a signature into a flat 0/1 array of length cols².

    Raises:
        ValueError: If the signature length does not match the board size,
            or a padding bit past the last cell is set.
    """
    expected = signature_length(cols)
    if len(signature) != expected:
        raise ValueError(
            f"Signature has {len(signature)} bytes, expected {expected} for cols={cols}"
        )
    bits = np.unpackbits(np.frombuffer(bytes(signature), dtype=np.uint8), bitorder='big')
    if bits[cols * cols:].any():
        raise ValueError(f"Signature has bits set beyond the {cols * cols} board cells")
    return bits[:cols * cols]


def signature_to_hex(signature: bytes) -> str:
    return signature.hex()


def signature_to_decimal(signature: bytes) -> str:
    return '[' + ', '.join(str(b) for b in signature) + ']'


# =============================================================================
# Attack Checking Functions
# =============================================================================

def check_attack_python(q1: Tuple[int, int], q2: Tuple[int, int]) -> bool:
    """
    Check if two queens attack each other (pure Python for verification).

    Args:
        q1: First queen position (x, y)
        q2: Second queen position (x, y)

    Returns:
        True if the queens share a row, column or diagonal.
    """
    x1, y1 = q1
    x2, y2 = q2
    if (x1, y1) == (x2, y2):
        return False
    return x1 == x2 or y1 == y2 or abs(x1 - x2) == abs(y1 - y2)


def count_attacking_pairs(queens: Iterable[Tuple[int, int]]) -> int:
    """Count attacking queen pairs with the naive O(Q²) algorithm."""
    queens = list(queens)
    count = 0
    for a in range(len(queens)):
        for b in range(a + 1, len(queens)):
            if check_attack_python(queens[a], queens[b]):
                count += 1
    return count


# =============================================================================
# Solvability
# =============================================================================

def check_solvability(cols: int) -> Dict:
    """
    Report whether an N-Queens solution exists for the given board size.

    Solutions exist for N = 1 and every N >= 4.

    Args:
        cols: Board dimension

    Returns:
        Dictionary with board information and a 'solvable' flag.
    """
    return {
        'N': cols,
        'queens': cols,
        'cells': cols * cols,
        'signature_bytes': signature_length(cols),
        'solvable': cols == 1 or cols >= 4,
    }


def queens_from_bits(bits: np.ndarray, cols: int) -> List[Tuple[int, int]]:
    """Coordinates of set bits in a flat row-major 0/1 array."""
    return [index_to_xy(int(i), cols) for i in np.flatnonzero(bits)]
