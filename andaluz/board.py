"""
Board state implementation for the N-Queens problem.

The board keeps, for every cell, whether it holds a queen or how many
queens attack it. Placing a queen increments the attack count of every
cell on its row, column and both diagonals; removing it decrements the
same cells, so a toggle is always exactly undone by a second toggle.

Coordinates are 1-based: x is the column, y is the row. Cells are stored
in row-major order and the signature packs one bit per cell in the same
order, most significant bit first.
"""

from typing import Callable, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellContent
from .errors import IllegalToggleError, OutOfBoundsError
from .interfaces import BoardInterface
from .utils import (
    attack_table,
    empty_signature,
    mirror_coordinate,
    queens_from_bits,
    rotate_coordinate,
    signature_to_decimal,
    signature_to_hex,
    unpack_signature,
    xy_to_index,
)


class Board(BoardInterface):
    """
    N-Queens board with incremental attack tracking.

    Attributes:
        _cols: Board dimension
        _cells: Row-major list of Cells
        _queen_count: Number of queens placed, tracked incrementally
        _signature: Packed queen bits, one per cell
        _equivalents: Cached dihedral signatures (None when stale)
    """

    def __init__(self, cols: int):
        """
        Create an empty board.

        Args:
            cols: Board dimension, a positive integer

        Raises:
            ValueError: If cols is not a positive integer.
        """
        if isinstance(cols, bool) or not isinstance(cols, (int, np.integer)) or cols < 1:
            raise ValueError(f"Board size must be a positive integer, got {cols!r}")
        self._cols = int(cols)
        self._cells = [
            Cell(x, y, xy_to_index(x, y, self._cols))
            for y in range(1, self._cols + 1)
            for x in range(1, self._cols + 1)
        ]
        self._attack_table = attack_table(self._cols)
        self.reset()

    @classmethod
    def from_signature(cls, signature: bytes, cols: int) -> 'Board':
        """
        Rebuild a board from a packed signature.

        Queens are replayed through toggle(), so attack counts are
        reconstructed exactly.

        Raises:
            ValueError: If the signature length does not match cols, or a
                padding bit past the last cell is set.
            IllegalToggleError: If the signature holds mutually attacking queens.
        """
        board = cls(cols)
        for x, y in queens_from_bits(unpack_signature(signature, cols), cols):
            board.toggle(x, y)
        return board

    @classmethod
    def from_array(cls, buffer, cols: int) -> 'Board':
        """
        Build a board from a byte-per-cell buffer (0 = empty, 1 = queen).

        Args:
            buffer: Sequence or array of cols² values in row-major order
            cols: Board dimension

        Raises:
            ValueError: If the buffer has the wrong size or unknown values.
            IllegalToggleError: If the buffer holds mutually attacking queens.
        """
        values = np.asarray(buffer).ravel()
        if values.size != cols * cols:
            raise ValueError(f"Buffer has {values.size} cells, expected {cols * cols}")
        if not np.isin(values, (0, 1)).all():
            raise ValueError("Buffer cells must be 0 (empty) or 1 (queen)")
        return cls.from_signature(np.packbits(values.astype(np.uint8), bitorder='big').tobytes(), cols)

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def queen_count(self) -> int:
        return self._queen_count

    @property
    def cells(self) -> Tuple[Cell, ...]:
        return tuple(self._cells)

    def reset(self) -> None:
        """Clear every cell, the signature and the symmetry cache."""
        for cell in self._cells:
            cell.reset()
        self._queen_count = 0
        self._signature = empty_signature(self._cols)
        self._equivalents: Optional[Tuple[bytes, ...]] = None

    def copy(self) -> 'Board':
        """Create a deep copy."""
        return self._transformed(lambda x, y: (x, y))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def _index(self, x: int, y: int) -> int:
        if not (1 <= x <= self._cols and 1 <= y <= self._cols):
            raise OutOfBoundsError(x, y, self._cols)
        return xy_to_index(x, y, self._cols)

    def get_cell(self, x: int, y: int) -> Cell:
        return self._cells[self._index(x, y)]

    def get_content(self, x: int, y: int) -> CellContent:
        return self.get_cell(x, y).content

    def get_attack_count(self, x: int, y: int) -> int:
        return self.get_cell(x, y).attacks

    def available_cells(self) -> List[Cell]:
        return [cell for cell in self._cells if cell.is_empty()]

    def queens(self) -> List[Tuple[int, int]]:
        """Coordinates of placed queens in row-major order."""
        return [(cell.x, cell.y) for cell in self._cells if cell.is_queen()]

    def is_solved(self) -> bool:
        # Sufficient only because toggle() never places a queen on an attacked cell
        return self._queen_count == self._cols

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def toggle(self, x: int, y: int) -> CellContent:
        """
        Place a queen on an empty cell or remove an existing queen.

        Every cell sharing the row, column or a diagonal with (x, y) gets
        its attack count incremented on placement and decremented on
        removal. Exactly one signature bit is flipped.

        Args:
            x: Column (1-based)
            y: Row (1-based)

        Returns:
            The new content of the cell.

        Raises:
            OutOfBoundsError: If (x, y) is outside the board.
            IllegalToggleError: If the cell is attacked.
        """
        index = self._index(x, y)
        cell = self._cells[index]
        if cell.is_attacked():
            raise IllegalToggleError(
                f"Cell ({x}, {y}) is attacked {cell.attacks} time(s); cannot place a queen"
            )

        placing = cell.is_empty()
        cell.toggle()
        for target in self._attack_table[index]:
            self._cells[target].attack_or_relieve(placing)

        self._queen_count += 1 if placing else -1
        self._signature[index >> 3] ^= 0x80 >> (index & 7)
        self._equivalents = None
        return cell.content

    # -------------------------------------------------------------------------
    # Signatures and symmetry
    # -------------------------------------------------------------------------

    def signature(self) -> bytes:
        return bytes(self._signature)

    def _transformed(self, transform: Callable[[int, int], Tuple[int, int]]) -> 'Board':
        """Replay every queen through transform on a scratch board."""
        board = Board(self._cols)
        for x, y in self.queens():
            board.toggle(*transform(x, y))
        return board

    def mirror(self) -> 'Board':
        """New board with every queen reflected from (x, y) to (y, x)."""
        return self._transformed(mirror_coordinate)

    def rotate(self) -> 'Board':
        """New board rotated a quarter turn around the center."""
        cols = self._cols
        return self._transformed(lambda x, y: rotate_coordinate(x, y, cols))

    def equivalent_signatures(self) -> Tuple[bytes, ...]:
        """
        Signatures of the board under its dihedral symmetry group.

        Returns identity, three quarter rotations, the mirror and three
        rotations of the mirror, in that order. Entries may coincide for
        symmetric boards. Cached until the next toggle.
        """
        if self._equivalents is None:
            signatures = []
            for base in (self, self.mirror()):
                board = base
                for turn in range(4):
                    signatures.append(board.signature())
                    if turn < 3:
                        board = board.rotate()
            self._equivalents = tuple(signatures)
        return self._equivalents

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def to_bit_string(self) -> str:
        """One '0'/'1' character per cell in row-major order."""
        return ''.join('1' if cell.is_queen() else '0' for cell in self._cells)

    def to_multiline_string(self) -> str:
        """Binary grid, one line per row, row y=1 first."""
        bits = self.to_bit_string()
        return '\n'.join(
            bits[row * self._cols:(row + 1) * self._cols] for row in range(self._cols)
        )

    def to_pretty_string(self) -> str:
        """Grid with 'Q' for queens, attack counts, and '.' for empty cells; row y=1 first."""
        tokens = []
        for cell in self._cells:
            if cell.is_queen():
                tokens.append('Q')
            elif cell.is_attacked():
                tokens.append(str(cell.attacks))
            else:
                tokens.append('.')
        width = max(len(t) for t in tokens)
        lines = []
        for row in range(self._cols):
            lines.append(' '.join(t.rjust(width) for t in tokens[row * self._cols:(row + 1) * self._cols]))
        return '\n'.join(lines)

    def signature_hex(self) -> str:
        return signature_to_hex(self.signature())

    def signature_decimal(self) -> str:
        return signature_to_decimal(self.signature())

    def to_array(self) -> np.ndarray:
        """
        Cell states as a (cols, cols) array indexed [y-1, x-1].

        1 marks a queen, 0 an empty cell and -n a cell attacked n times.
        """
        grid = np.zeros((self._cols, self._cols), dtype=np.int32)
        for cell in self._cells:
            if cell.is_queen():
                grid[cell.y - 1, cell.x - 1] = 1
            elif cell.is_attacked():
                grid[cell.y - 1, cell.x - 1] = -cell.attacks
        return grid

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        if self._cols != other._cols:
            return False
        return all(a.same_state(b) for a, b in zip(self._cells, other._cells))

    __hash__ = None

    def __str__(self) -> str:
        return self.to_bit_string()

    def __repr__(self) -> str:
        return f"Board(cols={self._cols}, queens={self._queen_count}, signature={self.signature_hex()})"
