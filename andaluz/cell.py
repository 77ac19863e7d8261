"""
Single board position for the N-Queens board.

A cell is a tagged variant: Empty, Queen or Attacked(count). The attack
count is only meaningful (and always >= 1) while the cell is Attacked;
relieving the last attack collapses the cell back to Empty.
"""

from enum import Enum
from typing import Tuple

from .errors import IllegalToggleError


class CellContent(Enum):
    EMPTY = 'empty'
    QUEEN = 'queen'
    ATTACKED = 'attacked'


class Cell:
    """
    Board cell with coordinates and incremental attack state.

    Attributes:
        x: Column (1-based)
        y: Row (1-based)
        i: Linear row-major index
        content: Current CellContent
        attacks: Number of queens attacking this cell (0 unless ATTACKED)
    """

    __slots__ = ('x', 'y', 'i', '_content', '_attacks')

    def __init__(self, x: int, y: int, i: int):
        self.x = x
        self.y = y
        self.i = i
        self._content = CellContent.EMPTY
        self._attacks = 0

    @property
    def content(self) -> CellContent:
        return self._content

    @property
    def attacks(self) -> int:
        return self._attacks

    def get_xyi(self) -> Tuple[int, int, int]:
        return self.x, self.y, self.i

    def is_queen(self) -> bool:
        return self._content is CellContent.QUEEN

    def is_empty(self) -> bool:
        return self._content is CellContent.EMPTY

    def is_attacked(self) -> bool:
        return self._content is CellContent.ATTACKED

    def toggle(self) -> CellContent:
        """
        Switch between Empty and Queen.

        Returns:
            The new content.

        Raises:
            IllegalToggleError: If the cell is attacked.
        """
        if self._content is CellContent.EMPTY:
            self._content = CellContent.QUEEN
        elif self._content is CellContent.QUEEN:
            self._content = CellContent.EMPTY
        else:
            raise IllegalToggleError(
                f"Cell ({self.x}, {self.y}) is attacked {self._attacks} time(s)"
            )
        return self._content

    def attack(self) -> None:
        if self._content is CellContent.QUEEN:
            raise IllegalToggleError(f"Cell ({self.x}, {self.y}) holds a queen and cannot be attacked")
        self._content = CellContent.ATTACKED
        self._attacks += 1

    def relieve(self) -> None:
        if self._content is not CellContent.ATTACKED:
            raise IllegalToggleError(f"Cell ({self.x}, {self.y}) is not attacked and cannot be relieved")
        self._attacks -= 1
        if self._attacks == 0:
            self._content = CellContent.EMPTY

    def attack_or_relieve(self, attack: bool) -> None:
        if attack:
            self.attack()
        else:
            self.relieve()

    def reset(self) -> None:
        self._content = CellContent.EMPTY
        self._attacks = 0

    def same_state(self, other: 'Cell') -> bool:
        return self._content is other._content and self._attacks == other._attacks

    def __repr__(self) -> str:
        if self._content is CellContent.ATTACKED:
            return f"Cell({self.x}, {self.y}, attacked={self._attacks})"
        return f"Cell({self.x}, {self.y}, {self._content.value})"
