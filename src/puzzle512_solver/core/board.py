"""
Immutable board value.

Wraps the packed integer from packing.py and exposes the rules as methods.
Every operation returns a new Board; nothing mutates in place.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from . import rules, symmetry
from .packing import MAX_EXPONENT, SIZE, cell_index, get_cell, pack_cells, set_cell, unpack_cells
from .rules import Move


@dataclass(frozen=True, order=True)
class Board:
    """
    Immutable 3x3 board.

    Layout (cell index = x + 3*y):
        [0][1][2]
        [3][4][5]
        [6][7][8]

    Each cell holds an exponent: 0 is empty, v shows a tile of 2^v.
    Boards compare and order by their packed integer.
    """

    packed: int = 0

    @classmethod
    def empty(cls) -> "Board":
        return cls(0)

    @classmethod
    def create(cls, cells: Sequence[int]) -> "Board":
        """Build a board from 9 row-major exponents."""
        return cls(pack_cells(cells))

    def __int__(self) -> int:
        return self.packed

    @property
    def cells(self) -> List[int]:
        """Row-major exponents."""
        return unpack_cells(self.packed)

    def get(self, x: int, y: int) -> int:
        return get_cell(self.packed, cell_index(x, y))

    def set(self, x: int, y: int, value: int) -> "Board":
        """Return a copy with one cell overwritten."""
        if not 0 <= value <= MAX_EXPONENT:
            raise ValueError(f"Exponent {value} out of range 0-{MAX_EXPONENT}")
        return Board(set_cell(self.packed, cell_index(x, y), value))

    def is_win(self) -> bool:
        return rules.is_win(self.packed)

    def is_loss(self) -> bool:
        return rules.is_loss(self.packed)

    def do_move(self, move: Move) -> Optional["Board"]:
        """Resulting board, or None if the move has no effect."""
        result = rules.do_move(self.packed, move)
        return None if result is None else Board(result)

    def possible_moves(self) -> Iterator[Tuple["Board", Move]]:
        for result, move in rules.possible_moves(self.packed):
            yield Board(result), move

    def possible_new_tiles(self) -> Iterator["Board"]:
        for result in rules.possible_new_tiles(self.packed):
            yield Board(result)

    def transforms(self) -> List["Board"]:
        """The 8 symmetric images of this board."""
        return [Board(image) for image in symmetry.transforms(self.packed)]

    def canonical_orientation(self) -> "Board":
        return Board(symmetry.canonical(self.packed))

    def __str__(self) -> str:
        """Grid drawing with exponents, blanks for empty cells."""
        border = "+--+--+--+"
        lines = []
        for y in range(SIZE):
            lines.append(border)
            row = ""
            for x in range(SIZE):
                value = self.get(x, y)
                row += "|" + (f"{value:<2}" if value else "  ")
            lines.append(row + "|")
        lines.append(border)
        return "\n".join(lines)
