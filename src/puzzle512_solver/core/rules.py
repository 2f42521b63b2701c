"""
Puzzle rules implementation.

Implements the 3x3 merge puzzle:
- Tiles slide toward the wall in the chosen direction
- At most one merge per line per move, the pair nearest the wall first
- After each move a single exponent-1 tile appears on one empty cell
- The game is won when the cell exponents sum to 45
"""

from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from .packing import BITS_PER_CELL, CELL_MASK, NUM_CELLS, exponent_sum, set_cell
from .symmetry import canonical

WIN_EXPONENT_SUM = 45
NEW_TILE_EXPONENT = 1


class Move(Enum):
    """Slide direction."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def label(self) -> str:
        return self.value[0].upper()


# Enumeration order used by possible_moves and best-move tie breaking
MOVE_ORDER: Tuple[Move, ...] = (Move.UP, Move.DOWN, Move.LEFT, Move.RIGHT)

# Cell indices of each line, listed from the wall the tiles slide toward
LINES = {
    Move.LEFT: ((0, 1, 2), (3, 4, 5), (6, 7, 8)),
    Move.RIGHT: ((2, 1, 0), (5, 4, 3), (8, 7, 6)),
    Move.UP: ((0, 3, 6), (1, 4, 7), (2, 5, 8)),
    Move.DOWN: ((6, 3, 0), (7, 4, 1), (8, 5, 2)),
}


def shift_line(values: Sequence[int]) -> List[int]:
    """
    Slide a 3-cell line toward index 0 and apply at most one merge.

    Non-zero values are compacted in order. If the first two are equal
    they merge; otherwise if the last two are equal those merge.

    Args:
        values: Three exponents, wall side first

    Returns:
        New line as a list of three exponents
    """
    out = [v for v in values if v != 0]
    out.extend([0] * (3 - len(out)))

    if out[0] == out[1] and out[0] != 0:
        out = [out[0] + 1, out[2], 0]
    elif out[1] == out[2] and out[1] != 0:
        out = [out[0], out[1] + 1, 0]

    return out


def _build_line_table() -> List[int]:
    # 12-bit packed line (wall cell in the low nibble) -> shifted line
    table = []
    for line in range(1 << (3 * BITS_PER_CELL)):
        values = [(line >> (BITS_PER_CELL * i)) & CELL_MASK for i in range(3)]
        a, b, c = shift_line(values)
        table.append(a | (b << BITS_PER_CELL) | (c << (2 * BITS_PER_CELL)))
    return table


_LINE_TABLE = _build_line_table()


def do_move(packed: int, move: Move) -> Optional[int]:
    """
    Apply a move to a packed board.

    Args:
        packed: Board to move
        move: Direction

    Returns:
        New packed board, or None if the move changes nothing
    """
    out = packed
    for i0, i1, i2 in LINES[move]:
        s0 = BITS_PER_CELL * i0
        s1 = BITS_PER_CELL * i1
        s2 = BITS_PER_CELL * i2
        line = (
            ((packed >> s0) & CELL_MASK)
            | (((packed >> s1) & CELL_MASK) << 4)
            | (((packed >> s2) & CELL_MASK) << 8)
        )
        shifted = _LINE_TABLE[line]
        if shifted == line:
            continue
        out = set_cell(out, i0, shifted & CELL_MASK)
        out = set_cell(out, i1, (shifted >> 4) & CELL_MASK)
        out = set_cell(out, i2, (shifted >> 8) & CELL_MASK)

    return None if out == packed else out


def possible_moves(packed: int) -> Iterator[Tuple[int, Move]]:
    """Yield (resulting board, move) for every move that changes the board."""
    for move in MOVE_ORDER:
        result = do_move(packed, move)
        if result is not None:
            yield result, move


def has_move(packed: int) -> bool:
    return any(do_move(packed, move) is not None for move in MOVE_ORDER)


def possible_new_tiles(packed: int) -> Iterator[int]:
    """Yield each board obtained by placing one exponent-1 tile on an empty cell."""
    for index in range(NUM_CELLS):
        shift = BITS_PER_CELL * index
        if not (packed >> shift) & CELL_MASK:
            yield packed | (NEW_TILE_EXPONENT << shift)


def is_win(packed: int) -> bool:
    """Winning board: cell exponents sum to WIN_EXPONENT_SUM."""
    return exponent_sum(packed) == WIN_EXPONENT_SUM


def is_loss(packed: int) -> bool:
    """Dead board: no move changes it and it is not a win."""
    return not has_move(packed) and not is_win(packed)


def is_terminal(packed: int) -> bool:
    return not has_move(packed)


def starting_boards() -> List[int]:
    """
    Canonical boards holding the two starting tiles.

    Two exponent-1 tiles are placed one after the other on the empty
    board; only placements already in canonical form are kept.

    Returns:
        Distinct canonical starting boards in discovery order
    """
    seen = set()
    boards = []
    for first in possible_new_tiles(0):
        for second in possible_new_tiles(first):
            if second == canonical(second) and second not in seen:
                seen.add(second)
                boards.append(second)
    return boards
