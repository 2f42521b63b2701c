"""Core board representation and rules."""

from .board import Board
from .packing import pack_cells, unpack_cells, tile_total, exponent_sum
from .rules import (
    Move,
    MOVE_ORDER,
    WIN_EXPONENT_SUM,
    shift_line,
    do_move,
    possible_moves,
    possible_new_tiles,
    is_win,
    is_loss,
    is_terminal,
    starting_boards,
)
from .symmetry import canonical, transforms

__all__ = [
    "Board",
    "Move",
    "MOVE_ORDER",
    "WIN_EXPONENT_SUM",
    "pack_cells",
    "unpack_cells",
    "tile_total",
    "exponent_sum",
    "shift_line",
    "do_move",
    "possible_moves",
    "possible_new_tiles",
    "is_win",
    "is_loss",
    "is_terminal",
    "starting_boards",
    "canonical",
    "transforms",
]
