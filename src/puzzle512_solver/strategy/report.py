"""Human-readable move report for a raw 9-cell board."""

from typing import Sequence

from ..core import Board, Move
from .table import Strategy

# Report column order
REPORT_ORDER = (Move.LEFT, Move.RIGHT, Move.UP, Move.DOWN)


def describe_board(strategy: Strategy, cells: Sequence[int]) -> str:
    """
    Summarize a board for display.

    Args:
        strategy: Solved strategy table
        cells: 9 row-major exponents

    Returns:
        "Win!", "Loss", or per-direction expected win percentages such as
        "L:  42%, R:     , U:  57%, D:  13%" (blank for illegal moves)
    """
    board = Board.create(cells)
    if board.is_win():
        return "Win!"
    if board.is_loss():
        return "Loss"

    scores = []
    for move in REPORT_ORDER:
        rate = strategy.move_win_rate(board, move)
        score = "    " if rate is None else f"{int(100.0 * rate):>3}%"
        scores.append(f"{move.label}: {score}")
    return ", ".join(scores)
