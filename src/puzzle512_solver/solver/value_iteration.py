"""
Backward value iteration over an explored state space.

Computes the exact win probability of every canonical board under optimal
play by walking the BFS discovery order in reverse, so each board's
successors are always solved before the board itself.
"""

import logging
import time
from typing import Dict, Optional

from tqdm import tqdm

from ..core import canonical, is_loss, is_win, possible_moves, possible_new_tiles
from ..utils.memory import MemoryMonitor
from .bfs import Exploration

logger = logging.getLogger(__name__)


class ValueSolver:
    """
    Expectimax solver over the explored boards.

    A board's value is the best, over legal moves, of the mean value of
    the boards reachable by placing the new tile on each empty cell.
    Terminal boards score 1.0 for a win and 0.0 for a loss.
    """

    def __init__(
        self,
        exploration: Exploration,
        memory_monitor: Optional[MemoryMonitor] = None,
        show_progress: bool = True,
        check_interval: int = 100_000,
    ):
        """
        Initialize value solver.

        Args:
            exploration: Explorer output (visited boards and discovery order)
            memory_monitor: Optional monitor checked every check_interval boards
            show_progress: Show a tqdm progress bar
            check_interval: Boards solved between memory checks
        """
        self.exploration = exploration
        self.memory_monitor = memory_monitor
        self.show_progress = show_progress
        self.check_interval = check_interval

    def solve(self) -> Dict[int, float]:
        """
        Solve every explored board.

        Returns:
            Mapping from canonical packed board to win probability

        Raises:
            RuntimeError: If a board violates a solver invariant
            ResourceCheckError: If the memory monitor reports RAM over its limit
        """
        logger.info(f"Starting value iteration over {len(self.exploration):,} boards")
        start = time.time()

        win_rate: Dict[int, float] = {}
        eval_order = self.exploration.eval_order

        for board in tqdm(
            reversed(eval_order),
            total=len(eval_order),
            desc="Values",
            unit=" boards",
            disable=not self.show_progress,
        ):
            if board in win_rate:
                continue
            win_rate[board] = self._board_value(board, win_rate)

            if (
                self.memory_monitor is not None
                and len(win_rate) % self.check_interval == 0
            ):
                self.memory_monitor.check()

        elapsed = time.time() - start
        wins = sum(1 for value in win_rate.values() if value == 1.0)
        losses = sum(1 for value in win_rate.values() if value == 0.0)
        logger.info(
            f"Value iteration complete! {len(win_rate):,} boards in {elapsed:.1f}s "
            f"({wins:,} certain wins, {losses:,} certain losses)"
        )

        return win_rate

    def _board_value(self, board: int, win_rate: Dict[int, float]) -> float:
        """
        Compute the win probability of one board.

        Assumes every successor is already in win_rate.
        """
        if board != canonical(board):
            raise RuntimeError(f"Board {board:#x} is not in canonical orientation")

        best = -1.0
        for moved, _ in possible_moves(board):
            value = self.expected_value(moved, win_rate)
            if value > best:
                best = value

        if best < 0.0:
            # No legal move
            if is_win(board):
                return 1.0
            if is_loss(board):
                return 0.0
            raise RuntimeError(f"Terminal board {board:#x} is neither win nor loss")

        if not 0.0 <= best <= 1.0:
            raise RuntimeError(f"Win rate {best} out of range for board {board:#x}")

        return best

    @staticmethod
    def expected_value(moved: int, win_rate: Dict[int, float]) -> float:
        """
        Mean value over every new-tile placement after a move.

        Args:
            moved: Board right after a move, before the new tile
            win_rate: Solved values of canonical boards

        Returns:
            Uniform average over empty cells
        """
        total = 0.0
        count = 0
        for child in possible_new_tiles(moved):
            child = canonical(child)
            try:
                total += win_rate[child]
            except KeyError:
                raise RuntimeError(
                    f"Child board {child:#x} not solved before its parent"
                ) from None
            count += 1

        if count == 0:
            raise RuntimeError(f"Board {moved:#x} has no empty cell after a move")

        return total / count
