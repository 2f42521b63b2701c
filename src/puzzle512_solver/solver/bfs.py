"""
Breadth-first explorer for the reachable state space.

Discovers every canonical board reachable from the starting positions and
records the order in which boards were discovered. Since every turn adds
exactly 2 to the tile total, BFS discovers boards level by level, and the
discovery order read backwards visits every board after all of its
successors.
"""

import logging
import time
from array import array
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Optional, Set

from tqdm import tqdm

from ..core import canonical, possible_moves, possible_new_tiles, starting_boards, tile_total
from ..utils.memory import MemoryMonitor

logger = logging.getLogger(__name__)


@dataclass
class Exploration:
    """Result of a state-space exploration."""

    boards: Set[int]  # Every visited canonical board
    eval_order: array  # Canonical boards in discovery order ('Q' typecode)
    seeds: int  # Number of distinct seed boards
    max_depth: int  # Turns played from the seeds to the deepest board

    def __len__(self) -> int:
        return len(self.boards)


class StateSpaceExplorer:
    """
    BFS-based state-space builder.

    Pops boards first-in-first-out, applies every legal move followed by
    every possible new tile, and queues the canonical result the first
    time it is seen.
    """

    def __init__(
        self,
        start_boards: Optional[Iterable[int]] = None,
        memory_monitor: Optional[MemoryMonitor] = None,
        show_progress: bool = True,
        check_interval: int = 100_000,
    ):
        """
        Initialize explorer.

        Args:
            start_boards: Seed boards (packed ints or Boards); defaults to the
                two-tile starting positions. All seeds must share one tile total.
            memory_monitor: Optional monitor checked every check_interval boards
            show_progress: Show a tqdm progress bar
            check_interval: Boards processed between memory checks
        """
        if start_boards is None:
            seeds = starting_boards()
        else:
            seeds = []
            for board in start_boards:
                board = canonical(int(board))
                if board not in seeds:
                    seeds.append(board)

        totals = {tile_total(board) for board in seeds}
        if len(totals) > 1:
            raise ValueError(
                f"Seed boards must share one tile total, got {sorted(totals)}"
            )

        self.seeds = seeds
        self.memory_monitor = memory_monitor
        self.show_progress = show_progress
        self.check_interval = check_interval

    def explore(self) -> Exploration:
        """
        Explore the full reachable state space.

        Returns:
            Exploration with the visited set and discovery order
        """
        logger.info(f"Starting BFS from {len(self.seeds)} seed boards")
        start = time.time()

        # Boards are queued once, so every popped board is newly visited
        discovered: Set[int] = set(self.seeds)
        processed = 0
        eval_order = array("Q", self.seeds)
        queue = deque(self.seeds)

        with tqdm(
            desc="BFS", unit=" boards", disable=not self.show_progress
        ) as pbar:
            while queue:
                board = queue.popleft()
                processed += 1

                for moved, _ in possible_moves(board):
                    for child in possible_new_tiles(moved):
                        child = canonical(child)
                        if child in discovered:
                            continue
                        discovered.add(child)
                        queue.append(child)
                        eval_order.append(child)

                if processed % 1024 == 0:
                    pbar.update(1024)
                    pbar.set_postfix(queued=len(queue))

                if (
                    self.memory_monitor is not None
                    and processed % self.check_interval == 0
                ):
                    self.memory_monitor.check()

            pbar.update(processed % 1024)

        # BFS discovers by level, so the last board discovered is the deepest
        max_depth = 0
        if eval_order:
            max_depth = (tile_total(eval_order[-1]) - tile_total(eval_order[0])) // 2

        elapsed = time.time() - start
        logger.info(
            f"BFS complete! {len(discovered):,} canonical boards, "
            f"max depth {max_depth} in {elapsed:.1f}s"
        )

        return Exploration(
            boards=discovered,
            eval_order=eval_order,
            seeds=len(self.seeds),
            max_depth=max_depth,
        )
