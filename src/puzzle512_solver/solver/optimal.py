"""
Full solve pipeline: explore, evaluate, encode.
"""

import logging
from typing import Dict, Iterable, Optional

from ..core import canonical, possible_new_tiles
from ..strategy import DEFAULT_GAMMA, Strategy
from ..utils.memory import MemoryMonitor
from .bfs import StateSpaceExplorer
from .value_iteration import ValueSolver

logger = logging.getLogger(__name__)


def new_game_win_rate(win_rate: Dict[int, float]) -> float:
    """
    Exact win probability of a fresh game.

    Averages over every ordered placement of the two starting tiles.
    """
    total = 0.0
    count = 0
    for first in possible_new_tiles(0):
        for second in possible_new_tiles(first):
            total += win_rate[canonical(second)]
            count += 1
    return total / count


def optimal_strategy(
    start_boards: Optional[Iterable[int]] = None,
    gamma: float = DEFAULT_GAMMA,
    memory_monitor: Optional[MemoryMonitor] = None,
    show_progress: bool = True,
) -> Strategy:
    """
    Solve the whole game and encode the result.

    Args:
        start_boards: Seed boards; defaults to every two-tile opening
        gamma: Hash load factor for the strategy table
        memory_monitor: Optional RAM guard for exploration, values and encoding
        show_progress: Show tqdm progress bars

    Returns:
        Strategy covering every canonical board reachable from the seeds
    """
    logger.info("=" * 60)
    logger.info("PHASE 1: Exploring reachable boards")
    logger.info("=" * 60)
    exploration = StateSpaceExplorer(
        start_boards=start_boards,
        memory_monitor=memory_monitor,
        show_progress=show_progress,
    ).explore()

    logger.info("=" * 60)
    logger.info("PHASE 2: Computing win probabilities")
    logger.info("=" * 60)
    win_rate = ValueSolver(
        exploration, memory_monitor=memory_monitor, show_progress=show_progress
    ).solve()
    del exploration

    # Opening boards are only solved when the search starts from them
    if start_boards is None:
        logger.info(f"New game win probability: {new_game_win_rate(win_rate):.6f}")
    if memory_monitor is not None:
        memory_monitor.log_status()
        memory_monitor.check()

    logger.info("=" * 60)
    logger.info("PHASE 3: Encoding strategy table")
    logger.info("=" * 60)
    return Strategy.from_win_rates(win_rate, gamma)
