#!/usr/bin/env python3
"""
Validate a saved strategy file by playing it.

This tests the full query path:
1. Load the binary strategy
2. Play random games following best_move
3. Check every visited board has a win rate in [0, 1] and every chosen
   move is legal
4. Compare the observed win fraction with the table's opening estimate
"""

import argparse
import logging
import random
import sys

from tqdm import tqdm

from puzzle512_solver.core import Board, possible_new_tiles
from puzzle512_solver.storage import load_strategy

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


def random_start(rng: random.Random) -> Board:
    """Place the two starting tiles uniformly at random."""
    first = rng.choice(list(possible_new_tiles(0)))
    return Board(rng.choice(list(possible_new_tiles(first))))


def play_game(strategy, rng: random.Random) -> bool:
    """
    Play one game with the strategy's moves and random new tiles.

    Returns:
        True if the game ends in a win
    """
    board = random_start(rng)
    while True:
        rate = strategy.win_rate(board)
        if not 0.0 <= rate <= 1.0:
            raise RuntimeError(f"Win rate {rate} out of range for board\n{board}")

        # Same terminal rule as the solver: the game ends when no move is left
        if next(board.possible_moves(), None) is None:
            return board.is_win()

        move = strategy.best_move(board)
        moved = board.do_move(move)
        if moved is None:
            raise RuntimeError(f"Strategy chose illegal move {move.name} for\n{board}")
        board = rng.choice(list(moved.possible_new_tiles()))


def main():
    parser = argparse.ArgumentParser(description="Validate a saved strategy")
    parser.add_argument("strategy", help="Path of a saved strategy file")
    parser.add_argument("--games", type=int, default=1000, help="Games to play")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    args = parser.parse_args()

    logger.info("=" * 70)
    logger.info("STRATEGY VALIDATION")
    logger.info("=" * 70)

    strategy = load_strategy(args.strategy)
    rng = random.Random(args.seed)

    # Opening estimate: mean over every ordered pair of starting tiles
    openings = [
        strategy.win_rate(second)
        for first in possible_new_tiles(0)
        for second in possible_new_tiles(first)
    ]
    expected = sum(openings) / len(openings)

    wins = 0
    for _ in tqdm(range(args.games), desc="Games", unit=" games"):
        wins += play_game(strategy, rng)

    observed = wins / args.games
    logger.info(f"Games played: {args.games:,}")
    logger.info(f"Observed win fraction: {observed:.4f}")
    logger.info(f"Table opening estimate: {expected:.4f}")

    # Three standard errors of a binomial proportion
    tolerance = 3 * (expected * (1 - expected) / args.games) ** 0.5 + 1 / 255
    if abs(observed - expected) > tolerance:
        logger.error(f"Observed win fraction outside tolerance {tolerance:.4f}")
        sys.exit(1)

    logger.info("✓ Validation passed")


if __name__ == "__main__":
    main()
