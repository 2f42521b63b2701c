"""
Compact strategy table.

Stores one quantized win probability (a byte, 0-255 mapping to 0.0-1.0)
per solved canonical board, indexed through a minimal perfect hash.
"""

import logging
from typing import Dict, Mapping, Optional, Sequence, Union

from ..core import MOVE_ORDER, Board, Move, canonical, do_move, possible_new_tiles
from .mphf import MinimalPerfectHash

logger = logging.getLogger(__name__)

DEFAULT_GAMMA = 2.0
QUANT_MAX = 255

BoardLike = Union[Board, int]


def quantize(probability: float) -> int:
    """Nearest byte for a probability in [0, 1]."""
    return min(QUANT_MAX, max(0, round(probability * QUANT_MAX)))


class Strategy:
    """
    Immutable solved strategy.

    Built once from solver output, then queried for win rates and best
    moves. Queries only read the hash levels and value bytes, so one
    instance can serve any number of concurrent readers.
    """

    def __init__(self, hash_fn: MinimalPerfectHash, vals: bytes):
        """
        Args:
            hash_fn: Minimal perfect hash over the solved canonical boards
            vals: Quantized win rate per hash index
        """
        if len(hash_fn) != len(vals):
            raise ValueError(
                f"Hash covers {len(hash_fn)} boards but {len(vals)} values given"
            )
        self.hash_fn = hash_fn
        self.vals = bytes(vals)

    @classmethod
    def build(
        cls,
        boards: Sequence[BoardLike],
        win_rates: Sequence[float],
        gamma: float = DEFAULT_GAMMA,
    ) -> "Strategy":
        """
        Encode solved boards into a strategy table.

        Args:
            boards: Canonical boards
            win_rates: Exact win probability of each board
            gamma: Hash load factor

        Returns:
            Strategy answering win_rate for every given board
        """
        if len(boards) != len(win_rates):
            raise ValueError(
                f"Got {len(boards)} boards but {len(win_rates)} win rates"
            )

        keys = [int(board) for board in boards]
        hash_fn = MinimalPerfectHash.build(keys, gamma)

        vals = bytearray(len(keys))
        for key, rate in zip(keys, win_rates):
            vals[hash_fn.hash(key)] = quantize(rate)

        logger.info(
            f"Encoded {len(keys):,} boards: {hash_fn.size_bytes():,} hash bytes "
            f"+ {len(vals):,} value bytes"
        )
        return cls(hash_fn, bytes(vals))

    @classmethod
    def from_win_rates(
        cls, win_rates: Mapping[int, float], gamma: float = DEFAULT_GAMMA
    ) -> "Strategy":
        """Build from a solver's board -> win rate mapping."""
        boards = list(win_rates.keys())
        return cls.build(boards, [win_rates[board] for board in boards], gamma)

    def __len__(self) -> int:
        return len(self.vals)

    @property
    def gamma(self) -> float:
        return self.hash_fn.gamma

    def win_rate(self, board: BoardLike) -> float:
        """
        Quantized win probability of a board under optimal play.

        The board is canonicalized first. Boards outside the solved state
        space are a contract violation (see MinimalPerfectHash.hash). This
        includes the empty board, which no game reaches, so callers that
        accept raw input should check is_win and is_loss first, as
        describe_board does.
        """
        quantized = self.vals[self.hash_fn.hash(canonical(int(board)))]
        return quantized / QUANT_MAX

    def move_win_rate(self, board: BoardLike, move: Move) -> Optional[float]:
        """
        Expected win rate of playing a move, averaged over new-tile placements.

        Returns:
            Mean win rate, or None if the move has no effect
        """
        moved = do_move(int(board), move)
        if moved is None:
            return None

        rates = [self.win_rate(child) for child in possible_new_tiles(moved)]
        return sum(rates) / len(rates)

    def move_win_rates(self, board: BoardLike) -> Dict[Move, Optional[float]]:
        """Expected win rate of every direction, None for illegal ones."""
        return {move: self.move_win_rate(board, move) for move in MOVE_ORDER}

    def best_move(self, board: BoardLike) -> Move:
        """
        Move with the highest expected win rate.

        Ties go to the first move in MOVE_ORDER (Up, Down, Left, Right).

        Raises:
            ValueError: If no move changes the board
        """
        best_rate = -1.0
        best: Optional[Move] = None

        for move, rate in self.move_win_rates(board).items():
            if rate is not None and rate > best_rate:
                best_rate = rate
                best = move

        if best is None:
            raise ValueError(f"No legal move for board {int(board):#x}")
        return best
