"""
Minimal perfect hashing over 64-bit integer keys.

Levelled bit-array construction (BBHash):
- Level i hashes the remaining keys into gamma * n_i slots
- Keys landing alone in a slot set that slot's bit and are done
- Colliding keys move on to level i + 1
- Keys still colliding after MAX_LEVELS go to a small fallback map

A key's index is the number of set bits before its slot across all levels
(rank), so the N keys map onto exactly [0, N).
"""

import logging
import math
from array import array
from typing import Dict, Iterable, List, Sequence

logger = logging.getLogger(__name__)

MASK64 = (1 << 64) - 1
MAX_LEVELS = 64
WORD_BITS = 64


class UnknownBoardError(KeyError):
    """Raised when a key outside the build set is looked up."""
    pass


def _mix64(x: int) -> int:
    """64-bit finalizer (MurmurHash3 fmix64)."""
    x ^= x >> 33
    x = (x * 0xFF51AFD7ED558CCD) & MASK64
    x ^= x >> 33
    x = (x * 0xC4CEB9FE1A85EC53) & MASK64
    x ^= x >> 33
    return x


_LEVEL_SEEDS = tuple(_mix64((level + 1) * 0x9E3779B97F4A7C15 & MASK64) for level in range(MAX_LEVELS))


def hash_key(key: int, level: int) -> int:
    """Deterministic 64-bit hash of a key for one level."""
    return _mix64((key ^ _LEVEL_SEEDS[level]) & MASK64)


def _rank_table(bits: bytearray) -> array:
    # ranks[w] = set bits in words 0..w-1
    ranks = array("Q")
    running = 0
    for offset in range(0, len(bits), 8):
        ranks.append(running)
        running += int.from_bytes(bits[offset:offset + 8], "little").bit_count()
    ranks.append(running)
    return ranks


class MinimalPerfectHash:
    """
    Minimal perfect hash function over a fixed set of integer keys.

    Immutable once built; lookups share no mutable state.
    """

    def __init__(
        self,
        gamma: float,
        num_keys: int,
        levels: Sequence[bytes],
        fallback: Dict[int, int],
    ):
        """
        Assemble a hash function from its parts (see build()).

        Args:
            gamma: Load factor used at construction
            num_keys: Number of keys in the build set
            levels: Bit array per level, a multiple of 8 bytes each
            fallback: Index of every key left after the last level
        """
        self.gamma = gamma
        self.num_keys = num_keys
        self.levels: List[bytes] = [bytes(bits) for bits in levels]
        self.fallback = dict(fallback)

        self._sizes = [len(bits) * 8 for bits in self.levels]
        self._ranks = [_rank_table(bits) for bits in self.levels]
        self._offsets = []
        offset = 0
        for ranks in self._ranks:
            self._offsets.append(offset)
            offset += ranks[-1]

        if offset + len(self.fallback) != num_keys:
            raise ValueError(
                f"Hash levels cover {offset + len(self.fallback)} keys, expected {num_keys}"
            )

    @classmethod
    def build(cls, keys: Iterable[int], gamma: float = 2.0) -> "MinimalPerfectHash":
        """
        Build a minimal perfect hash over distinct keys.

        Args:
            keys: Distinct non-negative integers below 2^64
            gamma: Load factor (slots per key per level); larger builds faster
                and uses more space

        Returns:
            MinimalPerfectHash mapping the keys onto [0, len(keys))
        """
        if gamma < 1.0:
            raise ValueError(f"gamma must be >= 1.0, got {gamma}")

        remaining = list(keys)
        num_keys = len(remaining)
        if len(set(remaining)) != num_keys:
            raise ValueError("Keys must be distinct")
        if any(not 0 <= key <= MASK64 for key in remaining):
            raise ValueError("Keys must be unsigned 64-bit integers")

        levels: List[bytes] = []
        while remaining and len(levels) < MAX_LEVELS:
            level = len(levels)
            words = max(1, math.ceil(gamma * len(remaining) / WORD_BITS))
            size = words * WORD_BITS

            slots = [hash_key(key, level) % size for key in remaining]
            hits = bytearray(size)  # 0 = free, 1 = single key, 2 = collision
            for slot in slots:
                if hits[slot] < 2:
                    hits[slot] += 1

            bits = bytearray(size // 8)
            colliding = []
            for key, slot in zip(remaining, slots):
                if hits[slot] == 1:
                    bits[slot >> 3] |= 1 << (slot & 7)
                else:
                    colliding.append(key)

            logger.debug(
                f"Level {level}: {len(remaining):,} keys, {size:,} slots, "
                f"{len(colliding):,} collisions"
            )
            levels.append(bytes(bits))
            remaining = colliding

        placed = num_keys - len(remaining)
        fallback = {key: placed + i for i, key in enumerate(remaining)}
        if fallback:
            logger.warning(f"{len(fallback)} keys stored in fallback map")

        return cls(gamma, num_keys, levels, fallback)

    def __len__(self) -> int:
        return self.num_keys

    def hash(self, key: int) -> int:
        """
        Index of a key in [0, num_keys).

        Keys outside the build set either map to an arbitrary index or raise
        UnknownBoardError; callers must only look up build keys.
        """
        for level, bits in enumerate(self.levels):
            slot = hash_key(key, level) % self._sizes[level]
            if bits[slot >> 3] >> (slot & 7) & 1:
                word = slot >> 6
                start = word * 8
                below = int.from_bytes(bits[start:start + 8], "little") & ((1 << (slot & 63)) - 1)
                return self._offsets[level] + self._ranks[level][word] + below.bit_count()

        try:
            return self.fallback[key]
        except KeyError:
            raise UnknownBoardError(key) from None

    def size_bytes(self) -> int:
        """Approximate in-memory size of the bit arrays and rank tables."""
        bits = sum(len(level) for level in self.levels)
        ranks = sum(len(r) * r.itemsize for r in self._ranks)
        return bits + ranks + 16 * len(self.fallback)
