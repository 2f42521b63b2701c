"""
Binary strategy file format.

Layout (little-endian):
    magic       4s   b"P512"
    version     u16
    gamma       f64
    num_keys    u64
    num_levels  u32
    per level:  u64 bit-array size in bytes, then the bit bytes
    fallback:   u64 count, then (u64 key, u64 index) pairs sorted by key
    values:     u64 count, then one byte per board

Loading a saved file rebuilds a Strategy that answers every query
identically to the one that was saved.
"""

import logging
import struct
from pathlib import Path
from typing import BinaryIO, Union

from ..strategy import MinimalPerfectHash, Strategy

logger = logging.getLogger(__name__)

MAGIC = b"P512"
FORMAT_VERSION = 1

_HEADER = struct.Struct("<4sHdQI")
_U64 = struct.Struct("<Q")
_PAIR = struct.Struct("<QQ")


def dumps(strategy: Strategy) -> bytes:
    """Serialize a strategy to bytes."""
    hash_fn = strategy.hash_fn
    parts = [
        _HEADER.pack(MAGIC, FORMAT_VERSION, hash_fn.gamma, hash_fn.num_keys, len(hash_fn.levels))
    ]

    for bits in hash_fn.levels:
        parts.append(_U64.pack(len(bits)))
        parts.append(bits)

    parts.append(_U64.pack(len(hash_fn.fallback)))
    for key in sorted(hash_fn.fallback):
        parts.append(_PAIR.pack(key, hash_fn.fallback[key]))

    parts.append(_U64.pack(len(strategy.vals)))
    parts.append(strategy.vals)

    return b"".join(parts)


class _Reader:
    """Bounds-checked cursor over a byte buffer."""

    def __init__(self, data: bytes):
        self.data = memoryview(data)
        self.pos = 0

    def take(self, size: int) -> bytes:
        end = self.pos + size
        if end > len(self.data):
            raise ValueError(
                f"Truncated strategy data: need {size} bytes at offset {self.pos}, "
                f"only {len(self.data) - self.pos} left"
            )
        chunk = self.data[self.pos:end].tobytes()
        self.pos = end
        return chunk

    def unpack(self, fmt: struct.Struct) -> tuple:
        return fmt.unpack(self.take(fmt.size))


def loads(data: bytes) -> Strategy:
    """
    Deserialize a strategy.

    Raises:
        ValueError: On bad magic, unsupported version or truncated data
    """
    reader = _Reader(data)
    magic, version, gamma, num_keys, num_levels = reader.unpack(_HEADER)

    if magic != MAGIC:
        raise ValueError(f"Not a strategy file (magic {magic!r})")
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported strategy format version {version}")

    levels = []
    for _ in range(num_levels):
        (size,) = reader.unpack(_U64)
        levels.append(reader.take(size))

    (num_fallback,) = reader.unpack(_U64)
    fallback = {}
    for _ in range(num_fallback):
        key, index = reader.unpack(_PAIR)
        fallback[key] = index

    (num_vals,) = reader.unpack(_U64)
    vals = reader.take(num_vals)

    if reader.pos != len(reader.data):
        raise ValueError(f"{len(reader.data) - reader.pos} trailing bytes after strategy data")

    hash_fn = MinimalPerfectHash(gamma, num_keys, levels, fallback)
    return Strategy(hash_fn, vals)


def save_strategy(strategy: Strategy, target: Union[str, Path, BinaryIO]) -> int:
    """
    Write a strategy to a path or binary file object.

    Returns:
        Number of bytes written
    """
    data = dumps(strategy)
    if isinstance(target, (str, Path)):
        with open(target, "wb") as f:
            f.write(data)
    else:
        target.write(data)

    logger.info(f"Saved strategy: {len(strategy):,} boards, {len(data):,} bytes")
    return len(data)


def load_strategy(source: Union[str, Path, BinaryIO, bytes]) -> Strategy:
    """Read a strategy from a path, binary file object or bytes."""
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
    elif isinstance(source, (str, Path)):
        data = Path(source).read_bytes()
    else:
        data = source.read()

    strategy = loads(data)
    logger.info(f"Loaded strategy: {len(strategy):,} boards")
    return strategy
