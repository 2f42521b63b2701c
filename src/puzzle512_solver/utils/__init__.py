"""Utility modules for the puzzle solver."""

from .memory import (
    MemoryStats,
    MemoryMonitor,
    ResourceCheckError,
    get_memory_stats,
)

__all__ = [
    "MemoryStats",
    "MemoryMonitor",
    "ResourceCheckError",
    "get_memory_stats",
]
