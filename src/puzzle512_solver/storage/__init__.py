"""Persistence of solved strategy tables."""

from .binary import FORMAT_VERSION, dumps, loads, load_strategy, save_strategy

__all__ = ["FORMAT_VERSION", "dumps", "loads", "load_strategy", "save_strategy"]
