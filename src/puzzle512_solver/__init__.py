"""Exact solver for the 3x3 merge puzzle."""

from .core import Board, Move
from .solver import optimal_strategy
from .storage import load_strategy, save_strategy
from .strategy import Strategy

__version__ = "0.1.0"

__all__ = ["Board", "Move", "Strategy", "optimal_strategy", "load_strategy", "save_strategy"]
