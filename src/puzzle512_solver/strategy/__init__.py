"""Strategy table encoding and queries."""

from .mphf import MinimalPerfectHash, UnknownBoardError
from .report import describe_board
from .table import DEFAULT_GAMMA, Strategy, quantize

__all__ = [
    "MinimalPerfectHash",
    "UnknownBoardError",
    "Strategy",
    "DEFAULT_GAMMA",
    "quantize",
    "describe_board",
]
