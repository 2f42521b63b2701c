"""State-space exploration and exact solving."""

from .bfs import Exploration, StateSpaceExplorer
from .value_iteration import ValueSolver
from .optimal import new_game_win_rate, optimal_strategy

__all__ = [
    "Exploration",
    "StateSpaceExplorer",
    "ValueSolver",
    "new_game_win_rate",
    "optimal_strategy",
]
