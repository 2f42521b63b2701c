"""Shared fixtures: small end-of-game sub-games that solve in milliseconds."""

import pytest

from puzzle512_solver.core import Board
from puzzle512_solver.solver import StateSpaceExplorer, ValueSolver
from puzzle512_solver.strategy import Strategy

# Both legal moves fill the last cell and complete 2..512
SURE_WIN = [9, 8, 7, 6, 5, 4, 3, 2, 0]
# Both legal moves fill the last cell with no merge left
SURE_LOSS = [1, 2, 3, 4, 5, 6, 7, 8, 0]
# Two empty cells, a few turns of real play left
ENDGAME = [9, 8, 7, 6, 5, 4, 1, 0, 0]


@pytest.fixture
def sure_win():
    return Board.create(SURE_WIN)


@pytest.fixture
def sure_loss():
    return Board.create(SURE_LOSS)


@pytest.fixture
def endgame_exploration():
    """Exploration seeded from ENDGAME."""
    return StateSpaceExplorer(
        start_boards=[Board.create(ENDGAME)], show_progress=False
    ).explore()


@pytest.fixture
def endgame_values(endgame_exploration):
    """Exact win rates of every ENDGAME board."""
    return ValueSolver(endgame_exploration, show_progress=False).solve()


@pytest.fixture
def endgame_strategy(endgame_values):
    return Strategy.from_win_rates(endgame_values)


@pytest.fixture
def sure_win_strategy():
    """Strategy covering SURE_WIN and its successors."""
    exploration = StateSpaceExplorer(
        start_boards=[Board.create(SURE_WIN)], show_progress=False
    ).explore()
    values = ValueSolver(exploration, show_progress=False).solve()
    return Strategy.from_win_rates(values)
