"""Tests for puzzle rules."""

import pytest

from puzzle512_solver.core import (
    Board,
    Move,
    MOVE_ORDER,
    canonical,
    do_move,
    is_loss,
    is_terminal,
    is_win,
    shift_line,
    starting_boards,
    tile_total,
    unpack_cells,
)


def test_shift_line():
    """Test line compaction and single merge."""
    assert shift_line([0, 0, 0]) == [0, 0, 0]
    assert shift_line([1, 0, 1]) == [2, 0, 0]
    assert shift_line([0, 1, 1]) == [2, 0, 0]
    assert shift_line([1, 1, 1]) == [2, 1, 0]
    assert shift_line([2, 1, 1]) == [2, 2, 0]


def test_shift_line_single_merge_per_move():
    """Test that a merged tile does not merge again in the same move."""
    assert shift_line([1, 1, 2]) == [2, 2, 0]
    assert shift_line([2, 2, 2]) == [3, 2, 0]
    assert shift_line([3, 2, 1]) == [3, 2, 1]


def test_do_move_all_directions():
    """Test each direction on a full board of exponent-1 tiles."""
    board = Board.create([1] * 9)

    assert board.do_move(Move.UP) == Board.create([
        2, 2, 2,
        1, 1, 1,
        0, 0, 0,
    ])
    assert board.do_move(Move.DOWN) == Board.create([
        0, 0, 0,
        1, 1, 1,
        2, 2, 2,
    ])
    assert board.do_move(Move.LEFT) == Board.create([
        2, 1, 0,
        2, 1, 0,
        2, 1, 0,
    ])
    assert board.do_move(Move.RIGHT) == Board.create([
        0, 1, 2,
        0, 1, 2,
        0, 1, 2,
    ])


def test_do_move_merges_nearest_wall_first():
    """Test merge priority follows the slide direction."""
    board = Board.create([
        2, 1, 1,
        0, 0, 0,
        0, 0, 0,
    ])
    assert board.do_move(Move.LEFT).cells == [2, 2, 0, 0, 0, 0, 0, 0, 0]
    assert board.do_move(Move.RIGHT).cells == [0, 2, 2, 0, 0, 0, 0, 0, 0]


def test_do_move_no_effect():
    """Test that a move changing nothing returns None."""
    board = Board.create([
        1, 2, 3,
        0, 0, 0,
        0, 0, 0,
    ])
    assert board.do_move(Move.LEFT) is None
    assert board.do_move(Move.RIGHT) is None
    assert board.do_move(Move.UP) is None
    assert board.do_move(Move.DOWN) is not None

    assert Board.empty().do_move(Move.UP) is None


def test_do_move_none_exactly_when_unchanged():
    """Test no-op detection over a spread of boards."""
    boards = [
        [1, 1, 1, 1, 1, 1, 0, 0, 0],
        [9, 8, 7, 6, 5, 4, 3, 2, 0],
        [0, 0, 0, 0, 1, 0, 0, 0, 0],
        [3, 3, 0, 2, 0, 2, 0, 1, 1],
        [1, 2, 1, 4, 5, 3, 7, 8, 6],
    ]
    for cells in boards:
        packed = Board.create(cells).packed
        for move in MOVE_ORDER:
            result = do_move(packed, move)
            assert result is None or result != packed


def test_possible_moves_order():
    """Test moves are enumerated Up, Down, Left, Right."""
    board = Board.create([1] * 9)
    moves = [move for _, move in board.possible_moves()]
    assert moves == [Move.UP, Move.DOWN, Move.LEFT, Move.RIGHT]


def test_possible_moves_skips_illegal(sure_win):
    """Test only effective moves are listed."""
    moves = [move for _, move in sure_win.possible_moves()]
    assert moves == [Move.DOWN, Move.RIGHT]


def test_possible_new_tiles():
    """Test one exponent-1 tile is placed on each empty cell in index order."""
    board = Board.create([1, 0, 2, 0, 0, 0, 0, 0, 3])
    placed = [
        next(i for i, (a, b) in enumerate(zip(board.cells, child.cells)) if a != b)
        for child in board.possible_new_tiles()
    ]
    assert placed == [1, 3, 4, 5, 6, 7]

    for child in board.possible_new_tiles():
        assert sum(child.cells) == sum(board.cells) + 1


def test_possible_new_tiles_full_board():
    """Test a full board has nowhere to place a tile."""
    assert list(Board.create([1] * 9).possible_new_tiles()) == []


def test_is_win():
    """Test the exponent-sum win rule, including non-canonical boards."""
    assert Board.create([9, 8, 1, 6, 5, 7, 3, 2, 4]).is_win()
    assert Board.create([1, 2, 3, 4, 5, 6, 7, 8, 9]).is_win()
    assert Board.create([9, 9, 9, 9, 9, 0, 0, 0, 0]).is_win()
    assert not Board.create([9, 8, 7, 6, 5, 4, 3, 2, 0]).is_win()


def test_is_loss():
    """Test dead boards are losses and playable or winning boards are not."""
    assert Board.create([1, 2, 1, 4, 5, 3, 7, 8, 6]).is_loss()
    assert Board.empty().is_loss()
    assert not Board.create([9, 8, 1, 6, 5, 7, 3, 2, 4]).is_loss()
    assert not Board.create([1] * 9).is_loss()


def test_terminal_boards_are_win_xor_loss():
    """Test every terminal board is exactly one of win or loss."""
    for cells in (
        [9, 8, 1, 6, 5, 7, 3, 2, 4],
        [1, 2, 1, 4, 5, 3, 7, 8, 6],
        [1, 2, 3, 4, 5, 6, 1, 7, 8],
    ):
        packed = Board.create(cells).packed
        assert is_terminal(packed)
        assert is_win(packed) != is_loss(packed)


def test_starting_boards():
    """Test the canonical two-tile starting positions."""
    boards = starting_boards()

    # 36 cell pairs fall into 8 orbits under the square's symmetries
    assert len(boards) == 8
    assert len(set(boards)) == 8
    for packed in boards:
        assert canonical(packed) == packed
        assert sorted(unpack_cells(packed)) == [0] * 7 + [1, 1]
        assert tile_total(packed) == 4


def test_move_label():
    assert [move.label for move in (Move.LEFT, Move.RIGHT, Move.UP, Move.DOWN)] == [
        "L", "R", "U", "D"
    ]


@pytest.mark.parametrize("move", MOVE_ORDER)
def test_moves_preserve_tile_total(move):
    """Test merging keeps the sum of tile values."""
    board = Board.create([1, 1, 2, 2, 2, 0, 3, 0, 3])
    result = board.do_move(move)
    assert result is not None
    assert tile_total(result.packed) == tile_total(board.packed)
