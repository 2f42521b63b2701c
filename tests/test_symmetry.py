"""Tests for symmetry transforms and canonical orientation."""

import random

from puzzle512_solver.core import Board, canonical, pack_cells, transforms
from puzzle512_solver.core.symmetry import SYMMETRIES, transform


def _random_boards(count=200, seed=7):
    rng = random.Random(seed)
    for _ in range(count):
        yield pack_cells([rng.choice([0, 0, 0, 1, 2, 3, 4, 9, 15]) for _ in range(9)])


def test_rotate_clockwise():
    """Test the quarter turn moves the left column to the top row."""
    x = pack_cells([
        1, 2, 3,
        4, 5, 6,
        7, 8, 9,
    ])
    y = pack_cells([
        7, 4, 1,
        8, 5, 2,
        9, 6, 3,
    ])
    assert transform(x, "rot90") == y


def test_reflect_horizontal():
    """Test the mirror swaps left and right columns."""
    x = pack_cells([
        1, 2, 3,
        4, 5, 6,
        7, 8, 9,
    ])
    y = pack_cells([
        3, 2, 1,
        6, 5, 4,
        9, 8, 7,
    ])
    assert transform(x, "hflip") == y


def test_transforms_are_distinct_permutations():
    """Test the 8 images of an asymmetric board are all different."""
    board = pack_cells([1, 2, 3, 4, 5, 6, 7, 8, 9])
    images = transforms(board)

    assert len(images) == len(SYMMETRIES) == 8
    assert len(set(images)) == 8
    assert images[0] == board


def test_canonical_is_minimum():
    """Test canonical form is the smallest image."""
    for board in _random_boards():
        assert canonical(board) == min(transforms(board))


def test_canonical_idempotent():
    """Test canonicalizing twice changes nothing."""
    for board in _random_boards():
        once = canonical(board)
        assert canonical(once) == once


def test_canonical_symmetry_closure():
    """Test every symmetric image shares one canonical form."""
    for board in _random_boards():
        expected = canonical(board)
        for image in transforms(board):
            assert canonical(image) == expected


def test_board_canonical_orientation():
    """Test the Board wrapper agrees with the packed helpers."""
    board = Board.create([0, 0, 1, 0, 0, 0, 0, 0, 0])

    assert board.canonical_orientation() == Board.create([1, 0, 0, 0, 0, 0, 0, 0, 0])
    assert len(board.transforms()) == 8
    assert min(board.transforms()) == board.canonical_orientation()
