"""
Bit-packed board representation.

A 3x3 board is stored as a single unsigned integer:
- 4 bits per cell (exponent 0-15, 0 = empty)
- Cell index = x + 3*y (row-major)
- Total: 36 bits, fits in a u64

The packed integer doubles as the set/dict key for the solver, so boards
are never expanded into structured records while the state space is built.
"""

from typing import List, Sequence

SIZE = 3
NUM_CELLS = SIZE * SIZE
BITS_PER_CELL = 4
CELL_MASK = (1 << BITS_PER_CELL) - 1
MAX_EXPONENT = CELL_MASK


def cell_index(x: int, y: int) -> int:
    """Row-major index of column x, row y."""
    return x + SIZE * y


def get_cell(packed: int, index: int) -> int:
    """Exponent stored at a cell index."""
    return (packed >> (BITS_PER_CELL * index)) & CELL_MASK


def set_cell(packed: int, index: int, value: int) -> int:
    """Return a new packed board with one cell overwritten."""
    shift = BITS_PER_CELL * index
    return (packed & ~(CELL_MASK << shift)) | ((value & CELL_MASK) << shift)


def pack_cells(cells: Sequence[int]) -> int:
    """
    Pack 9 row-major exponents into an integer.

    Args:
        cells: Exponents, one per cell

    Returns:
        Packed board
    """
    if len(cells) != NUM_CELLS:
        raise ValueError(f"Board needs {NUM_CELLS} cells, got {len(cells)}")

    packed = 0
    for index, value in enumerate(cells):
        if not 0 <= value <= MAX_EXPONENT:
            raise ValueError(
                f"Cell {index} holds exponent {value} (must be 0-{MAX_EXPONENT})"
            )
        packed |= value << (BITS_PER_CELL * index)
    return packed


def unpack_cells(packed: int) -> List[int]:
    """Unpack to a list of 9 row-major exponents."""
    return [(packed >> (BITS_PER_CELL * i)) & CELL_MASK for i in range(NUM_CELLS)]


def exponent_sum(packed: int) -> int:
    """Sum of all cell exponents."""
    total = 0
    while packed:
        total += packed & CELL_MASK
        packed >>= BITS_PER_CELL
    return total


def tile_total(packed: int) -> int:
    """
    Sum of displayed tile values (2^v for each occupied cell).

    Moves preserve this total and every new tile adds 2, so it identifies
    how many turns have been played since the two starting tiles.
    """
    total = 0
    while packed:
        value = packed & CELL_MASK
        if value:
            total += 1 << value
        packed >>= BITS_PER_CELL
    return total

