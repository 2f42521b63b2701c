"""
Symmetries of the square and canonical board orientation.

The 8 elements of the dihedral group act on the grid as permutations of
cell indices. A board's canonical form is the smallest packed integer
among its 8 images.
"""

from typing import Dict, List, Tuple

from .packing import BITS_PER_CELL, CELL_MASK, NUM_CELLS

# new_cells[i] = old_cells[PERM[i]]
SYMMETRIES: Dict[str, Tuple[int, ...]] = {
    "id": (0, 1, 2, 3, 4, 5, 6, 7, 8),
    "rot90": (6, 3, 0, 7, 4, 1, 8, 5, 2),
    "rot180": (8, 7, 6, 5, 4, 3, 2, 1, 0),
    "rot270": (2, 5, 8, 1, 4, 7, 0, 3, 6),
    "hflip": (2, 1, 0, 5, 4, 3, 8, 7, 6),
    "vflip": (6, 7, 8, 3, 4, 5, 0, 1, 2),
    "d1": (0, 3, 6, 1, 4, 7, 2, 5, 8),
    "d2": (8, 5, 2, 7, 4, 1, 6, 3, 0),
}

_PERMS = tuple(SYMMETRIES.values())
_SHIFTS = tuple(BITS_PER_CELL * i for i in range(NUM_CELLS))


def transform(packed: int, kind: str) -> int:
    """Apply one named symmetry to a packed board."""
    perm = SYMMETRIES[kind]
    cells = [(packed >> s) & CELL_MASK for s in _SHIFTS]
    out = 0
    for shift, src in zip(_SHIFTS, perm):
        out |= cells[src] << shift
    return out


def transforms(packed: int) -> List[int]:
    """All 8 images of a board, in SYMMETRIES order."""
    cells = [(packed >> s) & CELL_MASK for s in _SHIFTS]
    images = []
    for perm in _PERMS:
        out = 0
        for shift, src in zip(_SHIFTS, perm):
            out |= cells[src] << shift
        images.append(out)
    return images


def canonical(packed: int) -> int:
    """Smallest packed integer among the 8 symmetric images."""
    cells = [(packed >> s) & CELL_MASK for s in _SHIFTS]
    best = packed
    for perm in _PERMS:
        out = 0
        for shift, src in zip(_SHIFTS, perm):
            out |= cells[src] << shift
        if out < best:
            best = out
    return best
