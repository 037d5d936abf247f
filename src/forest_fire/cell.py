"""Cell states and grid coordinates for the forest-fire automaton."""

from enum import IntEnum
from typing import NamedTuple


class CellState(IntEnum):
    """Possible states of a grid cell.

    Values are stable because the grid stores them in a compact ``int8``
    array and the renderer uses them as palette indices.
    """
    Empty = 0
    Tree = 1
    Fire = 2


class Coordinate(NamedTuple):
    """A 2-D grid position, ``0 <= x < width`` and ``0 <= y < height``."""
    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


# Moore neighbourhood, clockwise from the top-left corner
MOORE_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),  # top left
    (0, -1),   # top
    (1, -1),   # top right
    (1, 0),    # right
    (1, 1),    # down right
    (0, 1),    # down
    (-1, 1),   # down left
    (-1, 0),   # left
)

# Transitions of a single rule phase; one tick can chain Empty -> Tree -> Fire
ALLOWED_TRANSITIONS: frozenset[tuple[CellState, CellState]] = frozenset({
    (CellState.Empty, CellState.Tree),
    (CellState.Tree, CellState.Fire),
    (CellState.Fire, CellState.Empty),
})
