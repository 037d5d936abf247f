"""Grid state for the forest-fire automaton.

The grid is a fixed-size, row-major ``int8`` array of :class:`CellState`
values indexed as ``cells[y, x]``. Its outer ring is a permanent empty
boundary: every tick re-asserts it before fire spreads, so neighbour
lookups around interior cells never leave the grid.
"""

from __future__ import annotations

import logging
import random
from typing import Iterator

import numpy as np

from .cell import CellState, Coordinate, MOORE_OFFSETS

logger = logging.getLogger(__name__)

MIN_SIZE = 3


class GridIndexError(IndexError):
    """A coordinate escaped the grid (or the interior, where required).

    This is a programming error in the caller: coordinates are never
    clamped because a clamped write would corrupt the empty boundary.
    """


class Grid:
    """Authoritative cell buffer of the simulation.

    Attributes:
        width: Number of columns (``W``).
        height: Number of rows (``H``).
    """

    def __init__(self, width: int, height: int):
        """
        Create a fully empty grid.

        Args:
            width: Number of columns, at least 3.
            height: Number of rows, at least 3.

        Raises:
            ValueError: If either dimension leaves no interior.
        """
        if width < MIN_SIZE or height < MIN_SIZE:
            raise ValueError(
                f"Grid must be at least {MIN_SIZE}x{MIN_SIZE}, got {width}x{height}"
            )
        self.width = int(width)
        self.height = int(height)
        self._cells = np.zeros((self.height, self.width), dtype=np.int8)

    @property
    def shape(self) -> tuple[int, int]:
        """Keep in mind this is (rows, cols), like ``np.ndarray.shape``."""
        return self._cells.shape

    def _check(self, x: int, y: int) -> None:
        # numpy would silently wrap negative indices
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise GridIndexError(
                f"Coordinate ({x}, {y}) outside {self.width}x{self.height} grid"
            )

    def cell_at(self, x: int, y: int) -> CellState:
        self._check(x, y)
        return CellState(int(self._cells[y, x]))

    def set_cell(self, x: int, y: int, state: CellState) -> None:
        self._check(x, y)
        self._cells[y, x] = state

    def is_interior(self, x: int, y: int) -> bool:
        return 1 <= x < self.width - 1 and 1 <= y < self.height - 1

    def neighbors(self, x: int, y: int) -> tuple[Coordinate, ...]:
        """
        Return the 8 Moore neighbours of an interior cell.

        Raises:
            GridIndexError: If ``(x, y)`` is not an interior coordinate,
                since one of its neighbours would lie outside the grid.
        """
        if not self.is_interior(x, y):
            raise GridIndexError(
                f"Neighbours requested for non-interior cell ({x}, {y}) "
                f"of {self.width}x{self.height} grid"
            )
        return tuple(Coordinate(x + dx, y + dy) for dx, dy in MOORE_OFFSETS)

    def interior(self) -> Iterator[Coordinate]:
        """Iterate interior coordinates in row-major order."""
        for y in range(1, self.height - 1):
            for x in range(1, self.width - 1):
                yield Coordinate(x, y)

    def random_interior(self, rng: random.Random) -> Coordinate:
        return Coordinate(rng.randrange(1, self.width - 1), rng.randrange(1, self.height - 1))

    def random_coordinate(self, rng: random.Random) -> Coordinate:
        return Coordinate(rng.randrange(self.width), rng.randrange(self.height))

    def enforce_boundary(self) -> None:
        """Force the outer ring to Empty. Idempotent."""
        self._cells[0, :] = CellState.Empty
        self._cells[-1, :] = CellState.Empty
        self._cells[:, 0] = CellState.Empty
        self._cells[:, -1] = CellState.Empty

    def random_seed(self, density: float, rng: random.Random) -> int:
        """
        Plant trees on interior cells independently with probability ``density``.

        Existing state is kept where no tree is planted.

        Returns:
            Number of cells set to Tree.
        """
        if not 0.0 <= density <= 1.0:
            raise ValueError(f"density must be within [0, 1], got {density}")
        planted = 0
        for x, y in self.interior():
            if rng.random() < density:
                self._cells[y, x] = CellState.Tree
                planted += 1
        logger.debug(f"Seeded {planted} trees at density {density:.2f}")
        return planted

    def clear(self) -> None:
        self._cells.fill(CellState.Empty)

    def counts(self) -> dict[CellState, int]:
        """Number of cells in each state."""
        totals = np.bincount(self._cells.ravel(), minlength=len(CellState))
        return {state: int(totals[state]) for state in CellState}

    def snapshot(self) -> np.ndarray:
        """Return a read-only copy of the cell buffer (rows x cols)."""
        copy = self._cells.copy()
        copy.flags.writeable = False
        return copy

    def copy_into(self, out: np.ndarray) -> None:
        """Copy the cell buffer into a caller-owned array of the same shape."""
        np.copyto(out, self._cells)

    def __repr__(self) -> str:
        counts = self.counts()
        return (
            f"Grid({self.width}x{self.height}, trees={counts[CellState.Tree]}, "
            f"fire={counts[CellState.Fire]})"
        )
