"""Thread-safe ownership wrapper around the simulation grid.

One writer (the simulation thread) holds the lock for a whole tick; any
number of readers take it only long enough to copy the cell buffer out.
Nothing slow (rendering, sleeping) ever happens under the lock.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

import numpy as np

from .grid import Grid


class SharedGrid:
    """Mutual-exclusion channel exposing a :class:`Grid` to threads.

    Attributes:
        width: Grid width, fixed for the lifetime of the channel.
        height: Grid height, fixed for the lifetime of the channel.
    """

    def __init__(self, grid: Grid):
        self._grid = grid
        self._lock = threading.Lock()
        self.width = grid.width
        self.height = grid.height

    @contextmanager
    def write(self) -> Iterator[Grid]:
        """Exclusive access for the duration of the ``with`` block."""
        with self._lock:
            yield self._grid

    def snapshot(self) -> np.ndarray:
        """Read-only copy of the cells taken under the lock."""
        with self._lock:
            return self._grid.snapshot()

    def copy_into(self, out: np.ndarray) -> None:
        """Copy the cells into a caller-owned (rows x cols) ``int8`` array."""
        with self._lock:
            self._grid.copy_into(out)

    def new_buffer(self) -> np.ndarray:
        """Allocate an array suitable for :meth:`copy_into`."""
        return np.zeros((self.height, self.width), dtype=np.int8)
