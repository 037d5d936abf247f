"""Per-tick population statistics."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from .cell import Coordinate


@dataclass(frozen=True)
class GridStats:
    """Cell counts after a tick, plus what the tick did."""

    tick: int
    empty: int
    trees: int
    fire: int
    frontier: int
    ignitions: int = 0
    lightning: Optional[Coordinate] = None


class StatsHistory:
    """Bounded record of :class:`GridStats`, oldest entries dropped first."""

    def __init__(self, maxlen: int = 10_000):
        if maxlen < 1:
            raise ValueError(f"maxlen must be positive, got {maxlen}")
        self._entries: deque[GridStats] = deque(maxlen=maxlen)

    def append(self, stats: GridStats) -> None:
        self._entries.append(stats)

    def clear(self) -> None:
        self._entries.clear()

    @property
    def latest(self) -> Optional[GridStats]:
        return self._entries[-1] if self._entries else None

    @property
    def lightning_strikes(self) -> int:
        return sum(1 for s in self._entries if s.lightning is not None)

    def as_arrays(self) -> dict[str, np.ndarray]:
        """Columns ``tick``, ``trees`` and ``fire`` as integer arrays."""
        return {
            "tick": np.fromiter((s.tick for s in self._entries), dtype=np.int64, count=len(self)),
            "trees": np.fromiter((s.trees for s in self._entries), dtype=np.int64, count=len(self)),
            "fire": np.fromiter((s.fire for s in self._entries), dtype=np.int64, count=len(self)),
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[GridStats]:
        return iter(self._entries)
