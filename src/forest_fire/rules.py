"""Update rule engine: one discrete tick of the forest-fire automaton.

A tick applies, in this order:

1. tree spawn - ``tree_spawn_rate`` attempts on random interior cells,
   an occupied target is dropped without retry;
2. lightning - once the lightning clock reaches ``lightning_spawn_rate``
   a random cell is struck; a tree catches fire and the clock resets,
   anything else is a miss and the strike is retried next tick;
3. boundary enforcement;
4. fire spread - every cell burning at the start of the tick ignites its
   Moore neighbours that are trees;
5. extinguish - every cell burning at the start of the tick becomes empty.

Cells ignited during a tick (by spread or lightning) form the frontier of
the next tick, so fire advances exactly one ring per tick and burns for
exactly one tick.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .cell import CellState, Coordinate, MOORE_OFFSETS
from .grid import Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickReport:
    """What happened during one tick."""
    tick: int
    spawned: int
    lightning: Optional[Coordinate]
    ignited: int
    extinguished: int


class UpdateRules:
    """Frontier-list implementation of the tick.

    Only the neighbours of the current frontier are examined, so a tick
    costs O(frontier) plus the spawn attempts, independent of grid size.

    Attributes:
        tree_spawn_rate: Spawn attempts per tick.
        lightning_spawn_rate: Ticks between lightning attempts.
        frontier: Coordinates burning at the start of the next tick.
        lightning_clock: Ticks since the last successful lightning strike.
        tick_count: Number of ticks applied so far.
    """

    def __init__(self, tree_spawn_rate: int, lightning_spawn_rate: int):
        if tree_spawn_rate < 0:
            raise ValueError(f"tree_spawn_rate must be >= 0, got {tree_spawn_rate}")
        if lightning_spawn_rate < 1:
            raise ValueError(f"lightning_spawn_rate must be >= 1, got {lightning_spawn_rate}")
        self.tree_spawn_rate = int(tree_spawn_rate)
        self.lightning_spawn_rate = int(lightning_spawn_rate)
        self.frontier: list[Coordinate] = []
        self.lightning_clock = 0
        self.tick_count = 0

    def reset(self) -> None:
        self.frontier = []
        self.lightning_clock = 0
        self.tick_count = 0

    def ignite(self, grid: Grid, x: int, y: int) -> bool:
        """
        Set a tree on fire outside of the tick.

        The cell burns during the next tick like any other frontier cell.

        Returns:
            True if the cell was a tree and is now burning, False otherwise.

        Raises:
            GridIndexError: If ``(x, y)`` lies outside the grid.
        """
        if grid.cell_at(x, y) != CellState.Tree:
            return False
        # trees never stand on the boundary, so this is an interior cell
        grid.set_cell(x, y, CellState.Fire)
        self.frontier.append(Coordinate(x, y))
        return True

    def tick(self, grid: Grid, rng: random.Random) -> TickReport:
        """Apply one tick to ``grid`` in place and return what happened."""
        self.tick_count += 1
        burning = self._burning_at_start(grid)

        spawned = self._spawn_trees(grid, rng)
        struck = self._strike_lightning(grid, rng)
        grid.enforce_boundary()
        ignited = self._spread(grid, burning)
        extinguished = self._extinguish(grid, burning)

        self.frontier = ignited
        if struck is not None:
            self.frontier.append(struck)

        if ignited or extinguished:
            logger.debug(
                f"Tick {self.tick_count}: {len(ignited)} ignited, {extinguished} extinguished"
            )
        return TickReport(
            tick=self.tick_count,
            spawned=spawned,
            lightning=struck,
            ignited=len(ignited),
            extinguished=extinguished,
        )

    def _spawn_trees(self, grid: Grid, rng: random.Random) -> int:
        spawned = 0
        for _ in range(self.tree_spawn_rate):
            x, y = grid.random_interior(rng)
            if grid.cell_at(x, y) == CellState.Empty:
                grid.set_cell(x, y, CellState.Tree)
                spawned += 1
        return spawned

    def _strike_lightning(self, grid: Grid, rng: random.Random) -> Optional[Coordinate]:
        self.lightning_clock += 1
        if self.lightning_clock < self.lightning_spawn_rate:
            return None

        target = grid.random_coordinate(rng)
        if grid.cell_at(*target) != CellState.Tree:
            # no fuel: keep the clock running so the next tick tries again
            logger.debug(f"Lightning at {target} missed")
            return None

        grid.set_cell(*target, CellState.Fire)
        self.lightning_clock = 0
        logger.debug(f"Lightning ignited {target}")
        return target

    def _burning_at_start(self, grid: Grid):
        # copy: ignite() between ticks appends to the live list
        return list(self.frontier)

    def _spread(self, grid: Grid, burning: Sequence[Coordinate]) -> list[Coordinate]:
        # Reads go through the old frontier only; newly ignited cells are
        # collected separately and never consulted during this pass.
        ignited: list[Coordinate] = []
        for x, y in burning:
            for neighbour in grid.neighbors(x, y):
                if grid.cell_at(*neighbour) == CellState.Tree:
                    grid.set_cell(*neighbour, CellState.Fire)
                    ignited.append(neighbour)
        return ignited

    def _extinguish(self, grid: Grid, burning: Sequence[Coordinate]) -> int:
        for x, y in burning:
            grid.set_cell(x, y, CellState.Empty)
        return len(burning)


def _moore_exposed(mask: np.ndarray) -> np.ndarray:
    """Cells with at least one Moore neighbour set in ``mask`` (no wraparound)."""
    h, w = mask.shape
    padded = np.pad(mask, 1)
    exposed = np.zeros_like(mask)
    for dx, dy in MOORE_OFFSETS:
        exposed |= padded[1 + dy:1 + dy + h, 1 + dx:1 + dx + w]
    return exposed


class FullScanRules(UpdateRules):
    """Reference implementation that re-derives the fire set every tick.

    Compares the grid against a snapshot taken at the start of the tick to
    tell cells about to burn out from freshly ignited ones. O(W*H) per
    tick; kept as a test oracle for :class:`UpdateRules`.
    """

    def _burning_at_start(self, grid: Grid) -> np.ndarray:
        return grid.snapshot() == CellState.Fire

    def _spread(self, grid: Grid, burning: np.ndarray) -> list[Coordinate]:
        current = grid.snapshot()
        catches = (current == CellState.Tree) & _moore_exposed(burning)
        ys, xs = np.nonzero(catches)
        ignited = [Coordinate(int(x), int(y)) for y, x in zip(ys, xs)]
        for x, y in ignited:
            grid.set_cell(x, y, CellState.Fire)
        return ignited

    def _extinguish(self, grid: Grid, burning: np.ndarray) -> int:
        ys, xs = np.nonzero(burning)
        for y, x in zip(ys, xs):
            grid.set_cell(int(x), int(y), CellState.Empty)
        return int(len(ys))
