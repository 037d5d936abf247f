"""Forest-fire simulation model."""

import logging
from typing import Optional

import numpy as np
from mesa import Model

from .cell import CellState
from .channel import SharedGrid
from .config import SimulationConfig
from .grid import Grid
from .rules import TickReport, UpdateRules
from .stats import GridStats, StatsHistory

logger = logging.getLogger(__name__)


class ForestFireModel(Model):
    """Main model for the forest-fire cellular automaton.

    Owns the shared grid, the update rules and the per-tick statistics.
    Randomness comes from the mesa model's seeded ``self.random``, so two
    models built from the same config and seed evolve identically.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        rules: Optional[UpdateRules] = None,
        history_size: int = 10_000,
    ):
        """
        Initialize the model and plant the initial forest.

        Args:
            config: Startup constants; defaults to ``SimulationConfig()``.
            rules: Update rule engine; defaults to the frontier-list rules
                built from ``config``.
            history_size: Number of per-tick statistics to keep.
        """
        self.config = config if config is not None else SimulationConfig()
        super().__init__(seed=self.config.seed)

        self.channel = SharedGrid(Grid(self.config.width, self.config.height))
        self.rules = rules if rules is not None else UpdateRules(
            tree_spawn_rate=self.config.tree_spawn_rate,
            lightning_spawn_rate=self.config.lightning_spawn_rate,
        )
        self.history = StatsHistory(maxlen=history_size)
        self.last_report: Optional[TickReport] = None

        planted = self.seed_forest()
        logger.info(
            f"Created {self.config.width}x{self.config.height} forest "
            f"(seed={self.config.seed}, trees={planted})"
        )

    @property
    def width(self) -> int:
        return self.channel.width

    @property
    def height(self) -> int:
        return self.channel.height

    def seed_forest(self) -> int:
        """Plant the initial trees and assert the empty boundary."""
        with self.channel.write() as grid:
            return self._plant_forest(grid)

    def _plant_forest(self, grid: Grid) -> int:
        # caller holds the write lock
        planted = grid.random_seed(self.config.initial_density, self.random)
        grid.enforce_boundary()
        self.history.append(self._collect(grid))
        return planted

    def step(self) -> None:
        """
        Execute one tick of the simulation.

        The grid stays locked for the whole tick so a reader never sees a
        half-applied update. The outcome is kept in ``last_report``.
        """
        with self.channel.write() as grid:
            report = self.rules.tick(grid, self.random)
            self.last_report = report
            self.history.append(self._collect(grid, report))

    def ignite(self, x: int, y: int) -> bool:
        """
        Set the tree at ``(x, y)`` on fire; it burns during the next tick.

        Returns:
            False (and changes nothing) if the cell is not a tree.

        Raises:
            GridIndexError: If ``(x, y)`` lies outside the grid.
        """
        with self.channel.write() as grid:
            lit = self.rules.ignite(grid, x, y)
        if lit:
            logger.debug(f"Manual ignition at ({x}, {y})")
        return lit

    def reset(self) -> None:
        """
        Clear the grid and rule state, then plant a fresh forest.

        Runs under a single lock hold, so no tick or reader ever sees the
        cleared grid.
        """
        with self.channel.write() as grid:
            grid.clear()
            self.rules.reset()
            self.history.clear()
            self.last_report = None
            planted = self._plant_forest(grid)
        logger.info(f"Model reset ({planted} trees)")

    def snapshot(self) -> np.ndarray:
        return self.channel.snapshot()

    def get_stats(self) -> GridStats:
        """Statistics of the most recently completed tick."""
        latest = self.history.latest
        if latest is not None:
            return latest
        with self.channel.write() as grid:
            return self._collect(grid)

    def _collect(self, grid: Grid, report: Optional[TickReport] = None) -> GridStats:
        counts = grid.counts()
        return GridStats(
            tick=self.rules.tick_count,
            empty=counts[CellState.Empty],
            trees=counts[CellState.Tree],
            fire=counts[CellState.Fire],
            frontier=len(self.rules.frontier),
            ignitions=report.ignited if report else 0,
            lightning=report.lightning if report else None,
        )
