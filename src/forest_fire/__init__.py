"""
Forest Fire Cellular Automaton.

Trees spawn at random, lightning ignites them, fire spreads to adjacent
trees one ring per tick and burns out, leaving empty ground. A simulation
thread advances the grid at a fixed rate while a view thread samples it.
"""

from .cell import CellState, Coordinate
from .channel import SharedGrid
from .config import SimulationConfig
from .driver import SimulationDriver
from .grid import Grid, GridIndexError
from .model import ForestFireModel
from .rules import FullScanRules, TickReport, UpdateRules
from .stats import GridStats, StatsHistory

__version__ = "0.1.0"

__all__ = [
    "CellState",
    "Coordinate",
    "Grid",
    "GridIndexError",
    "UpdateRules",
    "FullScanRules",
    "TickReport",
    "SharedGrid",
    "SimulationConfig",
    "ForestFireModel",
    "SimulationDriver",
    "GridStats",
    "StatsHistory",
]
