"""Simulation configuration and the shared command line."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, fields
from typing import Optional, Sequence

# ============================================================================
# DEFAULT SIMULATION PARAMETERS
# ============================================================================

DEFAULT_WIDTH: int = 320                # Grid width in cells
DEFAULT_HEIGHT: int = 180               # Grid height in cells
TREE_SPAWN_RATE: int = 10               # Spawn attempts per tick
LIGHTNING_SPAWN_RATE: int = 150         # Ticks between lightning attempts
SIM_SPEED: float = 200.0                # Target ticks per second
INITIAL_DENSITY: float = 0.5            # Tree probability per interior cell

# ============================================================================
# TICK RATE LIMITS (runtime adjustable from the view)
# ============================================================================

MIN_TICK_RATE: float = 1.0
MAX_TICK_RATE: float = 1000.0


@dataclass(frozen=True)
class SimulationConfig:
    """Startup constants of one simulation run.

    Attributes:
        width: Grid width in cells, including the empty boundary ring.
        height: Grid height in cells, including the empty boundary ring.
        tree_spawn_rate: Tree spawn attempts per tick.
        lightning_spawn_rate: Ticks between lightning attempts.
        tick_rate: Target ticks per second of the simulation driver.
        initial_density: Probability of a tree on each interior cell at startup.
        seed: Seed for the random source, None for a fresh one.
    """
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    tree_spawn_rate: int = TREE_SPAWN_RATE
    lightning_spawn_rate: int = LIGHTNING_SPAWN_RATE
    tick_rate: float = SIM_SPEED
    initial_density: float = INITIAL_DENSITY
    seed: Optional[int] = None

    def __post_init__(self):
        if self.width < 3:
            raise ValueError(f"width must be at least 3, got {self.width}")
        if self.height < 3:
            raise ValueError(f"height must be at least 3, got {self.height}")
        if self.tree_spawn_rate < 0:
            raise ValueError(f"tree_spawn_rate must be >= 0, got {self.tree_spawn_rate}")
        if self.lightning_spawn_rate < 1:
            raise ValueError(
                f"lightning_spawn_rate must be >= 1, got {self.lightning_spawn_rate}"
            )
        if self.tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {self.tick_rate}")
        if not 0.0 <= self.initial_density <= 1.0:
            raise ValueError(
                f"initial_density must be within [0, 1], got {self.initial_density}"
            )

    @property
    def tick_period(self) -> float:
        """Seconds between tick starts at the target rate."""
        return 1.0 / self.tick_rate

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
        """Register the simulation options on ``parser``."""
        group = parser.add_argument_group("simulation")
        group.add_argument("--width", type=int, default=DEFAULT_WIDTH,
                           help="grid width in cells (default: %(default)s)")
        group.add_argument("--height", type=int, default=DEFAULT_HEIGHT,
                           help="grid height in cells (default: %(default)s)")
        group.add_argument("--tree-spawn-rate", type=int, default=TREE_SPAWN_RATE,
                           help="tree spawn attempts per tick (default: %(default)s)")
        group.add_argument("--lightning-spawn-rate", type=int, default=LIGHTNING_SPAWN_RATE,
                           help="ticks between lightning attempts (default: %(default)s)")
        group.add_argument("--tick-rate", type=float, default=SIM_SPEED,
                           help="target ticks per second (default: %(default)s)")
        group.add_argument("--density", dest="initial_density", type=float,
                           default=INITIAL_DENSITY,
                           help="initial tree density (default: %(default)s)")
        group.add_argument("--seed", type=int, default=None,
                           help="random seed for reproducible runs")
        return parser

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> "SimulationConfig":
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in vars(args).items() if k in names})

    @classmethod
    def from_args(cls, argv: Optional[Sequence[str]] = None) -> "SimulationConfig":
        """Build a config from a command line containing only simulation options."""
        parser = cls.add_arguments(argparse.ArgumentParser(add_help=False))
        return cls.from_namespace(parser.parse_args(argv))
