#!/usr/bin/env python3
"""Headless runner for the forest-fire simulation (no Pygame)."""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

# Add the src directory to the Python path
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from forest_fire import CellState, ForestFireModel, SimulationConfig

GLYPHS = {
    CellState.Empty: "⬛",
    CellState.Tree: "🌲",
    CellState.Fire: "🔥",
}


def print_grid(cells: np.ndarray) -> None:
    """
    Print a simple representation of a grid snapshot to console.

    Args:
        cells: Snapshot returned by ``ForestFireModel.snapshot()``
    """
    grid_str = ""
    for row in cells:
        grid_str += "".join(GLYPHS[CellState(int(c))] for c in row)
        grid_str += "\n"
    print(grid_str)


def main():
    """Run the forest-fire simulation."""
    parser = argparse.ArgumentParser(description=__doc__)
    SimulationConfig.add_arguments(parser)
    parser.add_argument("--ticks", type=int, default=1000,
                        help="number of ticks to run (default: %(default)s)")
    parser.add_argument("--show", action="store_true",
                        help="print the grid after every reported tick")
    parser.add_argument("--report-every", type=int, default=100,
                        help="ticks between progress lines (default: %(default)s)")
    parser.add_argument("--plot", type=Path, default=None,
                        help="save a population plot to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        config = SimulationConfig.from_namespace(args)
    except ValueError as exc:
        parser.error(str(exc))

    print("--- CREATING MODEL ---")
    model = ForestFireModel(config)
    if args.show:
        print_grid(model.snapshot())

    # Main simulation loop
    for _ in range(args.ticks):
        model.step()
        stats = model.get_stats()
        if stats.lightning is not None:
            print(f"Lightning struck {stats.lightning} at tick {stats.tick}")
        if args.report_every and stats.tick % args.report_every == 0:
            print(f"--- TICK {stats.tick}: trees={stats.trees} fire={stats.fire} ---")
            if args.show:
                print_grid(model.snapshot())

    print(f"\nLightning strikes: {model.history.lightning_strikes}")

    if args.plot is not None:
        from visualization.plots import plot_population

        fig = plot_population(model.history)
        fig.savefig(args.plot)
        print(f"Population plot written to {args.plot}")


if __name__ == "__main__":
    main()
