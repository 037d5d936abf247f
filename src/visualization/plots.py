"""Matplotlib plots of a finished or running simulation's statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import matplotlib.pyplot as plt

from .colors import TREE_COLOR, FIRE_COLOR

if TYPE_CHECKING:
    from forest_fire.stats import StatsHistory


def _mpl_color(color: tuple[int, int, int]) -> tuple[float, float, float]:
    return tuple(c / 255.0 for c in color)


def plot_population(history: "StatsHistory", *, title: Optional[str] = None):
    """Plot tree and fire counts per tick.

    Fire is drawn on a secondary axis since it is usually orders of
    magnitude smaller than the tree population.

    Returns:
        The matplotlib ``Figure``; the caller shows or saves it.
    """
    columns = history.as_arrays()

    fig, ax_trees = plt.subplots(figsize=(10, 4))
    ax_fire = ax_trees.twinx()

    ax_trees.plot(columns["tick"], columns["trees"], color=_mpl_color(TREE_COLOR), label="trees")
    ax_fire.plot(columns["tick"], columns["fire"], color=_mpl_color(FIRE_COLOR), label="fire", linewidth=0.8)

    ax_trees.set_xlabel("tick")
    ax_trees.set_ylabel("trees")
    ax_fire.set_ylabel("burning cells")
    ax_trees.set_title(title or f"Forest population ({len(history)} ticks)")

    lines = ax_trees.get_lines() + ax_fire.get_lines()
    ax_trees.legend(lines, [line.get_label() for line in lines], loc="upper right")
    fig.tight_layout()
    return fig
