"""Visualization package for the forest-fire simulation using Pygame."""

from .colors import *
from .renderer import GridRenderer
from .ui import InfoPanel, SpeedSlider
from .plots import plot_population

__all__ = [
    # Renderer and UI components
    'GridRenderer',
    'InfoPanel',
    'SpeedSlider',
    'plot_population',

    # Cell state colors
    'EMPTY_COLOR',
    'TREE_COLOR',
    'FIRE_COLOR',
    'CELL_PALETTE',

    # UI colors
    'BLACK',
    'WHITE',
    'PANEL_COLOR',

    # Default parameters
    'DEFAULT_CELL_SIZE',
    'DEFAULT_FPS',
    'PANEL_HEIGHT',

    # Tick rate limits
    'MIN_TPS',
    'MAX_TPS',
]
