"""Color definitions and constants for the forest-fire visualization.

This module contains all RGB color tuples and default configuration values
used throughout the Pygame visualization.
"""

from typing import Tuple

import numpy as np

from forest_fire.config import MIN_TICK_RATE, MAX_TICK_RATE

# Type alias for RGB color tuples
Color = Tuple[int, int, int]

# ============================================================================
# CELL STATE COLORS
# ============================================================================

EMPTY_COLOR: Color = (0, 0, 0)                      # black (bare ground)
TREE_COLOR: Color = (0, 255, 0)                     # green
FIRE_COLOR: Color = (255, 0, 0)                     # red (on fire)

# Indexed by CellState value
CELL_PALETTE: np.ndarray = np.array(
    [EMPTY_COLOR, TREE_COLOR, FIRE_COLOR], dtype=np.uint8
)

# ============================================================================
# UI COLORS
# ============================================================================

BLACK: Color = (0, 0, 0)                            # Background
WHITE: Color = (255, 255, 255)                      # Text
PANEL_COLOR: Color = (40, 10, 10)                   # Info panel background

# ============================================================================
# DEFAULT VIEW PARAMETERS
# ============================================================================

DEFAULT_CELL_SIZE: int = 4                          # Cell size in pixels
DEFAULT_FPS: int = 30                               # View frames per second
PANEL_HEIGHT: int = 90                              # Info panel height in pixels

# ============================================================================
# TICK RATE SLIDER LIMITS
# ============================================================================

MIN_TPS: int = int(MIN_TICK_RATE)                   # Slowest simulation speed
MAX_TPS: int = int(MAX_TICK_RATE)                   # Fastest simulation speed
