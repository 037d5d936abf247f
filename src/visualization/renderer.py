"""Grid rendering functionality for the forest-fire simulation.

This module provides the GridRenderer class which turns a grid snapshot
into pixels. It only ever sees a local copy of the cells, so all colour
conversion and blitting happens with the simulation lock released.
"""

from typing import Optional

import numpy as np
import pygame

from forest_fire.cell import CellState
from .colors import CELL_PALETTE, BLACK, Color


class GridRenderer:
    """Renders a grid snapshot onto a Pygame surface.

    Each cell is drawn as a ``cell_size`` x ``cell_size`` square coloured
    by its state (Empty black, Tree green, Fire red).

    Attributes:
        cell_size: Size of each cell in pixels.
    """

    def __init__(self, cell_size: int) -> None:
        """Initialize the grid renderer.

        Args:
            cell_size: Size of each cell in pixels.
        """
        if cell_size < 1:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = cell_size

    @staticmethod
    def get_cell_color(state: CellState) -> Color:
        """Get the RGB color for a single cell state."""
        r, g, b = CELL_PALETTE[int(state)]
        return int(r), int(g), int(b)

    @staticmethod
    def to_rgb(cells: np.ndarray) -> np.ndarray:
        """Convert a (rows x cols) state array into a (rows x cols x 3) RGB array."""
        return CELL_PALETTE[cells]

    def draw_base(
        self,
        screen: pygame.Surface,
        cells: np.ndarray,
        offset_x: int = 0,
        offset_y: int = 0,
    ) -> None:
        """Layer 1: grid cells."""
        height, width = cells.shape
        # surfarray is indexed (x, y)
        surface = pygame.surfarray.make_surface(self.to_rgb(cells).transpose(1, 0, 2))
        if self.cell_size != 1:
            surface = pygame.transform.scale(
                surface, (width * self.cell_size, height * self.cell_size)
            )
        screen.blit(surface, (offset_x, offset_y))

    def draw_background(self, screen: pygame.Surface) -> None:
        """Layer 0: plain background."""
        screen.fill(BLACK)

    def pixel_to_cell(
        self,
        px: int,
        py: int,
        width: int,
        height: int,
        offset_x: int = 0,
        offset_y: int = 0,
    ) -> Optional[tuple[int, int]]:
        """Map a window pixel to the grid cell under it, None outside the grid."""
        x = (px - offset_x) // self.cell_size
        y = (py - offset_y) // self.cell_size
        if 0 <= x < width and 0 <= y < height:
            return x, y
        return None
