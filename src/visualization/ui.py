"""UI components for the forest-fire visualization.

This module contains the info panel showing simulation status and the
speed slider controlling the simulation's target tick rate.
"""

from typing import TYPE_CHECKING, Optional

import pygame

from .colors import WHITE, PANEL_COLOR

if TYPE_CHECKING:
    from forest_fire.stats import GridStats


class InfoPanel:
    """Displays simulation information below the grid.

    Shows current tick, cell counts, pause status, keyboard shortcuts,
    and the current tick rate.

    Attributes:
        font: Main font for primary information.
        small_font: Smaller font for secondary information.
    """

    PADDING = 12

    def __init__(self) -> None:
        """Initialize the info panel with fonts."""
        self.font = pygame.font.Font(None, 28)
        self.small_font = pygame.font.Font(None, 22)

    def draw(
        self,
        screen: pygame.Surface,
        stats: "GridStats",
        paused: bool,
        tick_rate: float,
        top: int,
        window_width: int,
        panel_height: int,
    ) -> None:
        """Draw the panel block starting at ``top``."""
        pygame.draw.rect(screen, PANEL_COLOR, (0, top, window_width, panel_height))
        x = self.PADDING
        y = top + self.PADDING

        tick_text = self.font.render(f"Tick: {stats.tick}", True, WHITE)
        screen.blit(tick_text, (x, y))

        status = "PAUSED" if paused else "RUNNING"
        status_text = self.font.render(status, True, WHITE)
        screen.blit(status_text, (window_width // 2 - status_text.get_width() // 2, y))

        counts = self.small_font.render(
            f"Trees: {stats.trees}   Fire: {stats.fire}   Empty: {stats.empty}",
            True,
            WHITE,
        )
        screen.blit(counts, (x, y + 28))

        speed = self.small_font.render(f"Speed: {tick_rate:.0f} ticks/s", True, WHITE)
        screen.blit(speed, (x, y + 50))

        help_lines = [
            "SPACE = Pause / Resume",
            "N = Step   R = Reset",
            "Click = Ignite   ESC = Quit",
        ]
        for i, line in enumerate(help_lines):
            surf = self.small_font.render(line, True, WHITE)
            screen.blit(surf, (window_width - surf.get_width() - self.PADDING, y + i * 22))


class SpeedSlider:
    """Interactive slider for controlling simulation speed.

    Allows the user to adjust the target tick rate by clicking and
    dragging a flame-shaped handle along a horizontal bar.

    Attributes:
        x: X coordinate of the slider's left edge.
        y: Y coordinate of the slider's top edge.
        width: Width of the slider bar in pixels.
        height: Height of the slider bar in pixels.
        min_val: Minimum value (ticks per second).
        max_val: Maximum value (ticks per second).
    """

    def __init__(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        min_val: int,
        max_val: int
    ) -> None:
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.min_val = min_val
        self.max_val = max_val

    @staticmethod
    def draw_fire_icon(screen, x, y, scale=1.0):
        """Draw small fire-shaped icon centered at (x, y)."""
        pts = [
            (x, y - 12 * scale),
            (x + 6 * scale, y - 4 * scale),
            (x + 4 * scale, y + 6 * scale),
            (x, y + 10 * scale),
            (x - 4 * scale, y + 6 * scale),
            (x - 6 * scale, y - 4 * scale)
        ]

        pygame.draw.polygon(screen, (255, 80, 0), pts)       # main flame
        pygame.draw.polygon(screen, (255, 150, 0), pts, 2)   # outline

    def draw(self, screen: pygame.Surface, current_val: float) -> None:
        """Draw the slider bar with the fire icon as handle."""
        bar_rect = pygame.Rect(self.x, self.y, self.width, self.height)
        pygame.draw.rect(screen, (20, 20, 20), bar_rect, border_radius=6)
        pygame.draw.rect(screen, (70, 70, 70), bar_rect, 2, border_radius=6)

        ratio = (current_val - self.min_val) / (self.max_val - self.min_val)
        ratio = max(0.0, min(1.0, ratio))
        handle_x = self.x + int(ratio * self.width)
        handle_y = self.y + self.height // 2
        self.draw_fire_icon(screen, handle_x, handle_y, scale=1.0)

    def handle_click(self, mouse_x: int, mouse_y: int) -> Optional[int]:
        """Value under the mouse, used for both click and drag; None if missed."""
        # easier grab area (more forgiving)
        grab_margin = 20
        if not (self.x - grab_margin <= mouse_x <= self.x + self.width + grab_margin):
            return None
        if not (self.y - grab_margin <= mouse_y <= self.y + self.height + grab_margin):
            return None

        ratio = (mouse_x - self.x) / self.width
        new_val = self.min_val + ratio * (self.max_val - self.min_val)

        return max(self.min_val, min(self.max_val, int(new_val)))
