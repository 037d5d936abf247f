#!/usr/bin/env python3
"""Pygame visualization launcher for the forest-fire simulation.

The simulation runs on a background thread at its own tick rate; this
script is the view thread. Every frame it copies the grid out under the
lock, releases it, and only then converts and draws the copy.

Usage:
    python scripts/pygame_run.py [--width 320 --height 180 --cell-size 4 ...]
"""

import argparse
import logging
import sys
import threading
from pathlib import Path
from typing import Optional, Sequence

import pygame

# Add the src directory to the Python path
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from forest_fire import ForestFireModel, SimulationConfig, SimulationDriver

from visualization import (
    GridRenderer,
    InfoPanel,
    SpeedSlider,
    DEFAULT_CELL_SIZE,
    DEFAULT_FPS,
    PANEL_HEIGHT,
    MIN_TPS,
    MAX_TPS,
)

logger = logging.getLogger(__name__)


class SimulationRunner:
    """Main view loop with Pygame visualization.

    Handles event processing and drawing, and forwards pause, step, reset
    and quit requests to the simulation driver running on its own thread.

    Attributes:
        model: The forest-fire simulation model.
        driver: Background tick loop advancing ``model``.
        cancel: Cancellation event shared with the driver.
        screen: Pygame display surface.
        clock: Pygame clock for frame pacing.
        renderer: Grid renderer for drawing cells.
        info_panel: UI panel for displaying simulation info.
        slider: Tick rate control slider.
        dragging_slider: Whether the user is dragging the speed slider.
    """

    def __init__(self, config: SimulationConfig, cell_size: int, fps: int) -> None:
        """Initialize the simulation runner.

        Args:
            config: Simulation startup constants.
            cell_size: Size of each cell in pixels.
            fps: View frames per second.
        """
        self.grid_width = config.width
        self.grid_height = config.height
        self.cell_size = cell_size
        self.fps = fps

        # Window setup
        self.window_width = config.width * cell_size
        self.window_height = config.height * cell_size + PANEL_HEIGHT

        pygame.init()
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Forest Fire")
        self.clock = pygame.time.Clock()

        # Simulation on its own thread
        self.model = ForestFireModel(config)
        self.cancel = threading.Event()
        self.driver = SimulationDriver(self.model, cancel=self.cancel)

        # Visualization components
        self.renderer = GridRenderer(cell_size)
        self.info_panel = InfoPanel()
        panel_top = config.height * cell_size
        self.slider = SpeedSlider(
            x=self.window_width // 2 - min(150, self.window_width // 4),
            y=panel_top + PANEL_HEIGHT - 30,
            width=min(300, self.window_width // 2),
            height=14,
            min_val=MIN_TPS,
            max_val=MAX_TPS,
        )
        self.dragging_slider = False

        # Local frame buffer, refreshed under the lock once per frame
        self.frame = self.model.channel.new_buffer()

    def _handle_keyboard_events(self, event: pygame.event.Event) -> bool:
        """Handle keyboard input events.

        Args:
            event: The keyboard event to process.

        Returns:
            False if the simulation should quit, True otherwise.
        """
        if event.key == pygame.K_ESCAPE:
            return False

        elif event.key == pygame.K_SPACE:
            self.driver.toggle_pause()

        elif event.key == pygame.K_n:
            self.driver.step_once()

        elif event.key == pygame.K_r:
            self.model.reset()

        return True

    def _handle_mouse_events(self, event: pygame.event.Event) -> None:
        """Handle slider dragging and click-to-ignite.

        Args:
            event: The mouse event to process.
        """
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            new_rate = self.slider.handle_click(*event.pos)
            if new_rate is not None:
                self.dragging_slider = True
                self.driver.tick_rate = new_rate
                return
            cell = self.renderer.pixel_to_cell(*event.pos, self.grid_width, self.grid_height)
            if cell is not None:
                self.model.ignite(*cell)

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging_slider = False

        elif event.type == pygame.MOUSEMOTION and self.dragging_slider:
            new_rate = self.slider.handle_click(*event.pos)
            if new_rate is not None:
                self.driver.tick_rate = new_rate

    def _render(self) -> None:
        """Render all visual components to the screen."""
        # Copy under the lock; everything below works on the local copy
        self.model.channel.copy_into(self.frame)

        # LAYER 0: Background
        self.renderer.draw_background(self.screen)

        # LAYER 1: Grid
        self.renderer.draw_base(self.screen, self.frame)

        # LAYER 2: UI
        self.info_panel.draw(
            self.screen,
            self.model.get_stats(),
            self.driver.paused,
            self.driver.tick_rate,
            self.grid_height * self.cell_size,
            self.window_width,
            PANEL_HEIGHT,
        )
        self.slider.draw(self.screen, self.driver.tick_rate)

        pygame.display.flip()

    def run(self) -> None:
        """Run the view loop until the user quits or the simulation fails."""
        self.driver.start()
        try:
            while not self.cancel.is_set():
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.cancel.set()

                    elif event.type == pygame.KEYDOWN:
                        if not self._handle_keyboard_events(event):
                            self.cancel.set()

                    else:
                        self._handle_mouse_events(event)

                self._render()
                self.clock.tick(self.fps)
        finally:
            self.driver.stop()
            pygame.quit()
        # re-raises a simulation failure, if any
        self.driver.join()


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the Pygame visualization."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    SimulationConfig.add_arguments(parser)
    view = parser.add_argument_group("view")
    view.add_argument("--cell-size", type=int, default=DEFAULT_CELL_SIZE,
                      help="cell size in pixels (default: %(default)s)")
    view.add_argument("--fps", type=int, default=DEFAULT_FPS,
                      help="view frames per second (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    try:
        config = SimulationConfig.from_namespace(args)
    except ValueError as exc:
        parser.error(str(exc))

    runner = SimulationRunner(config, args.cell_size, args.fps)
    runner.run()


if __name__ == "__main__":
    main()
