"""SimulationDriver - runs the model's tick loop on a background thread."""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from .config import MAX_TICK_RATE, MIN_TICK_RATE
from .model import ForestFireModel

logger = logging.getLogger(__name__)

# longest uninterrupted wait while paused
PAUSE_POLL_S = 0.05
# minimum seconds between two overrun warnings
OVERRUN_WARN_INTERVAL_S = 1.0


class SimulationDriver:
    """Owns the tick loop, its pacing and cooperative shutdown.

    The loop checks the cancellation event once per tick, runs one model
    step (which locks the grid only for that tick) and then waits out the
    rest of the tick period on the same event, so ``stop()`` interrupts
    the sleep. A tick that overruns its period delays the next one; no
    tick is ever skipped.

    Provides thread-safe:
      - cancellation (``stop`` / shared ``cancel`` event)
      - pause / resume / single step
      - target tick rate changes
    """

    def __init__(
        self,
        model: ForestFireModel,
        cancel: Optional[threading.Event] = None,
        tick_rate: Optional[float] = None,
    ):
        """
        Args:
            model: The model to advance.
            cancel: Cancellation event shared with the view; a new one is
                created if omitted.
            tick_rate: Target ticks per second; defaults to the model config.
        """
        self.model = model
        self.cancel = cancel if cancel is not None else threading.Event()
        self.tick_rate = tick_rate if tick_rate is not None else model.config.tick_rate

        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.error: Optional[BaseException] = None
        self.ticks_run = 0
        self._last_overrun_warning = 0.0

    # -- public properties --

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(MIN_TICK_RATE, min(float(value), MAX_TICK_RATE))

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # -- lifecycle --

    def start(self) -> None:
        """Run the tick loop on a daemon thread."""
        if self.running:
            return
        self._thread = threading.Thread(target=self._thread_main, name="simulation", daemon=True)
        self._thread.start()
        logger.info(f"Simulation started ({self._tick_rate:.0f} ticks/s)")

    def stop(self) -> None:
        """Ask the loop to exit after the current tick."""
        self.cancel.set()

    def join(self, timeout: Optional[float] = None) -> None:
        """
        Wait for the thread to finish.

        Raises:
            Exception: Whatever ended the tick loop abnormally.
        """
        if self._thread is not None:
            self._thread.join(timeout)
        if self.error is not None:
            raise self.error

    def pause(self) -> None:
        self._paused.set()
        logger.info(f"Simulation paused at tick {self.model.rules.tick_count}")

    def resume(self) -> None:
        self._paused.clear()
        logger.info(f"Simulation resumed at tick {self.model.rules.tick_count}")

    def toggle_pause(self) -> bool:
        """Flip the pause state. Returns True if now paused."""
        if self.paused:
            self.resume()
        else:
            self.pause()
        return self.paused

    def step_once(self) -> None:
        """Execute exactly one tick; pauses the driver first."""
        if not self.paused:
            self.pause()
        self._step_requested.set()

    # -- loop --

    def run(self, max_ticks: Optional[int] = None) -> int:
        """
        Run the tick loop on the calling thread until cancelled.

        Args:
            max_ticks: Stop after this many ticks; None runs until ``stop()``.
                A bounded run returns early once the driver is paused with
                no single step pending.

        Returns:
            Number of ticks executed by this call.
        """
        executed = 0
        while not self.cancel.is_set():
            if max_ticks is not None and executed >= max_ticks:
                break

            if self._paused.is_set() and not self._step_requested.is_set():
                if max_ticks is not None:
                    break
                self.cancel.wait(PAUSE_POLL_S)
                continue
            single_step = self._step_requested.is_set()
            self._step_requested.clear()

            started = time.perf_counter()
            self.model.step()
            executed += 1
            self.ticks_run += 1

            if single_step:
                continue
            period = 1.0 / self._tick_rate
            remaining = period - (time.perf_counter() - started)
            if remaining > 0:
                self.cancel.wait(remaining)
            elif -remaining > period:
                self._warn_overrun(period - remaining, period)
        return executed

    def _thread_main(self) -> None:
        logger.info("Simulation thread started.")
        try:
            self.run()
        except Exception as exc:
            logger.exception(f"Simulation aborted at tick {self.model.rules.tick_count}")
            self.error = exc
            self.cancel.set()
        logger.info("Simulation thread exited.")

    def _warn_overrun(self, elapsed: float, period: float) -> None:
        now = time.monotonic()
        if now - self._last_overrun_warning < OVERRUN_WARN_INTERVAL_S:
            return
        self._last_overrun_warning = now
        logger.warning(
            f"Tick took {elapsed * 1000:.1f} ms, tick period is {period * 1000:.1f} ms"
        )
