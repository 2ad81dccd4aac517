"""Watchdog enforcing the maximum pump run time."""
import logging
import threading
from datetime import timedelta
from typing import Callable, Optional

from pumpswitch.controllers.pump_controller import PumpController
from pumpswitch.safety.errors import InconsistentStateError

logger = logging.getLogger(__name__)


class Watchdog:
    """Background loop that powers the pump off once it runs too long."""

    def __init__(self, controller: PumpController, max_on_duration: timedelta,
                 interval: timedelta = timedelta(seconds=10),
                 on_fatal: Optional[Callable[[InconsistentStateError], None]] = None):
        """
        Initialize watchdog.

        Args:
            controller: Pump controller to supervise
            max_on_duration: Longest allowed continuous run
            interval: Time between checks; a run is cut off at most this late
            on_fatal: Called with the error when the pump state is inconsistent
        """
        self.controller = controller
        self.max_on_duration = max_on_duration
        self.interval = interval
        self.on_fatal = on_fatal
        self.is_running = False
        self.thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    def start(self) -> 'Watchdog':
        """Start the watchdog thread."""
        if self.is_running:
            return self

        self.is_running = True
        self._stop_event.clear()
        self.thread = threading.Thread(target=self._watchdog_loop, name='pump-watchdog', daemon=True)
        self.thread.start()
        logger.info(f"Watchdog started (limit {self.max_on_duration}, every {self.interval.total_seconds():g}s)")
        return self

    def stop(self):
        """Stop the watchdog thread."""
        self.is_running = False
        self._stop_event.set()
        if self.thread and self.thread is not threading.current_thread():
            self.thread.join(timeout=5)

    def tick(self) -> bool:
        """
        Run one check.

        Returns:
            True if the pump was powered off

        Raises:
            InconsistentStateError: the pump state could not be determined
        """
        return self.controller.cutoff_if_overrun(self.max_on_duration)

    def _watchdog_loop(self):
        """Main watchdog loop."""
        while not self._stop_event.wait(self.interval.total_seconds()):
            try:
                self.tick()
            except InconsistentStateError as e:
                logger.critical(f"Watchdog stopped on inconsistent pump state: {e}")
                self.is_running = False
                if self.on_fatal:
                    self.on_fatal(e)
                return
            except Exception as e:
                logger.error(f"Watchdog check failed: {e}", exc_info=True)
