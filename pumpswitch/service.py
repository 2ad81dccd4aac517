"""Process lifecycle: hardware, controller, watchdog, HTTP server and shutdown."""
import logging
import signal
import threading
from datetime import datetime
from typing import Callable, Optional

from werkzeug.serving import make_server

from pumpswitch.app import create_app
from pumpswitch.config.config import PumpConfig
from pumpswitch.controllers.pump_controller import PumpController
from pumpswitch.hardware.gpio_interface import GPIOInterface
from pumpswitch.hardware.mock_gpio import MockGPIO
from pumpswitch.hardware.real_gpio import RealGPIO
from pumpswitch.hardware.relay_switch import RelaySwitch
from pumpswitch.safety.errors import InconsistentStateError, PersistenceError
from pumpswitch.safety.watchdog import Watchdog
from pumpswitch.utils.clock import utc_now
from pumpswitch.utils.duration import parse_listen_addr

logger = logging.getLogger(__name__)


def create_gpio(config: PumpConfig) -> GPIOInterface:
    """Pick the GPIO driver for this host."""
    if config.use_mock_gpio:
        logger.warning("Using mock GPIO, the relay is not driven")
        return MockGPIO()
    return RealGPIO()


class PumpService:
    """Owns every long-lived component and is the only place the process stops."""

    def __init__(self, config: PumpConfig, gpio: Optional[GPIOInterface] = None,
                 clock: Callable[[], datetime] = utc_now):
        """
        Initialize pump service.

        Args:
            config: Runtime configuration
            gpio: GPIO driver (picked from config when omitted)
            clock: Source of the current time (aware UTC datetimes)
        """
        self.config = config
        self.gpio = gpio or create_gpio(config)
        self.relay = RelaySwitch(self.gpio, config.relay_pin)
        self.controller = PumpController(config, self.relay, clock=clock)
        self.watchdog = Watchdog(self.controller, config.max_on_duration,
                                 interval=config.watchdog_interval, on_fatal=self.fatal)
        self.app = create_app(config, self.controller, fatal_handler=self.fatal)

        self.server = None
        self.server_thread: Optional[threading.Thread] = None
        self.fatal_error: Optional[InconsistentStateError] = None
        self._shutdown = threading.Event()

    def install_signal_handlers(self):
        """Route SIGINT/SIGTERM to a graceful shutdown."""
        signal.signal(signal.SIGINT, self.request_shutdown)
        signal.signal(signal.SIGTERM, self.request_shutdown)

    def request_shutdown(self, signum=None, frame=None):
        """Ask the service to stop; repeated requests are ignored."""
        if self._shutdown.is_set():
            return
        logger.info(f"Stopping pumpswitch (signal {signum}) ...")
        self._shutdown.set()

    def fatal(self, error: InconsistentStateError):
        """Record an unrecoverable pump state error and stop the service."""
        if self.fatal_error is None:
            self.fatal_error = error
        self._shutdown.set()

    def start(self):
        """
        Reconcile the relay with the lock file, bind the HTTP server, then start the watchdog and serve.

        Raises:
            InconsistentStateError: the relay is on and the lock file is corrupt
        """
        if self.controller.reconcile():
            logger.warning("Powered off pump with unknown start time")

        host, port = parse_listen_addr(self.config.listen_addr)
        self.server = make_server(host, port, self.app, threaded=True)

        self.watchdog.start()

        self.server_thread = threading.Thread(target=self.server.serve_forever, name='http-server', daemon=True)
        self.server_thread.start()
        logger.info(f"Listening on {host}:{port}")

    def wait(self):
        """Block until shutdown is requested."""
        while not self._shutdown.wait(timeout=1.0):
            pass

    def stop(self):
        """Stop serving and power the pump off."""
        if self.server is not None:
            # shutdown() waits for serve_forever, which may never have started
            if self.server_thread is not None:
                self.server.shutdown()
            self.server.server_close()
            self.server = None

        self.watchdog.stop()

        try:
            self.controller.power_off()
        except PersistenceError as e:
            logger.error(f"Error powering off pump during shutdown: {e}")

        self.gpio.cleanup()

    def run(self) -> int:
        """
        Run until a signal or a fatal pump state error.

        Returns:
            Process exit code (0 on graceful shutdown, 1 on inconsistent state)
        """
        try:
            self.start()
        except InconsistentStateError as e:
            self.fatal(e)
        else:
            self.wait()
        finally:
            # Also runs when startup dies on a busy port or another OS error
            self.stop()

        if self.fatal_error is not None:
            logger.critical(f"Exiting on inconsistent pump state: {self.fatal_error}")
            return 1

        logger.info("pumpswitch stopped")
        return 0
