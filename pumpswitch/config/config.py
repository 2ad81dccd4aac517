"""System configuration settings."""
import argparse
import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional, Sequence

from pumpswitch.utils.duration import parse_duration, parse_listen_addr

# Environment detection
IS_RASPBERRY_PI = os.path.exists('/proc/device-tree/model') or os.getenv('USE_REAL_GPIO', 'false').lower() == 'true'
USE_MOCK_HARDWARE = not IS_RASPBERRY_PI or os.getenv('USE_MOCK_HARDWARE', 'false').lower() == 'true'

# GPIO Pin Configuration
PUMP_GPIO_PIN = int(os.getenv('PUMP_GPIO_PIN', '18'))

# Cron intervals (minute and hour fields) for periodic power-on
PUMP_CRON_INTERVALS = os.getenv('PUMP_CRON_INTERVALS', '0 0,6,12,18')

# Safety settings
PUMP_MAX_ON_DURATION = os.getenv('PUMP_MAX_ON_DURATION', '15m')
WATCHDOG_INTERVAL_SEC = 10.0

# HTTP
PUMP_HTTP_LISTEN = os.getenv('PUMP_HTTP_LISTEN', ':8111')

# Files (not exposed as flags)
PUMP_LOCK_FILE = 'pump.running.lock'
PUMP_ON_CRON_FILE = '/etc/cron.d/pumpon'

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


@dataclass(frozen=True)
class PumpConfig:
    """Immutable runtime configuration, built once at startup."""
    relay_pin: int = PUMP_GPIO_PIN
    max_on_duration: timedelta = field(default_factory=lambda: parse_duration(PUMP_MAX_ON_DURATION))
    listen_addr: str = PUMP_HTTP_LISTEN
    cron_intervals: str = PUMP_CRON_INTERVALS
    lock_file: str = PUMP_LOCK_FILE
    cron_file: str = PUMP_ON_CRON_FILE
    watchdog_interval: timedelta = timedelta(seconds=WATCHDOG_INTERVAL_SEC)
    use_mock_gpio: bool = USE_MOCK_HARDWARE

    def __post_init__(self):
        if self.max_on_duration <= timedelta(0):
            raise ValueError("max_on_duration must be positive")
        if self.watchdog_interval <= timedelta(0):
            raise ValueError("watchdog_interval must be positive")
        if not self.cron_intervals.strip():
            raise ValueError("cron_intervals must not be empty")
        parse_listen_addr(self.listen_addr)


def _duration_arg(value: str) -> timedelta:
    try:
        return parse_duration(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_arg_parser() -> argparse.ArgumentParser:
    """Command line flags; defaults come from the environment."""
    parser = argparse.ArgumentParser(description='Relay pump switch with HTTP control')
    parser.add_argument('--pin', type=int, default=PUMP_GPIO_PIN,
                        help='GPIO (BCM) relay pin (default: %(default)s)')
    parser.add_argument('--pcron', default=PUMP_CRON_INTERVALS,
                        help='cron minute/hour fields for periodic power-on (default: %(default)r)')
    parser.add_argument('--cycle', type=_duration_arg, default=PUMP_MAX_ON_DURATION,
                        help='maximum power-on duration, e.g. 15m, 1h30m or seconds (default: %(default)s)')
    parser.add_argument('--http', default=PUMP_HTTP_LISTEN,
                        help='HTTP listen address (default: %(default)s)')
    parser.add_argument('--mock-gpio', action='store_true', default=USE_MOCK_HARDWARE,
                        help='use the in-memory GPIO driver instead of RPi.GPIO')
    parser.add_argument('--log-level', default=LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        type=str.upper, help='logging level (default: %(default)s)')
    return parser


def config_from_namespace(args: argparse.Namespace) -> PumpConfig:
    """Build a PumpConfig from parsed flags."""
    return PumpConfig(
        relay_pin=args.pin,
        max_on_duration=args.cycle,
        listen_addr=args.http,
        cron_intervals=args.pcron,
        use_mock_gpio=args.mock_gpio,
    )


def config_from_args(argv: Optional[Sequence[str]] = None) -> PumpConfig:
    """
    Parse command line flags into a PumpConfig.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Immutable configuration
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        return config_from_namespace(args)
    except ValueError as e:
        parser.error(str(e))
