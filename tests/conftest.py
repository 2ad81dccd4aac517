"""Shared pytest fixtures for testing."""
import time
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock
from pumpswitch.app import create_app
from pumpswitch.config.config import PumpConfig
from pumpswitch.controllers.pump_controller import PumpController
from pumpswitch.hardware.mock_gpio import MockGPIO
from pumpswitch.hardware.relay_switch import RelaySwitch
from pumpswitch.safety.watchdog import Watchdog

RELAY_PIN = 18


class FakeClock:
    """Controllable replacement for the UTC wall clock."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def local_timezone(monkeypatch):
    """Pin the host time zone (UTC unless a test switches it) for formatted timestamps."""
    def set_zone(name: str):
        monkeypatch.setenv('TZ', name)
        time.tzset()

    set_zone('UTC')
    yield set_zone
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def fake_clock():
    """Create a fake clock starting at a whole second."""
    return FakeClock()


@pytest.fixture
def mock_gpio():
    """Create a mock GPIO instance."""
    return MockGPIO()


@pytest.fixture
def pump_config(tmp_path):
    """Create a configuration with lock and cron files in a temporary directory."""
    return PumpConfig(
        relay_pin=RELAY_PIN,
        max_on_duration=timedelta(minutes=15),
        listen_addr=':8111',
        cron_intervals='0 0,6,12,18',
        lock_file=str(tmp_path / 'pump.running.lock'),
        cron_file=str(tmp_path / 'pumpon'),
        watchdog_interval=timedelta(seconds=10),
        use_mock_gpio=True,
    )


@pytest.fixture
def relay(mock_gpio, pump_config):
    """Create a relay switch on the mock GPIO."""
    return RelaySwitch(mock_gpio, pump_config.relay_pin)


@pytest.fixture
def controller(pump_config, relay, fake_clock):
    """Create a pump controller with a fake clock."""
    return PumpController(pump_config, relay, clock=fake_clock)


@pytest.fixture
def watchdog(controller, pump_config):
    """Create a watchdog that is ticked by hand."""
    return Watchdog(controller, pump_config.max_on_duration, interval=pump_config.watchdog_interval)


@pytest.fixture
def fatal_handler():
    """Record fatal pump state errors raised during requests."""
    return Mock()


@pytest.fixture
def app(pump_config, controller, fatal_handler):
    """Create Flask app for testing."""
    flask_app = create_app(pump_config, controller, fatal_handler=fatal_handler)
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()
