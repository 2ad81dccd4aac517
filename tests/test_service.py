"""Tests for the service lifecycle."""
import dataclasses
import os
import signal
import socket
import threading
import pytest
from pumpswitch.hardware.mock_gpio import MockGPIO
from pumpswitch.safety.errors import InconsistentStateError
from pumpswitch.service import PumpService, create_gpio

RELAY_PIN = 18


@pytest.fixture
def service_config(pump_config):
    """Configuration listening on an ephemeral local port."""
    return dataclasses.replace(pump_config, listen_addr='127.0.0.1:0')


@pytest.fixture
def service(service_config, mock_gpio, fake_clock):
    """Create a service on the mock GPIO."""
    return PumpService(service_config, gpio=mock_gpio, clock=fake_clock)


class TestPumpService:
    """Test start, shutdown and fatal exit paths."""

    def test_create_gpio_mock(self, service_config):
        """Test that the mock driver is picked when configured."""
        assert isinstance(create_gpio(service_config), MockGPIO)

    def test_start_reconciles_before_serving(self, service, mock_gpio):
        """Test that a relay left on without a lock file is off once started."""
        mock_gpio.set_pin_state(RELAY_PIN, True)

        service.start()
        try:
            assert mock_gpio.read_pin(RELAY_PIN) is False
            assert service.server is not None
            assert service.server_thread.is_alive()
            assert service.watchdog.is_running is True
        finally:
            service.stop()

    def test_start_keeps_known_run(self, service, mock_gpio):
        """Test that a run with a valid lock file survives startup."""
        service.controller.power_on()

        service.start()
        try:
            assert mock_gpio.read_pin(RELAY_PIN) is True
        finally:
            service.stop()

    def test_start_corrupt_lock_raises(self, service, mock_gpio, service_config):
        """Test that a corrupt lock file at startup escalates after powering off."""
        mock_gpio.set_pin_state(RELAY_PIN, True)
        with open(service_config.lock_file, 'w') as f:
            f.write('corrupt')

        with pytest.raises(InconsistentStateError):
            service.start()

        assert mock_gpio.read_pin(RELAY_PIN) is False
        assert service.server is None

    def test_run_graceful_shutdown(self, service, service_config):
        """Test that a shutdown request powers off and exits with 0."""
        service.controller.power_on()
        service.request_shutdown(signal.SIGTERM)

        assert service.run() == 0
        assert not os.path.exists(service_config.lock_file)
        assert service.server is None
        assert service.watchdog.is_running is False

    def test_run_shutdown_from_another_thread(self, service):
        """Test that run blocks until shutdown is requested."""
        result = []
        runner = threading.Thread(target=lambda: result.append(service.run()))
        runner.start()

        for _ in range(500):
            if service.server_thread is not None:
                break
            threading.Event().wait(0.01)
        service.request_shutdown(signal.SIGINT)
        service.request_shutdown(signal.SIGINT)
        runner.join(timeout=10)

        assert not runner.is_alive()
        assert result == [0]

    def test_run_corrupt_lock_exits_with_error(self, service, mock_gpio, service_config):
        """Test that an inconsistent state at startup exits with 1."""
        service.controller.enable_cycle()
        mock_gpio.set_pin_state(RELAY_PIN, True)
        with open(service_config.lock_file, 'w') as f:
            f.write('corrupt')

        assert service.run() == 1
        assert not os.path.exists(service_config.lock_file)
        assert not os.path.exists(service_config.cron_file)

    def test_fatal_during_run_exits_with_error(self, service):
        """Test that a fatal error reported by the watchdog ends the run with 1."""
        service.fatal(InconsistentStateError('lock file vanished'))

        assert service.run() == 1
        assert str(service.fatal_error) == 'lock file vanished'

    def test_install_signal_handlers(self, service):
        """Test that SIGINT and SIGTERM trigger a shutdown."""
        previous_int = signal.getsignal(signal.SIGINT)
        previous_term = signal.getsignal(signal.SIGTERM)
        try:
            service.install_signal_handlers()
            assert signal.getsignal(signal.SIGINT) == service.request_shutdown
            assert signal.getsignal(signal.SIGTERM) == service.request_shutdown
        finally:
            signal.signal(signal.SIGINT, previous_int)
            signal.signal(signal.SIGTERM, previous_term)

    def test_run_port_in_use_still_powers_off(self, service_config, mock_gpio, fake_clock):
        """Test that a failed bind still stops the watchdog, powers off and releases GPIO."""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
            busy.bind(('127.0.0.1', 0))
            busy.listen(1)
            port = busy.getsockname()[1]
            config = dataclasses.replace(service_config, listen_addr=f'127.0.0.1:{port}')
            service = PumpService(config, gpio=mock_gpio, clock=fake_clock)
            service.controller.power_on()

            with pytest.raises((SystemExit, OSError)):
                service.run()

        assert service.watchdog.is_running is False
        assert service.watchdog.thread is None
        assert not os.path.exists(config.lock_file)
        assert service.controller.event_log.snapshot()[-1].startswith('pump stop')
        assert mock_gpio.output_pins == set()
