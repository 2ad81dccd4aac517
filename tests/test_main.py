"""Tests for the command line entry point."""
import pytest
from datetime import timedelta
from unittest.mock import patch
import main
from pumpswitch.config import config as config_module


class TestMain:
    """Test flag handling and exit codes."""

    def test_runs_service_with_flags(self):
        """Test that flags reach the service configuration and the run result is returned."""
        with patch('main.PumpService') as service_cls:
            service_cls.return_value.run.return_value = 0

            result = main.main(['--pin', '17', '--cycle', '20m', '--http', ':9000', '--mock-gpio'])

        assert result == 0
        config = service_cls.call_args[0][0]
        assert config.relay_pin == 17
        assert config.max_on_duration == timedelta(minutes=20)
        assert config.listen_addr == ':9000'
        assert config.use_mock_gpio is True
        service_cls.return_value.install_signal_handlers.assert_called_once()

    def test_fatal_exit_code(self):
        """Test that an inconsistent-state exit code is passed through."""
        with patch('main.PumpService') as service_cls:
            service_cls.return_value.run.return_value = 1

            assert main.main(['--mock-gpio']) == 1

    def test_gpio_unavailable(self):
        """Test that a missing GPIO library exits with 1 before serving."""
        with patch('main.PumpService', side_effect=ImportError('RPi.GPIO is not available')) as service_cls:
            assert main.main([]) == 1

        service_cls.assert_called_once()

    def test_invalid_listen_address_is_usage_error(self):
        """Test that a bad listen address exits through the argument parser."""
        with patch('main.PumpService') as service_cls:
            with pytest.raises(SystemExit) as exc_info:
                main.main(['--http', 'localhost'])

        assert exc_info.value.code == 2
        service_cls.assert_not_called()

    def test_bad_duration_env_only_fails_without_flag(self, monkeypatch):
        """Test that a bad default duration is reported by the parser and overridable."""
        monkeypatch.setattr(config_module, 'PUMP_MAX_ON_DURATION', 'forever')

        with patch('main.PumpService') as service_cls:
            service_cls.return_value.run.return_value = 0
            assert main.main(['--cycle', '5m', '--mock-gpio']) == 0

            with pytest.raises(SystemExit) as exc_info:
                main.main(['--mock-gpio'])

        assert exc_info.value.code == 2
        assert service_cls.call_args[0][0].max_on_duration == timedelta(minutes=5)
