"""Abstract GPIO interface for hardware abstraction."""
from abc import ABC, abstractmethod


class GPIOInterface(ABC):
    """Abstract base class for the digital output pins driving relays."""

    @abstractmethod
    def setup_output(self, pin: int):
        """
        Configure a GPIO pin as a digital output.

        Must not change the pin's current level, so a relay left energized
        by a previous process stays observable.

        Args:
            pin: GPIO pin number (BCM)
        """
        pass

    @abstractmethod
    def read_pin(self, pin: int) -> bool:
        """
        Read the logic level of an output pin.

        Args:
            pin: GPIO pin number

        Returns:
            True for HIGH, False for LOW
        """
        pass

    @abstractmethod
    def write_pin(self, pin: int, value: bool):
        """
        Drive an output pin.

        Args:
            pin: GPIO pin number
            value: True for HIGH, False for LOW
        """
        pass

    @abstractmethod
    def cleanup(self):
        """Release every configured pin."""
        pass
