"""Mock GPIO implementation for development/testing."""
from typing import Dict, Set
from pumpswitch.hardware.gpio_interface import GPIOInterface


class MockGPIO(GPIOInterface):
    """Mock GPIO that keeps output levels in memory."""

    def __init__(self):
        """Initialize mock GPIO."""
        self.output_pins: Set[int] = set()
        self.pin_states: Dict[int, bool] = {}  # pin -> level, survives setup like a real line

    def setup_output(self, pin: int):
        """Configure an output pin, keeping any level it already has."""
        self.output_pins.add(pin)
        self.pin_states.setdefault(pin, False)

    def read_pin(self, pin: int) -> bool:
        """Read the level of an output pin."""
        if pin not in self.output_pins:
            raise ValueError(f"Pin {pin} not set up")

        return self.pin_states[pin]

    def write_pin(self, pin: int, value: bool):
        """Drive an output pin."""
        if pin not in self.output_pins:
            raise ValueError(f"Pin {pin} not set up")

        self.pin_states[pin] = bool(value)

    def set_pin_state(self, pin: int, value: bool):
        """Manually force a pin level for testing (e.g. relay left on by a crash)."""
        self.pin_states[pin] = bool(value)

    def cleanup(self):
        """Release every configured pin."""
        self.output_pins.clear()
        self.pin_states.clear()
