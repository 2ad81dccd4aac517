"""Relay switch on a single GPIO pin."""
from pumpswitch.hardware.gpio_interface import GPIOInterface


class RelaySwitch:
    """Drives one relay pin; HIGH energizes the relay."""

    def __init__(self, gpio: GPIOInterface, relay_pin: int):
        """
        Initialize relay switch.

        The pin is configured as output but not written, so the current
        relay level survives a process restart and can be reconciled.

        Args:
            gpio: GPIO interface instance
            relay_pin: GPIO pin driving the relay
        """
        self.gpio = gpio
        self.relay_pin = relay_pin

        self.gpio.setup_output(self.relay_pin)

    def energize(self):
        """Drive the relay pin high."""
        self.gpio.write_pin(self.relay_pin, True)

    def deenergize(self):
        """Drive the relay pin low."""
        self.gpio.write_pin(self.relay_pin, False)

    def is_energized(self) -> bool:
        """Read the live pin level."""
        return self.gpio.read_pin(self.relay_pin)
