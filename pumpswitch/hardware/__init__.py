"""Hardware abstraction package."""
from pumpswitch.hardware.gpio_interface import GPIOInterface
from pumpswitch.hardware.mock_gpio import MockGPIO
from pumpswitch.hardware.real_gpio import RealGPIO
from pumpswitch.hardware.relay_switch import RelaySwitch

__all__ = [
    'GPIOInterface',
    'MockGPIO',
    'RealGPIO',
    'RelaySwitch',
]
