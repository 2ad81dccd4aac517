"""Real GPIO implementation for Raspberry Pi."""
try:
    import RPi.GPIO as GPIO
    RPI_GPIO_AVAILABLE = True
except (ImportError, RuntimeError):
    RPI_GPIO_AVAILABLE = False
    GPIO = None

from pumpswitch.hardware.gpio_interface import GPIOInterface


class RealGPIO(GPIOInterface):
    """Relay output pins driven through RPi.GPIO (BCM numbering)."""

    def __init__(self):
        """Initialize real GPIO."""
        if not RPI_GPIO_AVAILABLE:
            raise ImportError("RPi.GPIO is not available. Install it with: pip install RPi.GPIO")

        GPIO.setmode(GPIO.BCM)
        # A relay left on by a previous run triggers "channel already in use"
        GPIO.setwarnings(False)
        self.output_pins = set()

    def setup_output(self, pin: int):
        """Configure an output pin without writing an initial level."""
        GPIO.setup(pin, GPIO.OUT)
        self.output_pins.add(pin)

    def read_pin(self, pin: int) -> bool:
        """Read back the level an output pin is driving."""
        if pin not in self.output_pins:
            raise ValueError(f"Pin {pin} not set up")

        return GPIO.input(pin) == GPIO.HIGH

    def write_pin(self, pin: int, value: bool):
        """Drive an output pin."""
        if pin not in self.output_pins:
            raise ValueError(f"Pin {pin} not set up")

        GPIO.output(pin, GPIO.HIGH if value else GPIO.LOW)

    def cleanup(self):
        """Release every configured pin."""
        GPIO.cleanup()
        self.output_pins.clear()
