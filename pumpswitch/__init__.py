"""Single-relay water pump switch with HTTP control and a run-time watchdog."""

__version__ = '1.0.0'
