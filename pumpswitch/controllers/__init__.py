"""Pump controllers package."""
from pumpswitch.controllers.event_log import EventLog
from pumpswitch.controllers.pump_controller import PumpController

__all__ = [
    'EventLog',
    'PumpController',
]
