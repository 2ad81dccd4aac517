"""Utility functions package."""
from pumpswitch.utils.clock import format_local, utc_now
from pumpswitch.utils.duration import parse_duration, format_duration, parse_listen_addr

__all__ = [
    'format_local',
    'utc_now',
    'parse_duration',
    'format_duration',
    'parse_listen_addr',
]
