"""Duration and listen address conversion utilities."""
import math
import re
from datetime import timedelta
from typing import Tuple

# Seconds per unit
DURATION_UNITS = {
    'h': 3600.0,
    'm': 60.0,
    's': 1.0,
    'ms': 0.001,
}

_DURATION_PART = re.compile(r'(\d+(?:\.\d+)?)(ms|h|m|s)')


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration such as '15m', '1h30m', '15m0s', '90s' or '900'.

    A bare number is taken as seconds.

    Args:
        text: Duration text

    Returns:
        Parsed duration
    """
    value = text.strip().lower()
    if not value:
        raise ValueError("Empty duration")

    try:
        seconds = float(value)
    except ValueError:
        pos = 0
        seconds = 0.0
        for match in _DURATION_PART.finditer(value):
            if match.start() != pos:
                break
            seconds += float(match.group(1)) * DURATION_UNITS[match.group(2)]
            pos = match.end()
        if pos != len(value):
            raise ValueError(f"Invalid duration: {text!r}")

    if not math.isfinite(seconds) or seconds < 0:
        raise ValueError(f"Invalid duration: {text!r}")

    return timedelta(seconds=seconds)


def format_duration(duration: timedelta) -> str:
    """
    Format a duration truncated to whole seconds, e.g. '1h2m3s', '15m0s', '7s'.
    """
    total = int(duration.total_seconds())
    sign = '-' if total < 0 else ''
    total = abs(total)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def parse_listen_addr(addr: str) -> Tuple[str, int]:
    """
    Split a listen address like ':8111' or '127.0.0.1:8080' into host and port.

    An empty host means all interfaces.
    """
    host, sep, port = addr.rpartition(':')
    if not sep:
        raise ValueError(f"Listen address must contain a port: {addr!r}")

    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"Invalid port in listen address: {addr!r}")

    if not 0 <= port_number < 65536:
        raise ValueError(f"Port out of range in listen address: {addr!r}")

    return (host or '0.0.0.0'), port_number
