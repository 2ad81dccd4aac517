"""Bounded in-memory log of pump start/stop events."""
from collections import deque
from datetime import datetime
from typing import Callable, List

from pumpswitch.utils.clock import format_local, utc_now

EVENT_LOG_CAPACITY = 100


class EventLog:
    """
    Ring of human-readable events, oldest evicted first.

    Not thread safe on its own; the pump controller serializes access.
    """

    def __init__(self, capacity: int = EVENT_LOG_CAPACITY, clock: Callable[[], datetime] = utc_now):
        self.entries = deque(maxlen=capacity)
        self.clock = clock

    def add(self, text: str):
        self.entries.append(f"{text}: {format_local(self.clock())}")

    def snapshot(self) -> List[str]:
        return list(self.entries)

    def __len__(self):
        return len(self.entries)
