"""Fail-safe mechanisms package."""
from pumpswitch.safety.errors import (
    PumpError,
    PersistenceError,
    LockFileError,
    ScheduleFileError,
    ScheduleNotFoundError,
    InconsistentStateError
)

__all__ = [
    'PumpError',
    'PersistenceError',
    'LockFileError',
    'ScheduleFileError',
    'ScheduleNotFoundError',
    'InconsistentStateError',
]
