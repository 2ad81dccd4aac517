"""Error types raised by the pump controller and its stores."""


class PumpError(Exception):
    """Base class for pump controller errors."""
    pass


class PersistenceError(PumpError):
    """A lock or schedule file could not be read, written or removed."""
    pass


class LockFileError(PersistenceError):
    """Lock file I/O failure."""
    pass


class ScheduleFileError(PersistenceError):
    """Schedule (cron) file I/O failure."""
    pass


class ScheduleNotFoundError(ScheduleFileError):
    """Disabling the schedule when no schedule file exists."""
    pass


class InconsistentStateError(PumpError):
    """
    The relay is energized but its start time is missing or corrupt.

    Raised only after the controller has forced the safe state (power off,
    schedule disabled). The process is expected to exit.
    """
    pass
