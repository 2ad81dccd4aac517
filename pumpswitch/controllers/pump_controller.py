"""Pump state controller."""
import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from pumpswitch.config.config import PumpConfig
from pumpswitch.controllers.event_log import EventLog
from pumpswitch.hardware.relay_switch import RelaySwitch
from pumpswitch.safety.errors import (
    InconsistentStateError, LockFileError, ScheduleFileError, ScheduleNotFoundError
)
from pumpswitch.storage.lock_store import LockStatus, LockStore
from pumpswitch.storage.schedule_store import ScheduleStore, build_cron_line
from pumpswitch.utils.clock import format_local, utc_now

logger = logging.getLogger(__name__)


class PumpController:
    """
    Single owner of the pump relay, the lock file and the schedule file.

    Every read and transition runs under one lock, so the relay level and the
    recorded start time are always observed and changed together.
    """

    def __init__(self, config: PumpConfig, relay: RelaySwitch,
                 lock_store: Optional[LockStore] = None,
                 schedule_store: Optional[ScheduleStore] = None,
                 clock: Callable[[], datetime] = utc_now):
        """
        Initialize pump controller.

        Args:
            config: Runtime configuration
            relay: Relay switch driving the pump
            lock_store: Lock file store (defaults to config.lock_file)
            schedule_store: Schedule file store (defaults to config.cron_file)
            clock: Source of the current time (aware UTC datetimes)
        """
        self.config = config
        self.relay = relay
        self.lock_store = lock_store or LockStore(config.lock_file)
        self.schedule_store = schedule_store or ScheduleStore(config.cron_file)
        self.clock = clock
        self.event_log = EventLog(clock=clock)
        self._lock = threading.Lock()

    def status(self) -> Dict[str, any]:
        """
        Get the pump state.

        Returns:
            Dictionary with 'is_on', 'on_duration' (timedelta) and 'started_at'
            (None when off, or when on without a lock file)

        Raises:
            InconsistentStateError: the pump is on and the lock file is corrupt
                or unreadable; power has already been forced off
        """
        with self._lock:
            return self._status_locked()

    def power_on(self):
        """
        Energize the pump and record the start time.

        Raises:
            LockFileError: the start time could not be recorded; the pump is left off
        """
        with self._lock:
            started_at = self.clock()
            try:
                self.lock_store.write(started_at)
            except LockFileError:
                logger.error("Cannot record pump start time, keeping pump off", exc_info=True)
                self.relay.deenergize()
                self._clear_lock_quietly()
                self.event_log.add("pump start failed")
                raise

            try:
                self.relay.energize()
            except Exception:
                self._clear_lock_quietly()
                raise

            self.event_log.add("pump start")
            logger.info(f"Pump started at {format_local(started_at)}")

    def power_off(self):
        """
        De-energize the pump and remove the lock file.

        Raises:
            LockFileError: the lock file exists but could not be removed
        """
        with self._lock:
            self._power_off_locked()

    def enable_cycle(self, intervals: Optional[str] = None):
        """
        Enable periodic power-on by writing the cron file.

        An existing cron file is left untouched.

        Args:
            intervals: Cron minute/hour fields (defaults to config.cron_intervals)
        """
        intervals = intervals or self.config.cron_intervals
        with self._lock:
            created = self.schedule_store.create(build_cron_line(intervals, self.config.listen_addr))

        if created:
            logger.info(f"Periodic power-on enabled: {intervals}")
        else:
            logger.debug("Periodic power-on already enabled")

    def disable_cycle(self):
        """
        Disable periodic power-on by removing the cron file.

        Raises:
            ScheduleNotFoundError: periodic power-on is not enabled
        """
        with self._lock:
            self.schedule_store.delete()
        logger.info("Periodic power-on disabled")

    def is_cycle_enabled(self) -> bool:
        """Check whether the cron file is present."""
        with self._lock:
            return self.schedule_store.exists()

    def recent_log(self) -> str:
        """Recent start/stop events, oldest first."""
        with self._lock:
            return "\n".join(self.event_log.snapshot())

    def reconcile(self) -> bool:
        """
        Startup check: power off a pump that is on without a known start time.

        Returns:
            True if the pump was powered off
        """
        with self._lock:
            status = self._status_locked()
            if status['is_on'] and status['started_at'] is None:
                logger.warning("Pump is on with unknown start time, powering off")
                self._power_off_locked()
                return True
        return False

    def cutoff_if_overrun(self, max_on_duration: timedelta) -> bool:
        """
        Power off when the pump has been on longer than max_on_duration.

        A pump that is on without a lock file has no bounded run time and is
        powered off as well.

        Returns:
            True if the pump was powered off
        """
        with self._lock:
            status = self._status_locked()
            if not status['is_on']:
                return False

            if status['started_at'] is None:
                logger.warning("Pump is on without a lock file, powering off")
            elif status['on_duration'] > max_on_duration:
                logger.warning(f"Pump on for {status['on_duration']}, over the {max_on_duration} limit, powering off")
            else:
                return False

            self._power_off_locked()
            return True

    def _status_locked(self) -> Dict[str, any]:
        if not self.relay.is_energized():
            return {'is_on': False, 'on_duration': timedelta(0), 'started_at': None}

        record = self.lock_store.read()
        if record.status is LockStatus.ABSENT:
            return {'is_on': True, 'on_duration': timedelta(0), 'started_at': None}

        if record.status is LockStatus.CORRUPT:
            self._fail_safe_locked(record.reason)

        on_duration = self.clock() - record.started_at
        if on_duration < timedelta(0):
            self._fail_safe_locked(f"pump start time {record.started_at} is in the future")

        return {'is_on': True, 'on_duration': on_duration, 'started_at': record.started_at}

    def _power_off_locked(self):
        self.relay.deenergize()
        self.event_log.add("pump stop")
        logger.info("Pump stopped")
        self.lock_store.clear()

    def _fail_safe_locked(self, reason: str):
        logger.critical(f"Inconsistent pump state ({reason}), forcing power off and disabling schedule")
        try:
            self._power_off_locked()
        except LockFileError:
            logger.error("Cannot remove lock file during fail-safe", exc_info=True)

        try:
            self.schedule_store.delete()
        except ScheduleNotFoundError:
            pass
        except ScheduleFileError:
            logger.error("Cannot remove schedule file during fail-safe", exc_info=True)

        raise InconsistentStateError(reason)

    def _clear_lock_quietly(self):
        try:
            self.lock_store.clear()
        except LockFileError:
            logger.error("Cannot remove lock file", exc_info=True)
