"""File-backed persistence for the lock and schedule markers."""
from pumpswitch.storage.lock_store import LockStore, LockRecord, LockStatus
from pumpswitch.storage.schedule_store import ScheduleStore, build_cron_line

__all__ = [
    'LockStore',
    'LockRecord',
    'LockStatus',
    'ScheduleStore',
    'build_cron_line',
]
