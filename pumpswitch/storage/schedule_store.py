"""Cron file enabling periodic pump activation."""
import logging
import os

from pumpswitch.safety.errors import ScheduleFileError, ScheduleNotFoundError

logger = logging.getLogger(__name__)

# Line consumed by the host cron daemon; calls back the HTTP endpoint
CRON_LINE_TEMPLATE = "{intervals} * * * root curl -X POST http://localhost{listen}/ -d 'poweron=true'\n"


def build_cron_line(intervals: str, listen_addr: str) -> str:
    """Build the cron.d line that powers the pump on at the given intervals."""
    return CRON_LINE_TEMPLATE.format(intervals=intervals, listen=listen_addr)


class ScheduleStore:
    """Presence of the schedule file means periodic activation is enabled."""

    def __init__(self, path: str):
        self.path = path

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def create(self, content: str) -> bool:
        """
        Create the schedule file unless it already exists.

        Args:
            content: File content (a cron line)

        Returns:
            True if the file was created, False if it was already present
        """
        try:
            f = open(self.path, 'x')
        except FileExistsError:
            return False
        except OSError as e:
            raise ScheduleFileError(f"cannot create schedule file {self.path}: {e}") from e

        try:
            with f:
                f.write(content)
            os.chmod(self.path, 0o644)
        except OSError as e:
            # A partial file would read as "enabled" from now on
            self._remove_partial()
            raise ScheduleFileError(f"cannot write schedule file {self.path}: {e}") from e

        return True

    def _remove_partial(self):
        try:
            os.remove(self.path)
        except OSError:
            logger.error(f"Cannot remove partial schedule file {self.path}", exc_info=True)

    def delete(self):
        """Remove the schedule file; a missing file is an error."""
        try:
            os.remove(self.path)
        except FileNotFoundError as e:
            raise ScheduleNotFoundError(f"schedule file {self.path} does not exist") from e
        except OSError as e:
            raise ScheduleFileError(f"cannot remove schedule file {self.path}: {e}") from e
